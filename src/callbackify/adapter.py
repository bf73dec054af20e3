from __future__ import annotations
import asyncio
import functools
from typing import Any, Callable, Optional, Set

from callbackify.errors import new_error
from callbackify.normalize import normalize_rejection, unwrap_rejection
from callbackify.types import Continuation, ErrorCode, FutureFactory


# settle するまで GC されないように強参照で持っておく
_pending: "Set[asyncio.Future[Any]]" = set()


def callbackify(
    original: FutureFactory,
    *,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> Callable[..., None]:
    """
    Turn ``original`` (a callable returning an awaitable) into a callable
    taking an error-first continuation as its last positional argument.

    - success: ``continuation(None, value)``
    - failure: ``continuation(reason)``, falsy reasons wrapped in
      ``FalsyValueRejectionError``

    The continuation always runs on a later loop turn via ``loop.call_soon``,
    so anything it raises goes to the loop's exception handler and never
    back into the adapter. The wrapper returns ``None``.
    """
    if not callable(original):
        raise new_error(ErrorCode.InvalidArgType, "original", "Function", original)

    @functools.wraps(original)
    def callbackified(*args: Any, **kwargs: Any) -> None:
        maybe_cb = args[-1] if args else None
        if not callable(maybe_cb):
            raise new_error(
                ErrorCode.InvalidArgType, "last argument", "Function", maybe_cb
            )

        target_loop = loop or asyncio.get_running_loop()
        fut = asyncio.ensure_future(original(*args[:-1], **kwargs), loop=target_loop)
        _pending.add(fut)
        fut.add_done_callback(_pending.discard)
        fut.add_done_callback(functools.partial(_on_settled, target_loop, maybe_cb))

    return callbackified


def _on_settled(
    loop: asyncio.AbstractEventLoop,
    continuation: Continuation,
    fut: "asyncio.Future[Any]",
) -> None:
    if fut.cancelled():
        try:
            fut.result()
        except asyncio.CancelledError as exc:
            loop.call_soon(_on_rejected, continuation, exc)
        return

    exc = fut.exception()
    if exc is None:
        loop.call_soon(continuation, None, fut.result())
    else:
        loop.call_soon(_on_rejected, continuation, unwrap_rejection(exc))


def _on_rejected(continuation: Continuation, reason: Any) -> None:
    continuation(normalize_rejection(reason))
