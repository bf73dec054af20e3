from __future__ import annotations
import asyncio
import queue
import threading
from logging import getLogger
from typing import Any, Callable, Dict, Optional, Tuple

from callbackify.types import UnhandledFailure, new_id, now_ts


logger = getLogger(__name__)

ExceptionHandler = Callable[[asyncio.AbstractEventLoop, Dict[str, Any]], Any]


class UnhandledFailureReporter:
    """
    event loop の exception handler として登録し、
    continuation が投げた例外などの未処理エラーを
      - logger.error で記録
      - subscribe() したキューへ配信
    する。
    """

    def __init__(self, *, propagate: bool = False) -> None:
        self.propagate = propagate
        self.dropped = 0
        self._lock = threading.Lock()
        self._subs: Dict[str, "queue.Queue[UnhandledFailure]"] = {}
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._prev_handler: Optional[ExceptionHandler] = None

    # ---------- lifecycle ----------
    def install(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        if self._loop is not None:
            raise RuntimeError("reporter is already installed")
        loop = loop or asyncio.get_running_loop()
        self._prev_handler = loop.get_exception_handler()
        loop.set_exception_handler(self._handle)
        self._loop = loop

    def uninstall(self) -> None:
        if self._loop is None:
            return
        self._loop.set_exception_handler(self._prev_handler)
        self._loop = None
        self._prev_handler = None

    # ---------- subscription ----------
    def subscribe(
        self, max_queue: int = 1000
    ) -> Tuple[str, "queue.Queue[UnhandledFailure]"]:
        sid = new_id()
        q: "queue.Queue[UnhandledFailure]" = queue.Queue(maxsize=max_queue)
        with self._lock:
            self._subs[sid] = q
        return sid, q

    def unsubscribe(self, sid: str) -> None:
        with self._lock:
            self._subs.pop(sid, None)

    # ---------- internal ----------
    def _handle(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        exc = context.get("exception")
        failure = UnhandledFailure(
            event_id=new_id(),
            ts=now_ts(),
            message=str(context.get("message") or exc or "unhandled failure"),
            exception=exc,
            context=dict(context),
        )
        logger.error(
            "unhandled failure: %s",
            failure.message,
            exc_info=exc,
        )
        self._emit(failure)

        if self.propagate:
            loop.default_exception_handler(context)

    def _emit(self, failure: UnhandledFailure) -> None:
        with self._lock:
            subs = list(self._subs.items())
        for sid, q in subs:
            try:
                q.put_nowait(failure)
            except queue.Full:
                self.dropped += 1
                logger.warning(
                    "unhandled failure dropped: subscriber queue full (sid=%s)", sid
                )
