from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional
from enum import StrEnum
import time
import uuid


# (error, value) -> None
Continuation = Callable[..., None]
FutureFactory = Callable[..., Awaitable[Any]]


def now_ts() -> float:
    return time.time()


def new_id() -> str:
    return uuid.uuid4().hex


class ErrorCode(StrEnum):
    InvalidArgType = "ERR_INVALID_ARG_TYPE"
    FalsyValueRejection = "ERR_FALSY_VALUE_REJECTION"


@dataclass(frozen=True)
class UnhandledFailure:
    """
    event loop の exception handler に届いた未処理エラー
    """

    event_id: str
    ts: float
    message: str
    exception: Optional[BaseException] = None
    context: Dict[str, Any] = field(default_factory=dict)
