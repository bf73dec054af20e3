from __future__ import annotations
import math
import numbers
from decimal import Decimal
from typing import Any

from callbackify.errors import new_error
from callbackify.types import ErrorCode


class Rejection(Exception):
    """
    Fail an awaitable with an arbitrary reason.

    Python awaitables can only fail by raising, so a non-exception reason
    (``0``, ``""``, ``"not found"`` ...) travels inside a ``Rejection``. The
    adapter unwraps it and hands ``reason`` to the continuation.
    """

    def __init__(self, reason: Any = None) -> None:
        super().__init__(reason)
        self.reason = reason


def is_falsy(value: Any) -> bool:
    # None / False / 数値のゼロ / "" / NaN だけ。空の list や dict や b"" は含めない
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_zero() or value.is_nan()
    if isinstance(value, float):
        return value == 0 or math.isnan(value)
    if isinstance(value, numbers.Number):
        return value == 0
    return False


def unwrap_rejection(exc: BaseException) -> Any:
    if isinstance(exc, Rejection):
        return exc.reason
    return exc


def normalize_rejection(reason: Any) -> Any:
    """
    A falsy reason would read as "no error" in the continuation's error slot,
    so it is wrapped in ``FalsyValueRejectionError`` keeping the original
    value on ``.reason``. Anything else is returned as-is.
    """
    if is_falsy(reason):
        return new_error(ErrorCode.FalsyValueRejection, reason)
    return reason
