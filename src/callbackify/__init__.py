from .adapter import callbackify
from .errors import (
    CodedError,
    FalsyValueRejectionError,
    InvalidArgTypeError,
    invalid_arg_type_message,
    new_error,
)
from .normalize import Rejection, is_falsy, normalize_rejection
from .reporting import UnhandledFailureReporter
from .types import ErrorCode, UnhandledFailure

__all__ = [
    "callbackify",
    "CodedError",
    "ErrorCode",
    "FalsyValueRejectionError",
    "InvalidArgTypeError",
    "Rejection",
    "UnhandledFailure",
    "UnhandledFailureReporter",
    "invalid_arg_type_message",
    "is_falsy",
    "new_error",
    "normalize_rejection",
]
