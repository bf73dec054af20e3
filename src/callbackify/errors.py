from __future__ import annotations
from typing import Any, Dict, Tuple, Type

from callbackify.types import ErrorCode


def invalid_arg_type_message(name: str, expected: Any, actual: Any) -> str:
    # "not Function" -> must not be
    if isinstance(expected, str) and expected.startswith("not "):
        determiner = "must not be"
        expected = expected[len("not ") :]
    else:
        determiner = "must be"

    if name.endswith(" argument"):
        # "last argument" など
        msg = f"The {name} {determiner} of type {expected}"
    else:
        kind = "property" if "." in name else "argument"
        msg = f'The "{name}" {kind} {determiner} of type {expected}'

    msg += f". Received type {type(actual).__name__}"
    return msg


class CodedError:
    """
    Mixin for errors carrying a stable ``code`` discriminator.

    ``name`` renders as ``"<BaseName> [<code>]"``. Both attributes may be
    reassigned after construction; the assigned value is what callers see.
    """

    _code: ErrorCode
    _base_name: str = "Exception"

    @property
    def code(self) -> str:
        return self.__dict__.get("code", self._code)

    @code.setter
    def code(self, value: str) -> None:
        self.__dict__["code"] = value

    @property
    def name(self) -> str:
        return self.__dict__.get("name", f"{self._base_name} [{self._code}]")

    @name.setter
    def name(self, value: str) -> None:
        self.__dict__["name"] = value

    def __reduce__(self) -> Tuple[Any, ...]:
        # args には整形済みの message しか無いので __init__ を通さずに復元する
        return _rebuild, (type(self), self.args), self.__dict__.copy()


def _rebuild(cls: Type[BaseException], args: Tuple[Any, ...]) -> BaseException:
    err = cls.__new__(cls)
    BaseException.__init__(err, *args)
    return err


class InvalidArgTypeError(CodedError, TypeError):
    _code = ErrorCode.InvalidArgType
    _base_name = "TypeError"

    def __init__(self, arg_name: str, expected: Any, actual: Any) -> None:
        super().__init__(invalid_arg_type_message(arg_name, expected, actual))


class FalsyValueRejectionError(CodedError, Exception):
    _code = ErrorCode.FalsyValueRejection

    def __init__(self, reason: Any = None) -> None:
        super().__init__("settlement was rejected with a falsy value")
        self.reason = reason


_ERRORS: Dict[ErrorCode, Type[Exception]] = {
    ErrorCode.InvalidArgType: InvalidArgTypeError,
    ErrorCode.FalsyValueRejection: FalsyValueRejectionError,
}


def new_error(code: ErrorCode, *args: Any) -> Exception:
    if code not in _ERRORS:
        raise KeyError(f"unknown error code={code}")
    return _ERRORS[code](*args)
