"""Conversion of stored configuration values into Python types.

Stored values are ``str``, ``int``, ``float``, ``bool`` or :class:`RandValue`.
Strings may be converted into most targets; the other kinds only into the
targets that can hold them.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar

from confstack.errors import (
    ConfigCause,
    ConfigNotFound,
    ConfigParseError,
    ConfigTypeMismatch,
)

E = TypeVar("E", bound=Enum)

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"\+?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:inf|infinity|nan"
    r"|[0-9]+(?:\.[0-9]*)?(?:e[+-]?[0-9]+)?"
    r"|\.[0-9]+(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)

_INVALID_DIGIT = "invalid digit found in string"
_TOO_LARGE = "number too large to fit in target type"
_TOO_SMALL = "number too small to fit in target type"
_OUT_OF_RANGE = "out of range integral type conversion attempted"
_INVALID_FLOAT = "invalid float literal"


def value_kind(value: Any) -> str:
    """Name the kind of a stored value, as used in type-mismatch errors."""
    if isinstance(value, str):
        return "String"
    if isinstance(value, bool):
        return "Bool"
    if isinstance(value, int):
        return "Integer"
    if isinstance(value, float):
        return "Float"
    if isinstance(value, RandValue):
        return "Random"
    raise TypeError(f"not a configuration value: {value!r}")


def _type_name(target: Any) -> str:
    if isinstance(target, IntRange):
        return target.name
    return getattr(target, "__name__", repr(target))


def _mismatch(key: str, value: Any, target: Any) -> ConfigTypeMismatch:
    return ConfigTypeMismatch(key, value_kind(value), _type_name(target))


def _check_finite(number: float, key: str) -> float:
    if math.isfinite(number):
        return number
    raise ConfigParseError(key, "infinite")


@dataclass(frozen=True)
class IntRange:
    """An integer target with optional inclusive bounds."""

    name: str
    minimum: int | None = None
    maximum: int | None = None

    @property
    def signed(self) -> bool:
        return self.minimum is None or self.minimum < 0

    def _saturate(self, number: int) -> int:
        if self.minimum is not None and number < self.minimum:
            return self.minimum
        if self.maximum is not None and number > self.maximum:
            return self.maximum
        return number

    def _contains(self, number: int) -> bool:
        return self._saturate(number) == number

    def _parse(self, text: str) -> int:
        pattern = _SIGNED_INT if self.signed else _UNSIGNED_INT
        if not pattern.fullmatch(text):
            raise ConfigCause(ValueError(_INVALID_DIGIT))
        try:
            number = int(text)
        except ValueError as exc:
            raise ConfigCause(exc) from exc
        if self.maximum is not None and number > self.maximum:
            raise ConfigCause(ValueError(_TOO_LARGE))
        if self.minimum is not None and number < self.minimum:
            raise ConfigCause(ValueError(_TOO_SMALL))
        return number

    def convert(self, value: Any, key: str) -> int:
        """Convert a stored value into an integer within this range.

        Strings must be plain decimal numbers, integers must fit, and
        finite floats are truncated and clamped into the range.
        """
        if isinstance(value, str):
            return self._parse(value)
        if isinstance(value, bool):
            raise _mismatch(key, value, self)
        if isinstance(value, int):
            if not self._contains(value):
                raise ConfigCause(ValueError(_OUT_OF_RANGE))
            return value
        if isinstance(value, float):
            return self._saturate(int(_check_finite(value, key)))
        raise _mismatch(key, value, self)


I8 = IntRange("i8", -(2**7), 2**7 - 1)
I16 = IntRange("i16", -(2**15), 2**15 - 1)
I32 = IntRange("i32", -(2**31), 2**31 - 1)
I64 = IntRange("i64", _I64_MIN, _I64_MAX)
I128 = IntRange("i128", -(2**127), 2**127 - 1)
ISIZE = IntRange("isize", _I64_MIN, _I64_MAX)
U8 = IntRange("u8", 0, 2**8 - 1)
U16 = IntRange("u16", 0, 2**16 - 1)
U32 = IntRange("u32", 0, 2**32 - 1)
U64 = IntRange("u64", 0, 2**64 - 1)
U128 = IntRange("u128", 0, 2**128 - 1)
USIZE = IntRange("usize", 0, 2**64 - 1)
INT = IntRange("int")


class RandValue(Enum):
    """A placeholder replaced by a fresh random integer on every read."""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    USIZE = "usize"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    ISIZE = "isize"

    @property
    def range(self) -> IntRange:
        """The integer range random values of this kind are drawn from."""
        return _RAND_RANGES[self]


_RAND_RANGES = {
    RandValue.U8: U8,
    RandValue.U16: U16,
    RandValue.U32: U32,
    RandValue.U64: U64,
    RandValue.U128: U128,
    RandValue.USIZE: USIZE,
    RandValue.I8: I8,
    RandValue.I16: I16,
    RandValue.I32: I32,
    RandValue.I64: I64,
    RandValue.I128: I128,
    RandValue.ISIZE: ISIZE,
}


class Ordering(Enum):
    """Comparison result, read from ``lt``/``less``, ``eq``/``equal``, ``gt``/``greater``."""

    LESS = -1
    EQUAL = 0
    GREATER = 1
    LT = -1
    EQ = 0
    GT = 1


class Shutdown(Enum):
    """Which half of a connection to shut down."""

    READ = "read"
    WRITE = "write"
    BOTH = "both"


def to_config_value(value: Any) -> Any:
    """Turn a Python value into a storable configuration value.

    Integers outside the signed 64-bit range are stored as text.
    """
    if isinstance(value, (str, bool, float, RandValue)):
        return value
    if isinstance(value, int):
        return value if _I64_MIN <= value <= _I64_MAX else str(value)
    raise TypeError(f"cannot store {type(value).__name__} as a configuration value")


def parse_bool(text: str, key: str) -> bool:
    """Read ``true``/``yes`` or ``false``/``no``, in any case."""
    match text.lower():
        case "true" | "yes":
            return True
        case "false" | "no":
            return False
    raise ConfigParseError(key, text)


_DURATION_UNITS: dict[str, Callable[[int], timedelta]] = {
    "h": lambda n: timedelta(hours=n),
    "M": lambda n: timedelta(minutes=n),
    "s": lambda n: timedelta(seconds=n),
    "m": lambda n: timedelta(milliseconds=n),
    "u": lambda n: timedelta(microseconds=n),
    "n": lambda n: timedelta(microseconds=n / 1000),
}


def parse_duration(text: str, key: str) -> timedelta:
    """Read a duration such as ``10``, ``10s``, ``5m``, ``2h``, ``100ms``, ``7us``, ``9ns``.

    A bare number means seconds. Nanoseconds are rounded to whole
    microseconds.
    """
    total = 0
    scale = 1
    unit: str | None = None
    for char in reversed(text):
        if unit is None and char in ("h", "m", "s"):
            unit = "M" if char == "m" else char
        elif unit == "s" and char in ("m", "u", "n"):
            unit = char
        elif "0" <= char <= "9":
            if unit is None:
                unit = "s"
            total += scale * int(char)
            scale *= 10
        else:
            raise ConfigParseError(key, text)
    try:
        return _DURATION_UNITS[unit or "s"](total)
    except OverflowError as exc:
        raise ConfigCause(exc) from exc


def parse_enum(enum_type: type[E], text: str, key: str) -> E:
    """Find the member of ``enum_type`` named ``text``, ignoring case.

    Member aliases count as names.
    """
    wanted = text.lower()
    for name, member in enum_type.__members__.items():
        if name.lower() == wanted:
            return member
    raise ConfigParseError(key, text)


def empty_value(target: Any, key: str) -> Any:
    """Return what an empty string means for ``target``."""
    if target is str:
        return ""
    raise ConfigNotFound(key)


def _format_float(number: float) -> str:
    text = format(Decimal(repr(number)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _to_string(value: Any, key: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(_check_finite(value, key))
    raise ConfigParseError(key, "ConfigValueError")


def _to_bool(value: Any, key: str) -> bool:
    if isinstance(value, str):
        return parse_bool(value, key)
    if isinstance(value, bool):
        return value
    raise _mismatch(key, value, bool)


def _to_float(value: Any, key: str) -> float:
    if isinstance(value, str):
        if not _FLOAT.fullmatch(value):
            raise ConfigCause(ValueError(_INVALID_FLOAT))
        return float(value)
    if isinstance(value, bool):
        raise _mismatch(key, value, float)
    if isinstance(value, int):
        return float(value)
    if isinstance(value, float):
        return _check_finite(value, key)
    raise _mismatch(key, value, float)


def _to_duration(value: Any, key: str) -> timedelta:
    if isinstance(value, str):
        return parse_duration(value, key)
    if isinstance(value, bool):
        raise _mismatch(key, value, timedelta)
    if isinstance(value, (int, float)):
        if isinstance(value, float):
            _check_finite(value, key)
        if value < 0:
            raise ConfigParseError(key, str(value))
        try:
            return timedelta(seconds=value)
        except OverflowError as exc:
            raise ConfigCause(exc) from exc
    raise _mismatch(key, value, timedelta)


def _to_int(value: Any, key: str) -> int:
    return INT.convert(value, key)


_CONVERTERS: dict[type, Callable[[Any, str], Any]] = {
    str: _to_string,
    bool: _to_bool,
    float: _to_float,
    int: _to_int,
    timedelta: _to_duration,
}


def _from_text(target: Callable[[str], Any], value: Any, key: str) -> Any:
    if not isinstance(value, str):
        raise _mismatch(key, value, target)
    try:
        return target(value)
    except (ValueError, TypeError, OverflowError) as exc:
        raise ConfigCause(exc) from exc


def from_value(target: Any, value: Any, key: str) -> Any:
    """Convert the stored ``value`` found at ``key`` into ``target``.

    ``target`` is a type such as ``str``, ``bool``, ``int``, ``float``,
    ``timedelta`` or an enum class, an :class:`IntRange`, or any callable
    that builds a value from text (``Path``, ``IPv4Address`` and so on).
    """
    if value is None:
        raise ConfigNotFound(key)
    if isinstance(value, str) and not value:
        return empty_value(target, key)
    if isinstance(target, IntRange):
        return target.convert(value, key)
    if isinstance(target, type):
        converter = _CONVERTERS.get(target)
        if converter is not None:
            return converter(value, key)
        if issubclass(target, Enum):
            if not isinstance(value, str):
                raise _mismatch(key, value, target)
            return parse_enum(target, value, key)
    if callable(target):
        return _from_text(target, value, key)
    raise TypeError(f"unsupported configuration target: {target!r}")