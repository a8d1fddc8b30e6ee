"""Bounded integers that raise on any overflow instead of wrapping."""

from __future__ import annotations

import operator
from typing import Any, Callable, ClassVar, Optional, Sized

_U64_MAX = 2**64 - 1
_BIG_MAX = 2**1024 - 1


def _parse_literal(text: str) -> int:
    """Parse decimal, ``0x`` hexadecimal or leading-zero octal text."""
    body = text.strip()
    sign = 1
    if body[:1] in ("+", "-"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body.lower().startswith("0x"):
        base, digits = 16, body[2:]
    elif len(body) > 1 and body.startswith("0"):
        base, digits = 8, body[1:]
    else:
        base, digits = 10, body
    if not digits or not digits.isalnum():
        raise ValueError(f"invalid integer literal: {text!r}")
    return sign * int(digits, base)


def _coerce(value: Any) -> int:
    if isinstance(value, CheckedInt):
        return value._value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return _parse_literal(value)
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(f"cannot make an integer from {type(value).__name__}") from None


def _operand(value: Any) -> Optional[int]:
    if isinstance(value, CheckedInt):
        return value._value
    if isinstance(value, int):
        return int(value)
    return None


def _truncating_div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError("integer division by zero")
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


class CheckedInt:
    """An immutable integer confined to ``[MIN, MAX]``.

    Every construction and arithmetic result is checked; leaving the range
    raises :class:`OverflowError`. The result of an operation has the type
    of the left operand. Division truncates toward zero.
    """

    __slots__ = ("_value",)

    MIN: ClassVar[Optional[int]] = None
    MAX: ClassVar[Optional[int]] = None

    def __init__(self, value: Any = 0) -> None:
        self._value = self._checked(_coerce(value))

    @classmethod
    def _checked(cls, number: int) -> int:
        if cls.MIN is None or cls.MAX is None:
            raise TypeError(f"{cls.__name__} has no range; use a bounded subclass")
        if not cls.MIN <= number <= cls.MAX:
            raise OverflowError(f"value out of range for {cls.__name__}")
        return number

    @classmethod
    def _wrap(cls, number: int) -> "CheckedInt":
        obj = cls.__new__(cls)
        obj._value = cls._checked(number)
        return obj

    def _binary(self, other: Any, op: Callable[[int, int], int], reflected: bool = False):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        a, b = (rhs, self._value) if reflected else (self._value, rhs)
        return type(self)._wrap(op(a, b))

    def __add__(self, other):
        return self._binary(other, operator.add)

    def __radd__(self, other):
        return self._binary(other, operator.add, reflected=True)

    def __sub__(self, other):
        return self._binary(other, operator.sub)

    def __rsub__(self, other):
        return self._binary(other, operator.sub, reflected=True)

    def __mul__(self, other):
        return self._binary(other, operator.mul)

    def __rmul__(self, other):
        return self._binary(other, operator.mul, reflected=True)

    def __truediv__(self, other):
        return self._binary(other, _truncating_div)

    def __rtruediv__(self, other):
        return self._binary(other, _truncating_div, reflected=True)

    __floordiv__ = __truediv__
    __rfloordiv__ = __rtruediv__

    def __neg__(self):
        return type(self)._wrap(-self._value)

    def __pos__(self):
        return self

    def __abs__(self):
        return type(self)._wrap(abs(self._value))

    def _compare(self, other: Any, op: Callable[[int, int], bool]):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return op(self._value, rhs)

    def __eq__(self, other):
        return self._compare(other, operator.eq)

    def __ne__(self, other):
        return self._compare(other, operator.ne)

    def __lt__(self, other):
        return self._compare(other, operator.lt)

    def __le__(self, other):
        return self._compare(other, operator.le)

    def __gt__(self, other):
        return self._compare(other, operator.gt)

    def __ge__(self, other):
        return self._compare(other, operator.ge)

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return self._value != 0

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __float__(self) -> float:
        return float(self._value)

    def __str__(self) -> str:
        return str(self._value)

    def __format__(self, spec: str) -> str:
        return format(self._value, spec)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"


class XInt(CheckedInt):
    """Signed integer with a 64-bit magnitude."""

    __slots__ = ()
    MIN = -_U64_MAX
    MAX = _U64_MAX


class UXInt(CheckedInt):
    """Unsigned 64-bit integer."""

    __slots__ = ()
    MIN = 0
    MAX = _U64_MAX


class XBigInt(CheckedInt):
    """Signed integer with a magnitude of up to 1024 bits."""

    __slots__ = ()
    MIN = -_BIG_MAX
    MAX = _BIG_MAX


class UXBigInt(CheckedInt):
    """Unsigned integer of up to 1024 bits."""

    __slots__ = ()
    MIN = 0
    MAX = _BIG_MAX


def overflow_impossible_in_assign(target: Any, value: Any) -> bool:
    """Tell whether ``value`` fits the range of ``target`` (a checked type or instance)."""
    cls = target if isinstance(target, type) else type(target)
    if not issubclass(cls, CheckedInt) or cls.MIN is None or cls.MAX is None:
        raise TypeError(f"{cls.__name__} is not a bounded checked integer type")
    return cls.MIN <= _coerce(value) <= cls.MAX


def xsize(obj: Sized) -> UXInt:
    """Return ``len(obj)`` as a :class:`UXInt`."""
    return UXInt(len(obj))