"""Arbitrary-precision signed integers with exact arithmetic.

:class:`BigInteger` stores a sign flag and a magnitude made of base ``10**9``
limbs, least significant first. The representation is always canonical: no
superfluous most significant zero limbs, and zero is never negative. Instances
are immutable; every operation returns a new value.

Division truncates toward zero and the remainder takes the sign of the
dividend, so ``(a / b) * b + a % b == a`` holds for every nonzero ``b``. This
differs from Python's floor division on ``int``.
"""
from __future__ import annotations

import functools
from typing import List, Sequence, Tuple, Union

from .errors import DivisionByZero, ParseError

BASE = 10**9
BASE_DIGITS = 9

_DECIMAL_DIGITS = frozenset("0123456789")

Limbs = List[int]
LimbView = Sequence[int]


# --------------------------------------------------------------------------
# magnitude helpers (lists of limbs, least significant first)
# --------------------------------------------------------------------------


def _trim(limbs: Limbs) -> Limbs:
    while len(limbs) > 1 and limbs[-1] == 0:
        limbs.pop()
    return limbs


def _is_zero(limbs: LimbView) -> bool:
    return len(limbs) == 1 and limbs[0] == 0


def _cmp_mag(a: LimbView, b: LimbView) -> int:
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1
    return 0


def _add_mag(a: LimbView, b: LimbView) -> Limbs:
    if len(a) < len(b):
        a, b = b, a
    result: Limbs = []
    carry = 0
    for i, limb in enumerate(a):
        total = limb + carry
        if i < len(b):
            total += b[i]
        if total >= BASE:
            result.append(total - BASE)
            carry = 1
        else:
            result.append(total)
            carry = 0
    if carry:
        result.append(carry)
    return result


def _sub_mag(a: LimbView, b: LimbView) -> Limbs:
    """Return ``a - b``; the caller guarantees ``|a| >= |b|``."""
    result: Limbs = []
    borrow = 0
    for i, limb in enumerate(a):
        diff = limb - borrow
        if i < len(b):
            diff -= b[i]
        if diff < 0:
            diff += BASE
            borrow = 1
        else:
            borrow = 0
        result.append(diff)
    return _trim(result)


def _mul_mag(a: LimbView, b: LimbView) -> Limbs:
    if _is_zero(a) or _is_zero(b):
        return [0]
    result = [0] * (len(a) + len(b))
    for i, ai in enumerate(a):
        if ai == 0:
            continue
        carry = 0
        for j, bj in enumerate(b):
            cur = result[i + j] + ai * bj + carry
            carry, result[i + j] = divmod(cur, BASE)
        result[i + len(b)] = carry
    return _trim(result)


def _mul_small(a: LimbView, factor: int) -> Limbs:
    if factor == 0:
        return [0]
    result: Limbs = []
    carry = 0
    for limb in a:
        carry, low = divmod(limb * factor + carry, BASE)
        result.append(low)
    while carry:
        carry, low = divmod(carry, BASE)
        result.append(low)
    return _trim(result)


def _divmod_small(a: LimbView, divisor: int) -> Tuple[Limbs, int]:
    quotient: Limbs = []
    rem = 0
    for limb in reversed(a):
        q, rem = divmod(rem * BASE + limb, divisor)
        quotient.append(q)
    quotient.reverse()
    return _trim(quotient), rem


def _estimate_limb(rem: LimbView, divisor: LimbView) -> int:
    # Leading-limb estimate; never below the true quotient limb and at most a
    # couple above it because the divisor's top limb is nonzero.
    m = len(divisor)
    if len(rem) < m:
        return 0
    rem_top = 0
    for i in range(len(rem) - 1, m - 3, -1):
        rem_top = rem_top * BASE + rem[i]
    div_top = divisor[m - 1] * BASE + divisor[m - 2]
    return min(BASE - 1, rem_top // div_top)


def _divmod_mag(a: LimbView, b: LimbView) -> Tuple[Limbs, Limbs]:
    """Long division of magnitudes, most significant limb first."""
    if _cmp_mag(a, b) < 0:
        return [0], list(a)
    if len(b) == 1:
        quotient, rem = _divmod_small(a, b[0])
        return quotient, [rem]

    quotient: Limbs = []
    rem: Limbs = [0]
    for limb in reversed(a):
        rem = _trim([limb] + rem)
        q = _estimate_limb(rem, b)
        product = _mul_small(b, q)
        while _cmp_mag(product, rem) > 0:
            q -= 1
            product = _sub_mag(product, b)
        if q:
            rem = _sub_mag(rem, product)
        quotient.append(q)
    quotient.reverse()
    return _trim(quotient), rem


def _limbs_from_int(value: int) -> Tuple[bool, Limbs]:
    negative = value < 0
    value = -value if negative else value
    if value == 0:
        return False, [0]
    limbs: Limbs = []
    while value:
        value, low = divmod(value, BASE)
        limbs.append(low)
    return negative, limbs


def _limbs_from_decimal(text: str) -> Tuple[bool, Limbs]:
    negative = False
    body = text
    if body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]
    if not body:
        return False, [0]
    for ch in body:
        if ch not in _DECIMAL_DIGITS:
            raise ParseError(f"Invalid character in number: {ch!r}")
    limbs: Limbs = []
    end = len(body)
    while end > 0:
        start = max(0, end - BASE_DIGITS)
        limbs.append(int(body[start:end]))
        end = start
    return negative, _trim(limbs)


# --------------------------------------------------------------------------
# public type
# --------------------------------------------------------------------------


IntegerLike = Union["BigInteger", int]


@functools.total_ordering
class BigInteger:
    """Immutable arbitrary-precision signed integer.

    ``BigInteger("-123")`` parses a decimal string (an optional ``+``/``-``
    sign followed by ASCII digits; an empty or sign-only string is zero) and
    ``BigInteger(123)`` converts a native integer. Arithmetic operators accept
    other :class:`BigInteger` instances or plain ``int`` operands.
    """

    __slots__ = ("_negative", "_limbs")

    def __init__(self, value: Union[str, int, "BigInteger"] = 0) -> None:
        if isinstance(value, BigInteger):
            negative, limbs = value._negative, list(value._limbs)
        elif isinstance(value, bool):
            raise TypeError("BigInteger does not accept bool values")
        elif isinstance(value, int):
            negative, limbs = _limbs_from_int(value)
        elif isinstance(value, str):
            negative, limbs = _limbs_from_decimal(value)
        else:
            raise TypeError(f"Cannot build BigInteger from {type(value).__name__}")
        self._negative = negative and not _is_zero(limbs)
        self._limbs = tuple(limbs)

    @classmethod
    def _from_parts(cls, negative: bool, limbs: Limbs) -> "BigInteger":
        obj = object.__new__(cls)
        obj._negative = negative and not _is_zero(limbs)
        obj._limbs = tuple(limbs)
        return obj

    @staticmethod
    def _coerce(value: object) -> "BigInteger | None":
        if isinstance(value, BigInteger):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return BigInteger(value)
        return None

    # ------------------------------------------------------------------ state

    @property
    def is_negative(self) -> bool:
        return self._negative

    @property
    def is_zero(self) -> bool:
        return _is_zero(self._limbs)

    @property
    def is_odd(self) -> bool:
        # BASE is even, so the lowest limb carries the parity.
        return bool(self._limbs[0] & 1)

    def to_string(self) -> str:
        """Canonical decimal representation."""
        head = str(self._limbs[-1])
        tail = "".join(f"{limb:0{BASE_DIGITS}d}" for limb in reversed(self._limbs[:-1]))
        return ("-" if self._negative else "") + head + tail

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigInteger('{self.to_string()}')"

    def __int__(self) -> int:
        value = 0
        for limb in reversed(self._limbs):
            value = value * BASE + limb
        return -value if self._negative else value

    def __bool__(self) -> bool:
        return not self.is_zero

    def __hash__(self) -> int:
        return hash(int(self))

    def __reduce__(self):
        return (BigInteger, (self.to_string(),))

    # ------------------------------------------------------------- comparison

    def compare(self, other: IntegerLike) -> int:
        """Return -1, 0 or 1 as ``self`` is below, equal to or above ``other``."""
        rhs = BigInteger(other)
        if self._negative != rhs._negative:
            return -1 if self._negative else 1
        mag = _cmp_mag(self._limbs, rhs._limbs)
        return -mag if self._negative else mag

    def __eq__(self, other: object) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._negative == rhs._negative and self._limbs == rhs._limbs

    def __lt__(self, other: object) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self.compare(rhs) < 0

    # ------------------------------------------------------------- arithmetic

    def __neg__(self) -> "BigInteger":
        return BigInteger._from_parts(not self._negative, list(self._limbs))

    def __pos__(self) -> "BigInteger":
        return self

    def __abs__(self) -> "BigInteger":
        return BigInteger._from_parts(False, list(self._limbs))

    def add(self, other: IntegerLike) -> "BigInteger":
        rhs = BigInteger(other)
        a, b = self._limbs, rhs._limbs
        if self._negative == rhs._negative:
            return BigInteger._from_parts(self._negative, _add_mag(a, b))
        # Opposite signs: subtract the smaller magnitude from the larger one.
        order = _cmp_mag(a, b)
        if order == 0:
            return BigInteger._from_parts(False, [0])
        if order > 0:
            return BigInteger._from_parts(self._negative, _sub_mag(a, b))
        return BigInteger._from_parts(rhs._negative, _sub_mag(b, a))

    def subtract(self, other: IntegerLike) -> "BigInteger":
        return self.add(-BigInteger(other))

    def multiply(self, other: IntegerLike) -> "BigInteger":
        rhs = BigInteger(other)
        limbs = _mul_mag(self._limbs, rhs._limbs)
        return BigInteger._from_parts(self._negative != rhs._negative, limbs)

    def divmod(self, other: IntegerLike) -> Tuple["BigInteger", "BigInteger"]:
        """Return the truncated quotient and the matching remainder."""
        rhs = BigInteger(other)
        if rhs.is_zero:
            raise DivisionByZero("Division by zero")
        quotient, rem = _divmod_mag(self._limbs, rhs._limbs)
        return (
            BigInteger._from_parts(self._negative != rhs._negative, quotient),
            BigInteger._from_parts(self._negative, rem),
        )

    def divide(self, other: IntegerLike) -> "BigInteger":
        """Quotient truncated toward zero."""
        return self.divmod(other)[0]

    def modulo(self, other: IntegerLike) -> "BigInteger":
        """Remainder equal to ``self - (self / other) * other``."""
        return self.divmod(other)[1]

    def __add__(self, other: object) -> "BigInteger":
        rhs = self._coerce(other)
        return NotImplemented if rhs is None else self.add(rhs)

    def __radd__(self, other: object) -> "BigInteger":
        return self.__add__(other)

    def __sub__(self, other: object) -> "BigInteger":
        rhs = self._coerce(other)
        return NotImplemented if rhs is None else self.subtract(rhs)

    def __rsub__(self, other: object) -> "BigInteger":
        lhs = self._coerce(other)
        return NotImplemented if lhs is None else lhs.subtract(self)

    def __mul__(self, other: object) -> "BigInteger":
        rhs = self._coerce(other)
        return NotImplemented if rhs is None else self.multiply(rhs)

    def __rmul__(self, other: object) -> "BigInteger":
        return self.__mul__(other)

    def __truediv__(self, other: object) -> "BigInteger":
        rhs = self._coerce(other)
        return NotImplemented if rhs is None else self.divide(rhs)

    def __rtruediv__(self, other: object) -> "BigInteger":
        lhs = self._coerce(other)
        return NotImplemented if lhs is None else lhs.divide(self)

    def __mod__(self, other: object) -> "BigInteger":
        rhs = self._coerce(other)
        return NotImplemented if rhs is None else self.modulo(rhs)

    def __rmod__(self, other: object) -> "BigInteger":
        lhs = self._coerce(other)
        return NotImplemented if lhs is None else lhs.modulo(self)


ZERO = BigInteger(0)
ONE = BigInteger(1)
TWO = BigInteger(2)


def gcd(a: IntegerLike, b: IntegerLike) -> BigInteger:
    """Greatest common divisor (Euclid), always non-negative."""
    a, b = abs(BigInteger(a)), abs(BigInteger(b))
    while not b.is_zero:
        a, b = b, a % b
    return a


def lcm(a: IntegerLike, b: IntegerLike) -> BigInteger:
    """Least common multiple; zero when either argument is zero."""
    a, b = BigInteger(a), BigInteger(b)
    if a.is_zero or b.is_zero:
        return ZERO
    return abs(a * b) / gcd(a, b)


def power(base: IntegerLike, exponent: IntegerLike) -> BigInteger:
    """``base ** exponent`` by square-and-multiply."""
    base, exponent = BigInteger(base), BigInteger(exponent)
    if exponent.is_negative:
        raise ValueError("Exponent must be non-negative")
    result = ONE
    while not exponent.is_zero:
        if exponent.is_odd:
            result = result * base
        base = base * base
        exponent = exponent / TWO
    return result


__all__ = ["BigInteger", "ZERO", "ONE", "TWO", "gcd", "lcm", "power", "BASE"]
