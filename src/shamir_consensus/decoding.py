"""Positional decoding of base-N digit strings (bases 2 to 36)."""
from __future__ import annotations

from typing import Union

from .bigint import ZERO, BigInteger
from .errors import InvalidBase, ParseError

MIN_BASE = 2
MAX_BASE = 36


def digit_value(ch: str) -> int:
    """Value of a single digit: ``0-9`` then ``a-z`` (case-insensitive)."""
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "a" <= ch <= "z":
        return ord(ch) - ord("a") + 10
    if "A" <= ch <= "Z":
        return ord(ch) - ord("A") + 10
    raise InvalidBase(f"Invalid character in number: {ch!r}")


def parse_base(base: Union[int, str]) -> int:
    """Accept a base given as an int or as a decimal string."""
    if isinstance(base, bool):
        raise InvalidBase(f"Invalid base: {base!r}")
    if isinstance(base, str):
        try:
            base = int(base.strip())
        except ValueError:
            raise InvalidBase(f"Invalid base: {base!r}") from None
    if not isinstance(base, int) or not MIN_BASE <= base <= MAX_BASE:
        raise InvalidBase(f"Invalid base: {base!r}")
    return base


def decode_base(text: str, base: Union[int, str]) -> BigInteger:
    """Decode ``text`` written in ``base`` into a :class:`BigInteger`."""
    radix = parse_base(base)
    if not text:
        raise ParseError("Encoded value is empty")
    radix_value = BigInteger(radix)
    result = ZERO
    for ch in text:
        digit = digit_value(ch)
        if digit >= radix:
            raise InvalidBase(f"Invalid digit {ch!r} for base {radix}")
        result = result * radix_value + digit
    return result


__all__ = ["digit_value", "parse_base", "decode_base", "MIN_BASE", "MAX_BASE"]
