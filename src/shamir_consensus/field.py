"""Prime-field arithmetic and Lagrange interpolation at ``x = 0``.

All division in the field goes through :func:`mod_inverse`, which relies on
Fermat's little theorem and is therefore only valid for a prime modulus.
"""
from __future__ import annotations

import logging
from typing import NamedTuple, Sequence

from .bigint import ONE, TWO, ZERO, BigInteger, IntegerLike
from .errors import DivisionByZero, InsufficientPoints

_logger = logging.getLogger(__name__)

PRIME = BigInteger("170141183460469231731687303715884105727")  # 2**127 - 1


class Point(NamedTuple):
    x: BigInteger
    y: BigInteger


def _normalize(value: BigInteger, modulus: BigInteger) -> BigInteger:
    # Truncating modulo leaves |value| < modulus, so one addition is enough.
    residue = value % modulus
    if residue.is_negative:
        residue = residue + modulus
    return residue


def mod_pow(base: IntegerLike, exponent: IntegerLike, modulus: IntegerLike) -> BigInteger:
    """Return ``base ** exponent mod modulus`` in ``[0, modulus)``."""
    base, exponent, modulus = BigInteger(base), BigInteger(exponent), BigInteger(modulus)
    if exponent.is_negative:
        raise ValueError("Exponent must be non-negative")
    if modulus <= ZERO:
        raise ValueError("Modulus must be positive")

    result = _normalize(ONE, modulus)
    base = _normalize(base, modulus)
    while not exponent.is_zero:
        if exponent.is_odd:
            result = (result * base) % modulus
        exponent = exponent / TWO
        base = (base * base) % modulus
    return result


def mod_inverse(value: IntegerLike, prime: IntegerLike = PRIME) -> BigInteger:
    """Multiplicative inverse of ``value`` modulo ``prime``.

    Raises :class:`DivisionByZero` when ``value`` is a multiple of ``prime``;
    in that case no inverse exists.
    """
    value, prime = BigInteger(value), BigInteger(prime)
    if _normalize(value, prime).is_zero:
        raise DivisionByZero(f"{value} has no inverse modulo {prime}")
    return mod_pow(value, prime - TWO, prime)


def interpolate_at_zero(
    points: Sequence[Point],
    prime: IntegerLike = PRIME,
) -> BigInteger:
    """Constant term of the polynomial through ``points``, modulo ``prime``.

    ``k`` points with distinct x-coordinates define a unique polynomial of
    degree ``k - 1``; its value at zero is the shared secret. Duplicate
    x-coordinates make a Lagrange denominator vanish and raise
    :class:`DivisionByZero`.
    """
    if not points:
        raise InsufficientPoints("Interpolation needs at least one point")
    prime = BigInteger(prime)

    result = ZERO
    for i, (xi, yi) in enumerate(points):
        numerator = ONE
        denominator = ONE
        for j, (xj, _) in enumerate(points):
            if i == j:
                continue
            numerator = (numerator * (ZERO - xj)) % prime
            denominator = (denominator * (xi - xj)) % prime
        numerator = _normalize(numerator, prime)
        denominator = _normalize(denominator, prime)

        term = ((yi * numerator) % prime * mod_inverse(denominator, prime)) % prime
        result = (result + term) % prime

    result = _normalize(result, prime)
    _logger.debug("Interpolated %d points -> %s", len(points), result)
    return result


__all__ = ["PRIME", "Point", "mod_pow", "mod_inverse", "interpolate_at_zero"]
