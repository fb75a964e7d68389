"""Shared fixtures: shares sampled from known polynomials over GF(2**127 - 1)."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_src_on_path() -> None:
    src = Path(__file__).resolve().parent.parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


_ensure_src_on_path()

from shamir_consensus import BigInteger, Share  # noqa: E402

P = 2**127 - 1


def poly_value(coeffs, x, prime=P):
    """Evaluate ``coeffs[0] + coeffs[1]*x + ...`` modulo ``prime``."""
    return sum(c * pow(x, i, prime) for i, c in enumerate(coeffs)) % prime


@pytest.fixture
def make_shares():
    """Build ``n`` shares of the polynomial ``coeffs``; ids in ``corrupt`` get a shifted y."""

    def _make(coeffs, n, corrupt=()):
        shares = []
        for x in range(1, n + 1):
            y = poly_value(coeffs, x)
            if x in corrupt:
                y = (y + 1000 + x) % P
            shares.append(Share(id=x, value=BigInteger(y), source=str(y)))
        return shares

    return _make
