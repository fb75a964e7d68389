"""Evaluator for the small function language used to obfuscate share values.

Recognised forms (whitespace is ignored)::

    sum(a,b)  multiply(a,b)  divide(a,b)  power(a,b)  lcm(a,b)  gcd(a,b)

``hcf`` is accepted as an alias of ``gcd``. Arguments are non-negative
decimal integers; a bare non-negative integer is also a valid expression.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Dict

from .bigint import BigInteger, gcd, lcm, power
from .errors import UnknownExpression

_logger = logging.getLogger(__name__)

_CALL = re.compile(r"([a-z]+)\((\d+),(\d+)\)", re.ASCII)
_NUMBER = re.compile(r"\d+", re.ASCII)

Operation = Callable[[BigInteger, BigInteger], BigInteger]

OPERATIONS: Dict[str, Operation] = {
    "sum": lambda a, b: a + b,
    "multiply": lambda a, b: a * b,
    "divide": lambda a, b: a / b,
    "power": power,
    "lcm": lcm,
    "gcd": gcd,
    "hcf": gcd,
}


def evaluate_expression(expr: str) -> BigInteger:
    """Evaluate ``expr`` exactly.

    Raises :class:`UnknownExpression` for anything outside the grammar and
    :class:`DivisionByZero` for ``divide(a,0)``.
    """
    clean = "".join(expr.split())
    if _NUMBER.fullmatch(clean):
        return BigInteger(clean)

    match = _CALL.fullmatch(clean)
    if match is None or match.group(1) not in OPERATIONS:
        raise UnknownExpression(f"Unknown expression format: {expr}")

    name, left, right = match.groups()
    value = OPERATIONS[name](BigInteger(left), BigInteger(right))
    _logger.debug("Evaluated %s -> %s", clean, value)
    return value


__all__ = ["OPERATIONS", "evaluate_expression"]
