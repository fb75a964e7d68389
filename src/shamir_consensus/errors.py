"""Exception hierarchy shared by every stage of the reconstruction."""
from __future__ import annotations


class ShamirError(RuntimeError):
    """Base class for all failures raised by :mod:`shamir_consensus`."""


class ParseError(ShamirError):
    """Raised for malformed numbers or a malformed input document."""


class UnknownExpression(ParseError):
    """Raised when a share value is neither a known function nor an integer."""


class InvalidBase(ShamirError):
    """Raised for a base outside ``[2, 36]`` or a digit not valid in the base."""


class DivisionByZero(ShamirError, ZeroDivisionError):
    """Raised when dividing by zero or inverting zero in the field."""


class InsufficientPoints(ShamirError):
    """Raised when fewer usable points than the threshold are available."""


class NoConsensus(ShamirError):
    """Raised when no subset of shares produced a usable secret."""


class ReconstructionTimeout(ShamirError):
    """Raised when the subset enumeration exceeds its deadline."""


__all__ = [
    "ShamirError",
    "ParseError",
    "UnknownExpression",
    "InvalidBase",
    "DivisionByZero",
    "InsufficientPoints",
    "NoConsensus",
    "ReconstructionTimeout",
]
