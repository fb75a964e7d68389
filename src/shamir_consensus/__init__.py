"""Threshold secret reconstruction with corrupted-share detection.

Every ``k``-subset of the supplied shares is interpolated over the prime field
GF(2**127 - 1); the secret most subsets agree on wins and shares that never
appear in an agreeing subset are reported as wrong.
"""

from __future__ import annotations

from .bigint import BigInteger
from .combinations import CombinationEnumerator, enumerate_combinations
from .consensus import (
    CandidateTally,
    ConsensusReconstructor,
    ConsensusResult,
    Share,
    reconstruct,
)
from .errors import (
    DivisionByZero,
    InsufficientPoints,
    InvalidBase,
    NoConsensus,
    ParseError,
    ReconstructionTimeout,
    ShamirError,
    UnknownExpression,
)
from .field import PRIME, Point, interpolate_at_zero, mod_inverse, mod_pow
from .loader import ShareDocument, load_document, parse_document

__version__ = "0.1.0"

__all__ = [
    "BigInteger",
    "CombinationEnumerator",
    "enumerate_combinations",
    "CandidateTally",
    "ConsensusReconstructor",
    "ConsensusResult",
    "Share",
    "reconstruct",
    "PRIME",
    "Point",
    "interpolate_at_zero",
    "mod_inverse",
    "mod_pow",
    "ShareDocument",
    "load_document",
    "parse_document",
    "ShamirError",
    "ParseError",
    "UnknownExpression",
    "InvalidBase",
    "DivisionByZero",
    "InsufficientPoints",
    "NoConsensus",
    "ReconstructionTimeout",
]
