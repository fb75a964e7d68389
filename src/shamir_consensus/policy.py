"""Defaults for reconstruction runs, read from ``SHAMIR_*`` environment variables.

``SHAMIR_WORKERS`` and ``SHAMIR_TIMEOUT`` feed :class:`ConsensusReconstructor`
when a caller passes no explicit value; ``SHAMIR_LOG_LEVEL`` and
``SHAMIR_PROGRESS`` become the command line defaults. A variable that does not
parse leaves the built-in default in place.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

_T = TypeVar("_T", int, float)


def _load_number(name: str, default: _T, convert: Callable[[str], _T]) -> _T:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return convert(raw)
    except ValueError:
        return default


def _load_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return default


def _load_level(name: str, default: str) -> str:
    value = (os.environ.get(name) or "").strip().upper()
    if value in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        return value
    return default


@dataclass(frozen=True)
class ReconstructionPolicy:
    """Holds runtime tunables for a reconstruction run."""

    workers: int = 1
    timeout: float = 0.0
    log_level: str = "WARNING"
    progress: bool = True


def load_policy() -> ReconstructionPolicy:
    """Load the policy considering environment overrides."""

    return ReconstructionPolicy(
        workers=max(1, _load_number("SHAMIR_WORKERS", 1, int)),
        timeout=max(0.0, _load_number("SHAMIR_TIMEOUT", 0.0, float)),
        log_level=_load_level("SHAMIR_LOG_LEVEL", "WARNING"),
        progress=_load_bool("SHAMIR_PROGRESS", True),
    )


policy = load_policy()


__all__ = ["ReconstructionPolicy", "policy", "load_policy"]
