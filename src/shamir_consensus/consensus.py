"""Majority-vote reconstruction over every threshold-sized subset of shares.

With more shares than the threshold, every ``k``-subset of honest shares
reconstructs the same secret. The reconstructor interpolates each subset,
tallies the candidate secrets, picks the most frequent one and reports every
share that never took part in a subset agreeing with it.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_COMPLETED, Future, ProcessPoolExecutor, wait
from dataclasses import dataclass, field
from itertools import islice
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from tqdm import tqdm

from .bigint import BigInteger, IntegerLike
from .combinations import CombinationEnumerator, Subset
from .errors import InsufficientPoints, NoConsensus, ReconstructionTimeout
from .field import PRIME, Point, interpolate_at_zero
from .policy import policy

_logger = logging.getLogger(__name__)

FIRST_SEEN = "first_seen"
SMALLEST = "smallest"


@dataclass(frozen=True)
class Share:
    """One ``(id, value)`` pair; the id doubles as the x-coordinate."""

    id: int
    value: BigInteger
    source: str = ""

    @property
    def point(self) -> Point:
        return Point(BigInteger(self.id), self.value)


@dataclass
class Candidate:
    """Votes collected for one reconstructed secret."""

    secret: BigInteger
    count: int = 0
    exemplar: Subset = ()
    first_seen: int = 0
    members: Set[int] = field(default_factory=set)


class CandidateTally:
    """Secret -> votes mapping that can be merged in any order."""

    def __init__(self) -> None:
        self._candidates: Dict[str, Candidate] = {}

    def record(self, secret: BigInteger, subset: Subset, ordinal: int) -> None:
        key = secret.to_string()
        candidate = self._candidates.get(key)
        if candidate is None:
            candidate = Candidate(secret=secret, exemplar=subset, first_seen=ordinal)
            self._candidates[key] = candidate
        elif ordinal < candidate.first_seen:
            candidate.first_seen = ordinal
            candidate.exemplar = subset
        candidate.count += 1
        candidate.members.update(subset)

    def merge(self, other: "CandidateTally") -> None:
        for key, theirs in other._candidates.items():
            mine = self._candidates.get(key)
            if mine is None:
                self._candidates[key] = Candidate(
                    secret=theirs.secret,
                    count=theirs.count,
                    exemplar=theirs.exemplar,
                    first_seen=theirs.first_seen,
                    members=set(theirs.members),
                )
                continue
            mine.count += theirs.count
            mine.members |= theirs.members
            if theirs.first_seen < mine.first_seen:
                mine.first_seen = theirs.first_seen
                mine.exemplar = theirs.exemplar

    def get(self, secret: IntegerLike) -> Optional[Candidate]:
        return self._candidates.get(BigInteger(secret).to_string())

    @property
    def votes(self) -> int:
        return sum(candidate.count for candidate in self._candidates.values())

    def majority(self, *, tie_break: str = FIRST_SEEN) -> Candidate:
        """Return the candidate with the most votes.

        Ties go to the candidate seen first in enumeration order
        (``first_seen``) or to the numerically smallest secret
        (``smallest``).
        """
        if not self._candidates:
            raise NoConsensus("No subset produced a usable secret")
        if tie_break == FIRST_SEEN:
            return min(self._candidates.values(), key=lambda c: (-c.count, c.first_seen))
        if tie_break == SMALLEST:
            return min(self._candidates.values(), key=lambda c: (-c.count, c.secret))
        raise ValueError(f"Unknown tie-break rule: {tie_break!r}")

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates.values())


@dataclass
class ConsensusResult:
    secret: BigInteger
    agreeing: int
    total_subsets: int
    successful_subsets: int
    candidates: int
    exemplar: Tuple[int, ...]
    validated_ids: List[int]
    wrong_share_ids: List[int]

    @property
    def failed_subsets(self) -> int:
        return self.total_subsets - self.successful_subsets

    @property
    def agreement(self) -> float:
        """Percentage of all subsets that reconstructed the secret."""
        if not self.total_subsets:
            return 0.0
        return 100.0 * self.agreeing / self.total_subsets


def _describe(subset: Subset) -> str:
    return " ".join(str(index + 1) for index in subset)


def _score_subset(points: Sequence[Point], subset: Subset, prime: BigInteger) -> Optional[BigInteger]:
    try:
        secret = interpolate_at_zero([points[i] for i in subset], prime)
    except ArithmeticError as exc:
        _logger.debug("Combination %s -> failed: %s", _describe(subset), exc)
        return None
    _logger.debug("Combination %s -> secret %s", _describe(subset), secret)
    return secret


def _score_batch(
    points: Sequence[Point],
    prime: BigInteger,
    first_ordinal: int,
    subsets: Sequence[Subset],
) -> Tuple[CandidateTally, int]:
    """Score a chunk of subsets; runs inside worker processes."""
    tally = CandidateTally()
    failures = 0
    for offset, subset in enumerate(subsets):
        secret = _score_subset(points, subset, prime)
        if secret is None:
            failures += 1
        else:
            tally.record(secret, subset, first_ordinal + offset)
    return tally, failures


class ConsensusReconstructor:
    """Reconstruct the majority secret and flag shares that disagree with it.

    ``workers > 1`` scores subset batches on a process pool. Tallies from the
    workers are merged order-independently and ties are then broken by the
    smallest secret value, so the outcome does not depend on scheduling.
    A sequential run breaks ties by lexicographic enumeration order.
    ``timeout`` (seconds, ``0``/``None`` for none) bounds the whole
    enumeration.
    """

    def __init__(
        self,
        shares: Sequence[Share],
        k: int,
        *,
        prime: IntegerLike = PRIME,
        workers: Optional[int] = None,
        timeout: Optional[float] = None,
        progress: bool = False,
        batch_size: int = 256,
    ) -> None:
        if k < 1:
            raise ValueError("Threshold k must be at least 1")
        self.shares = list(shares)
        self.k = k
        self.prime = BigInteger(prime)
        self.workers = max(1, workers if workers is not None else policy.workers)
        self.timeout = timeout if timeout is not None else policy.timeout
        self.progress = progress
        self.batch_size = batch_size

    @property
    def tie_break(self) -> str:
        return FIRST_SEEN if self.workers == 1 else SMALLEST

    def reconstruct(self) -> ConsensusResult:
        if len(self.shares) < self.k:
            raise InsufficientPoints(
                f"Not enough shares to reconstruct: need {self.k}, got {len(self.shares)}"
            )

        enumerator = CombinationEnumerator(len(self.shares), self.k)
        total = len(enumerator)
        _logger.info(
            "Testing %d combinations of %d shares (k=%d, workers=%d)",
            total,
            len(self.shares),
            self.k,
            self.workers,
        )

        points = [share.point for share in self.shares]
        if self.workers == 1:
            tally, failures = self._tally_sequential(points, enumerator, total)
        else:
            tally, failures = self._tally_parallel(points, enumerator, total)

        if not tally:
            raise NoConsensus(f"None of the {total} combinations produced a usable secret")

        winner = tally.majority(tie_break=self.tie_break)
        validated = sorted(self.shares[i].id for i in winner.members)
        wrong = [share.id for i, share in enumerate(self.shares) if i not in winner.members]

        _logger.info(
            "Secret %s agreed by %d/%d combinations (%d candidates, %d failed)",
            winner.secret,
            winner.count,
            total,
            len(tally),
            failures,
        )
        if wrong:
            _logger.warning("Wrong shares detected: %s", ", ".join(map(str, wrong)))

        return ConsensusResult(
            secret=winner.secret,
            agreeing=winner.count,
            total_subsets=total,
            successful_subsets=total - failures,
            candidates=len(tally),
            exemplar=tuple(self.shares[i].id for i in winner.exemplar),
            validated_ids=validated,
            wrong_share_ids=wrong,
        )

    def _deadline(self) -> Optional[float]:
        if not self.timeout:
            return None
        return time.monotonic() + self.timeout

    def _tally_sequential(
        self,
        points: Sequence[Point],
        enumerator: CombinationEnumerator,
        total: int,
    ) -> Tuple[CandidateTally, int]:
        deadline = self._deadline()
        tally = CandidateTally()
        failures = 0
        with tqdm(total=total, unit="subset", desc="combinations", disable=not self.progress, leave=False) as bar:
            for ordinal, subset in enumerate(enumerator):
                if deadline is not None and time.monotonic() > deadline:
                    raise ReconstructionTimeout(
                        f"Gave up after {ordinal} of {total} combinations ({self.timeout}s)"
                    )
                secret = _score_subset(points, subset, self.prime)
                if secret is None:
                    failures += 1
                else:
                    tally.record(secret, subset, ordinal)
                bar.update(1)
        return tally, failures

    def _tally_parallel(
        self,
        points: Sequence[Point],
        enumerator: CombinationEnumerator,
        total: int,
    ) -> Tuple[CandidateTally, int]:
        deadline = self._deadline()
        tally = CandidateTally()
        failures = 0
        timed_out = False
        batches = enumerator.batches(self.batch_size)
        # Futures in flight -> number of subsets they score.
        pending: Dict[Future, int] = {}
        limit = self.workers * 2
        executor = ProcessPoolExecutor(max_workers=self.workers)
        try:
            with tqdm(total=total, unit="subset", desc="combinations", disable=not self.progress, leave=False) as bar:
                while True:
                    if deadline is not None and time.monotonic() >= deadline:
                        timed_out = True
                        raise ReconstructionTimeout(
                            f"Gave up after {self.timeout}s with {tally.votes + failures} of {total} combinations scored"
                        )
                    for first_ordinal, chunk in islice(batches, limit - len(pending)):
                        future = executor.submit(_score_batch, points, self.prime, first_ordinal, chunk)
                        pending[future] = len(chunk)
                    if not pending:
                        break
                    remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
                    done, _ = wait(pending, timeout=remaining, return_when=FIRST_COMPLETED)
                    for future in done:
                        partial, failed = future.result()
                        tally.merge(partial)
                        failures += failed
                        bar.update(pending.pop(future))
        finally:
            executor.shutdown(wait=not timed_out, cancel_futures=timed_out)
        return tally, failures


def reconstruct(shares: Sequence[Share], k: int, **options) -> ConsensusResult:
    """Shortcut for ``ConsensusReconstructor(shares, k, **options).reconstruct()``."""
    return ConsensusReconstructor(shares, k, **options).reconstruct()


__all__ = [
    "Share",
    "Candidate",
    "CandidateTally",
    "ConsensusResult",
    "ConsensusReconstructor",
    "reconstruct",
    "FIRST_SEEN",
    "SMALLEST",
]
