"""
Hamming Neighbor Enumeration

Finds, for every stored bit-vector, the stored vectors at an exact Hamming
distance d without comparing all pairs.

Algorithm:
    For each origin vector, choose d of the L bit positions to flip by
    depth-first backtracking over a forward-only position cursor: flip a bit
    on the working copy, recurse one level deeper starting after it, then
    flip it back. At depth d the working copy is looked up in the index.
    Each origin explores exactly C(L, d) candidates, which stays tractable
    when d is small even for very large collections.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator

from kspacing.errors import InvalidDistanceParameter
from kspacing.types.results import MergeStageRecord
from kspacing.utils.bits import flip_mask, format_bits
from kspacing.utils.clustering import DisjointSet
from kspacing.utils.telemetry import current_stage, record_merges

logger = logging.getLogger(__name__)


class HammingIndex:
    """
    Distinct bit-vectors mapped to the element that owns them.

    Vectors are packed integers, so equality and hashing are structural.
    A duplicate vector keeps its first-seen owner.
    """

    __slots__ = ("_bit_length", "_owners")

    def __init__(self, bit_length: int) -> None:
        if bit_length < 1:
            raise ValueError(f"Bit length must be positive, got {bit_length}")
        self._bit_length = bit_length
        self._owners: dict[int, int] = {}

    @property
    def bit_length(self) -> int:
        return self._bit_length

    def __len__(self) -> int:
        return len(self._owners)

    def __contains__(self, vector: int) -> bool:
        return vector in self._owners

    def __iter__(self) -> Iterator[int]:
        return iter(self._owners)

    def add(self, vector: int, element: int) -> int | None:
        """
        Store vector for element unless already present.

        Returns:
            The existing owner if vector was already stored, else None
        """
        owner = self._owners.get(vector)
        if owner is not None:
            return owner
        self._owners[vector] = element
        return None

    def owner(self, vector: int) -> int | None:
        """Element owning vector, or None if it is not stored."""
        return self._owners.get(vector)

    def items(self):
        """(vector, owner) pairs in insertion order."""
        return self._owners.items()

    def owners(self) -> dict[int, int]:
        """Copy of the vector -> owner mapping."""
        return dict(self._owners)


class NeighborEnumerator:
    """Unions every stored vector with its stored neighbors at distance d."""

    def __init__(
        self,
        index: HammingIndex,
        disjoint_set: DisjointSet,
        *,
        debug: bool = False,
    ) -> None:
        self._index = index
        self._ds = disjoint_set
        self._debug = debug
        self._bit_length = index.bit_length
        self._masks = [flip_mask(i, index.bit_length) for i in range(index.bit_length)]

    @staticmethod
    def _check_distance(distance: int) -> None:
        if distance < 1:
            raise InvalidDistanceParameter(
                f"Hamming distance must be a positive integer, got {distance}"
            )

    def _flip_combinations(
        self,
        working: int,
        distance: int,
        level: int,
        cursor: int,
    ) -> Iterator[int]:
        """Yield working with each combination of `distance - level` more bits flipped."""
        if level == distance:
            yield working
            return

        # Leave room for the flips still to come
        for i in range(cursor, self._bit_length - (distance - level) + 1):
            working ^= self._masks[i]
            yield from self._flip_combinations(working, distance, level + 1, i + 1)
            working ^= self._masks[i]

    def candidates(self, vector: int, distance: int) -> Iterator[int]:
        """Every vector exactly `distance` bits away from vector, stored or not."""
        self._check_distance(distance)
        return self._flip_combinations(vector, distance, 0, 0)

    def neighbors(self, vector: int, distance: int) -> Iterator[int]:
        """Stored vectors exactly `distance` bits away from vector."""
        for candidate in self.candidates(vector, distance):
            if candidate in self._index:
                yield candidate

    def merge_at_distance(self, distance: int) -> int:
        """
        Union every stored pair at exactly `distance` bits.

        Redundant discovery of the same pair from both ends is harmless
        since union() is a no-op for already joined elements.

        Returns:
            Number of successful (set-joining) unions
        """
        self._check_distance(distance)
        started = time.perf_counter()
        examined = 0
        merges = 0

        for vector, owner in self._index.items():
            for candidate in self._flip_combinations(vector, distance, 0, 0):
                examined += 1
                other = self._index.owner(candidate)
                if other is None:
                    continue
                if self._debug:
                    logger.debug(
                        f"Found {format_bits(candidate, self._bit_length)} at distance "
                        f"{distance} from {format_bits(vector, self._bit_length)}"
                    )
                if self._ds.union(owner, other):
                    merges += 1

        latency_ms = int((time.perf_counter() - started) * 1000)
        record_merges(
            MergeStageRecord(
                stage=current_stage(),
                candidates=examined,
                merges=merges,
                clusters_after=self._ds.count(),
                latency_ms=latency_ms,
            )
        )
        logger.info(
            f"Distance {distance}: {merges} merges from {examined} candidates, "
            f"{self._ds.count()} clusters left ({latency_ms}ms)"
        )
        return merges

    def pairs(self, distance: int) -> set[tuple[int, int]]:
        """
        Owner pairs found at exactly `distance` bits, as (smaller, larger).

        Read-only: does not touch the disjoint set.
        """
        found: set[tuple[int, int]] = set()
        for vector, owner in self._index.items():
            for neighbor in self.neighbors(vector, distance):
                other = self._index.owner(neighbor)
                found.add((min(owner, other), max(owner, other)))
        return found
