"""
Hamming-Distance Clustering

Largest k such that a k-clustering of bit-vectors has spacing >= T.

Algorithm:
    1. Build: index the vectors, unioning every duplicate with the first
       element that carried the same vector (distance 0)
    2. For each distance 1..T-1, union every stored pair at that distance
       (see NeighborEnumerator)
    3. count() is the answer: every pair closer than T has been merged and
       no pair at distance >= T ever was

Example:
    >>> vectors = BitVectorSet(bit_length=3, vectors=[0b000, 0b001, 0b111])
    >>> ImplicitClusteringDriver(vectors).max_k_with_spacing_at_least(2)
    2
"""

from __future__ import annotations

import logging
import time

from kspacing.config import SpacingConfig
from kspacing.engine.neighbors import HammingIndex, NeighborEnumerator
from kspacing.errors import InvalidDistanceParameter
from kspacing.types.graph import BitVectorSet
from kspacing.types.results import ClusterCountResult, MergeStageRecord
from kspacing.utils.bits import format_bits, hamming_pairs_bruteforce
from kspacing.utils.clustering import DisjointSet
from kspacing.utils.telemetry import current_stage, record_merges, telemetry_stage

logger = logging.getLogger(__name__)


class ImplicitClusteringDriver:
    """
    Orchestrates duplicate collapse and neighbor enumeration.

    Each query builds fresh structures, so one driver answers any number of
    thresholds.
    """

    def __init__(
        self,
        vectors: BitVectorSet,
        *,
        config: SpacingConfig | None = None,
    ) -> None:
        self._vectors = vectors
        self._config = config or SpacingConfig()
        self._debug = self._config.debug

    @property
    def element_count(self) -> int:
        return self._vectors.element_count

    @property
    def bit_length(self) -> int:
        return self._vectors.bit_length

    def build(self) -> tuple[HammingIndex, DisjointSet]:
        """
        Index the vectors and merge duplicates.

        Returns:
            (index of distinct vectors, disjoint set with all distance-0 merges)
        """
        started = time.perf_counter()
        bit_length = self._vectors.bit_length
        index = HammingIndex(bit_length)
        ds = DisjointSet(self._vectors.element_count)
        merges = 0

        for label, vector in enumerate(self._vectors.vectors):
            duplicate_of = index.add(vector, label)
            if self._debug:
                logger.debug(f"Element {label}: {format_bits(vector, bit_length)}")
            if duplicate_of is not None:
                if self._debug:
                    logger.debug(f"Element {label} duplicates element {duplicate_of}")
                if ds.union(label, duplicate_of):
                    merges += 1

        record_merges(
            MergeStageRecord(
                stage=current_stage(),
                candidates=self._vectors.element_count,
                merges=merges,
                clusters_after=ds.count(),
                latency_ms=int((time.perf_counter() - started) * 1000),
            )
        )
        logger.info(
            f"Indexed {len(index)} distinct vectors from {self._vectors.element_count} "
            f"elements, {ds.count()} clusters after duplicate collapse"
        )
        return index, ds

    @staticmethod
    def _check_threshold(spacing_threshold: int) -> None:
        if spacing_threshold < 1:
            raise InvalidDistanceParameter(
                f"Spacing threshold must be a positive integer, got {spacing_threshold}"
            )

    def _cluster(self, spacing_threshold: int, timing: dict[str, int]) -> tuple[int, int]:
        """Returns (cluster count, distinct vectors)."""
        started = time.perf_counter()
        with telemetry_stage("hamming_d0"):
            index, ds = self.build()
        timing["build"] = int((time.perf_counter() - started) * 1000)

        enumerator = NeighborEnumerator(index, ds, debug=self._debug)
        for distance in range(1, spacing_threshold):
            started = time.perf_counter()
            with telemetry_stage(f"hamming_d{distance}"):
                enumerator.merge_at_distance(distance)
            timing[f"distance_{distance}"] = int((time.perf_counter() - started) * 1000)

        return ds.count(), len(index)

    def max_k_with_spacing_at_least(self, spacing_threshold: int) -> int:
        """
        Largest k for which a k-clustering has spacing >= spacing_threshold.

        Args:
            spacing_threshold: Required spacing T >= 1

        Raises:
            InvalidDistanceParameter: If T < 1 (before any work)
        """
        self._check_threshold(spacing_threshold)
        clusters, _ = self._cluster(spacing_threshold, {})
        return clusters

    def run(self, spacing_threshold: int) -> ClusterCountResult:
        """Compute the cluster count for a threshold with timing information."""
        self._check_threshold(spacing_threshold)
        timing: dict[str, int] = {}
        clusters, distinct = self._cluster(spacing_threshold, timing)

        logger.info(
            f"Spacing >= {spacing_threshold}: {clusters} clusters "
            f"({sum(timing.values())}ms)"
        )
        return ClusterCountResult(
            spacing_threshold=spacing_threshold,
            clusters=clusters,
            element_count=self._vectors.element_count,
            distinct_vectors=distinct,
            bit_length=self._vectors.bit_length,
            timing=timing,
        )

    def verify(self, distance: int) -> bool:
        """
        Cross-check the enumerator against brute-force pairwise comparison.

        Raises:
            InvalidDistanceParameter: If distance < 1
            ValueError: If the collection exceeds config.verify_max_vectors
        """
        if distance < 1:
            raise InvalidDistanceParameter(
                f"Hamming distance must be a positive integer, got {distance}"
            )
        distinct = self._vectors.distinct_count()
        if distinct > self._config.verify_max_vectors:
            raise ValueError(
                f"{distinct} distinct vectors exceed verify_max_vectors "
                f"({self._config.verify_max_vectors})"
            )

        index = HammingIndex(self._vectors.bit_length)
        for label, vector in enumerate(self._vectors.vectors):
            index.add(vector, label)

        # Pair discovery is read-only, the disjoint set is never unioned
        enumerator = NeighborEnumerator(index, DisjointSet(self._vectors.element_count))
        found = enumerator.pairs(distance)
        expected = hamming_pairs_bruteforce(index.owners(), self._vectors.bit_length, distance)

        if found != expected:
            logger.warning(
                f"Distance {distance}: enumerator found {len(found)} pairs, "
                f"brute force found {len(expected)}"
            )
        return found == expected
