"""
Explicit-Distance Clustering

Kruskal-style greedy merging over an explicit weighted edge list.

Algorithm:
    1. Stable-sort the edges ascending by distance (once, at construction)
    2. Seed a disjoint set with one cluster per element
    3. Union edge endpoints in ascending order until k clusters remain
    4. Keep reading edges; the first one that joins two different clusters
       carries the spacing of the k-clustering

Step 4 is the union that would take the forest from k to k - 1 clusters, so
the answer is the minimum distance between any two of the k clusters.

Example:
    >>> engine = ExplicitClusteringEngine(3, [(1, 2, 1), (2, 3, 2), (1, 3, 3)])
    >>> engine.cluster_count_after_merging(2)
    2
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence

import numpy as np

from kspacing.config import SpacingConfig
from kspacing.errors import IndexOutOfRange, InsufficientEdges, InvalidClusterTarget
from kspacing.types.graph import EdgeGraph, WeightedEdge
from kspacing.types.results import MergeStageRecord, SpacingResult
from kspacing.utils.clustering import DisjointSet
from kspacing.utils.telemetry import current_stage, record_merges, telemetry_stage

logger = logging.getLogger(__name__)

EdgeLike = WeightedEdge | Sequence[int | float]


class ExplicitClusteringEngine:
    """
    Spacing of a k-clustering for an explicit weighted graph.

    The sorted edge sequence is shared by every query; each call to
    cluster_count_after_merging() builds its own disjoint set, so one engine
    answers any number of k values.
    """

    def __init__(
        self,
        node_count: int,
        edges: Iterable[EdgeLike],
        *,
        label_base: int | None = None,
        config: SpacingConfig | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            node_count: Number of elements M
            edges: WeightedEdge objects or (a, b, distance) triples, any order
            label_base: Label of the first element; defaults to config.label_base
            config: Configuration (defaults read from environment)

        Raises:
            IndexOutOfRange: If an edge references a label outside
                [label_base, label_base + node_count)
        """
        self._config = config or SpacingConfig()
        self._debug = self._config.debug
        self._node_count = node_count
        self._label_base = self._config.label_base if label_base is None else label_base

        started = time.perf_counter()

        sources: list[int] = []
        targets: list[int] = []
        distances: list[int | float] = []
        for edge in edges:
            if isinstance(edge, WeightedEdge):
                a, b, d = edge.source, edge.target, edge.distance
            else:
                a, b, d = edge
            sources.append(self._element(int(a)))
            targets.append(self._element(int(b)))
            distances.append(d)

        # Stable sort keeps file order among equal distances
        order = np.argsort(np.asarray(distances), kind="stable").tolist()
        self._sources = [sources[i] for i in order]
        self._targets = [targets[i] for i in order]
        self._distances = [distances[i] for i in order]

        self._sort_ms = int((time.perf_counter() - started) * 1000)

        if self._debug:
            logger.debug(
                f"Sorted {len(self._distances)} edges over {node_count} elements "
                f"in {self._sort_ms}ms"
            )

    @classmethod
    def from_graph(
        cls,
        graph: EdgeGraph,
        *,
        config: SpacingConfig | None = None,
    ) -> "ExplicitClusteringEngine":
        """Build an engine from a parsed EdgeGraph, honoring its label_base."""
        return cls(
            graph.node_count,
            graph.edges,
            label_base=graph.label_base,
            config=config,
        )

    @property
    def node_count(self) -> int:
        return self._node_count

    @property
    def edge_count(self) -> int:
        return len(self._distances)

    def _element(self, label: int) -> int:
        element = label - self._label_base
        if element < 0 or element >= self._node_count:
            raise IndexOutOfRange(
                f"Edge label {label} is outside "
                f"[{self._label_base}, {self._label_base + self._node_count})"
            )
        return element

    def _check_target(self, k: int) -> None:
        if k < 2 or k >= self._node_count:
            raise InvalidClusterTarget(
                f"k must follow 2 <= k < M (M = {self._node_count}), got {k}"
            )

    def _merge(self, k: int) -> tuple[int | float, int]:
        """
        Merge down to k clusters and find the spacing edge.

        One stage record is emitted per call, including calls that end in
        InsufficientEdges.

        Returns:
            (spacing, edges_consumed)
        """
        started = time.perf_counter()
        ds = DisjointSet(self._node_count)
        edge_count = len(self._distances)
        index = 0
        merges = 0

        try:
            while ds.count() > k:
                if index >= edge_count:
                    raise InsufficientEdges(
                        f"Edges exhausted with {ds.count()} clusters left; cannot reach k={k}"
                    )
                a, b = self._sources[index], self._targets[index]
                index += 1
                if ds.union(a, b):
                    merges += 1
                    if self._debug:
                        logger.debug(
                            f"Merged {a + self._label_base}-{b + self._label_base} "
                            f"({self._distances[index - 1]}), {ds.count()} clusters left"
                        )

            while index < edge_count:
                a, b = self._sources[index], self._targets[index]
                index += 1
                if not ds.connected(a, b):
                    return self._distances[index - 1], index

            raise InsufficientEdges(
                f"No edge joins two of the {k} clusters; spacing is unbounded"
            )
        finally:
            record_merges(
                MergeStageRecord(
                    stage=current_stage(),
                    candidates=index,
                    merges=merges,
                    clusters_after=ds.count(),
                    latency_ms=int((time.perf_counter() - started) * 1000),
                )
            )

    def cluster_count_after_merging(self, k: int) -> int | float:
        """
        Maximum spacing achievable with exactly k clusters.

        Args:
            k: Target cluster count, 2 <= k < M

        Returns:
            Minimum distance between any two of the k clusters

        Raises:
            InvalidClusterTarget: If k is out of range (before any union)
            InsufficientEdges: If the edges cannot produce an answer
        """
        self._check_target(k)
        spacing, _ = self._merge(k)
        return spacing

    def run(self, k: int) -> SpacingResult:
        """Compute the spacing for k clusters with timing information."""
        self._check_target(k)

        started = time.perf_counter()
        with telemetry_stage(f"explicit_k{k}"):
            spacing, consumed = self._merge(k)
        merge_ms = int((time.perf_counter() - started) * 1000)

        logger.info(
            f"Spacing for k={k}: {spacing} "
            f"({consumed}/{len(self._distances)} edges, {merge_ms}ms)"
        )
        return SpacingResult(
            cluster_target=k,
            spacing=spacing,
            node_count=self._node_count,
            edge_count=len(self._distances),
            edges_consumed=consumed,
            timing={"sort": self._sort_ms, "merge": merge_ms},
        )

    def spacings(self, ks: Iterable[int]) -> dict[int, int | float]:
        """Spacing for each requested k, in the order given."""
        return {k: self.cluster_count_after_merging(k) for k in ks}
