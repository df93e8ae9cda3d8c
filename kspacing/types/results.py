"""
Result Types

Answers returned by the clustering engines, plus merge telemetry records.

API Result Models:
    - SpacingResult: Explicit model, spacing of a k-clustering
    - ClusterCountResult: Hamming model, largest k for a spacing threshold

Telemetry Models:
    - MergeStageRecord: Merges performed during one stage
    - StageMergeBreakdown: Aggregate per stage label
    - MergeReport: Summary over a whole request
"""

from pydantic import BaseModel, Field


# -----------------------------------------------------------------------------
# API Result Models
# -----------------------------------------------------------------------------


class SpacingResult(BaseModel):
    """
    Result from the explicit-distance engine.

    Attributes:
        cluster_target: Requested number of clusters k
        spacing: Minimum distance between two of the k clusters
        node_count: Number of elements M
        edge_count: Number of edges available
        edges_consumed: Edges read from the sorted sequence, answer edge included
        timing: Timing information for each phase (milliseconds)
    """

    cluster_target: int
    spacing: int | float
    node_count: int
    edge_count: int
    edges_consumed: int
    timing: dict[str, int] = {}

    @property
    def total_time_ms(self) -> int:
        """Total computation time in milliseconds."""
        return sum(self.timing.values())


class ClusterCountResult(BaseModel):
    """
    Result from the Hamming-distance driver.

    Attributes:
        spacing_threshold: Required spacing T
        clusters: Largest k with a k-clustering of spacing >= T
        element_count: Number of elements M (duplicates included)
        distinct_vectors: Number of distinct bit-vectors
        bit_length: Vector length L
        timing: Timing information for each phase (milliseconds)
    """

    spacing_threshold: int
    clusters: int
    element_count: int
    distinct_vectors: int
    bit_length: int
    timing: dict[str, int] = {}

    @property
    def total_time_ms(self) -> int:
        """Total computation time in milliseconds."""
        return sum(self.timing.values())


# -----------------------------------------------------------------------------
# Merge Telemetry
# -----------------------------------------------------------------------------


class MergeStageRecord(BaseModel):
    """Merges performed by one stage of a clustering run."""

    stage: str
    candidates: int = Field(default=0, description="Edges or flip candidates examined")
    merges: int = Field(default=0, description="Successful (set-joining) unions")
    clusters_after: int = Field(..., description="count() at the end of the stage")
    latency_ms: int = 0


class StageMergeBreakdown(BaseModel):
    """Merge totals for one stage label."""

    stage: str
    runs: int = 0
    candidates: int = 0
    merges: int = 0
    total_latency_ms: int = 0


class MergeReport(BaseModel):
    """Aggregate merge telemetry for one request."""

    total_stages: int = 0
    total_candidates: int = 0
    total_merges: int = 0
    total_latency_ms: int = 0
    final_clusters: int | None = None
    by_stage: list[StageMergeBreakdown] = Field(default_factory=list)
