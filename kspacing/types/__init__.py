"""
Type Definitions

Pydantic models for the clustering inputs and results.

Input Models:
    - WeightedEdge, EdgeGraph - Explicit-distance model
    - BitVectorSet - Implicit (Hamming) model

Result Models:
    - SpacingResult - Spacing of a k-clustering
    - ClusterCountResult - Largest k for a spacing threshold

Telemetry Models:
    - MergeStageRecord, StageMergeBreakdown, MergeReport
"""

from kspacing.types.graph import BitVectorSet, EdgeGraph, WeightedEdge
from kspacing.types.results import (
    ClusterCountResult,
    MergeReport,
    MergeStageRecord,
    SpacingResult,
    StageMergeBreakdown,
)

__all__ = [
    # Input Models
    "WeightedEdge",
    "EdgeGraph",
    "BitVectorSet",
    # Result Models
    "SpacingResult",
    "ClusterCountResult",
    # Telemetry Models
    "MergeStageRecord",
    "StageMergeBreakdown",
    "MergeReport",
]
