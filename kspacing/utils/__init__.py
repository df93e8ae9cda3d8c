"""
Utility Functions

Core algorithms and helper functions used throughout the package.

Modules:
    clustering: Union-Find (disjoint set) shared by both distance models
    bits: Bit-vector packing, Hamming distance and brute-force oracles
    telemetry: Request-scoped merge telemetry
"""

from kspacing.utils.bits import (
    bruteforce_cluster_count,
    format_bits,
    hamming_distance,
    hamming_pairs_bruteforce,
    pack_bits,
)
from kspacing.utils.clustering import DisjointSet, union_find_components
from kspacing.utils.telemetry import MergeCollector, telemetry_collector, telemetry_stage

__all__ = [
    "DisjointSet",
    "union_find_components",
    "pack_bits",
    "format_bits",
    "hamming_distance",
    "hamming_pairs_bruteforce",
    "bruteforce_cluster_count",
    "MergeCollector",
    "telemetry_collector",
    "telemetry_stage",
]
