"""
Clustering Engines

Two distance models, both driven by the shared DisjointSet.

Modules:
    explicit: Kruskal-style greedy merging over an explicit edge list
    neighbors: Hamming neighbor enumeration by combinational bit flips
    implicit: Largest k for a spacing threshold over bit-vectors

Explicit Model:
    1. Stable-sort edges by distance
    2. Merge until k clusters remain
    3. The next edge joining two clusters gives the spacing

Hamming Model:
    1. Collapse duplicate vectors (distance 0)
    2. Merge all pairs at distance 1..T-1
    3. The remaining cluster count is the answer
"""

from kspacing.engine.explicit import ExplicitClusteringEngine
from kspacing.engine.implicit import ImplicitClusteringDriver
from kspacing.engine.neighbors import HammingIndex, NeighborEnumerator

__all__ = [
    "ExplicitClusteringEngine",
    "ImplicitClusteringDriver",
    "HammingIndex",
    "NeighborEnumerator",
]
