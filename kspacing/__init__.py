"""
kspacing - Maximum-Spacing k-Clustering

Kruskal-style clustering over two distance models: an explicit weighted
graph and an implicit graph of bit-vectors under Hamming distance.

Example:
    >>> from kspacing import max_spacing, max_clusters
    >>> max_spacing("clustering1.txt", k=4).spacing
    >>> max_clusters("clustering_big.txt", spacing=3).clusters

Main Classes:
    ExplicitClusteringEngine: Spacing of a k-clustering over weighted edges
    ImplicitClusteringDriver: Largest k for a spacing threshold over bit-vectors
    NeighborEnumerator: Exact-distance Hamming neighbor discovery
    DisjointSet: Union-find shared by both models
    SpacingConfig: Configuration management
"""

__version__ = "0.1.0"

# Public API - lazy imports keep `import kspacing` light
def __getattr__(name: str):
    """Lazy import public API components."""

    if name in ("ExplicitClusteringEngine", "ImplicitClusteringDriver", "NeighborEnumerator", "HammingIndex"):
        from kspacing import engine
        return getattr(engine, name)

    if name == "DisjointSet":
        from kspacing.utils.clustering import DisjointSet
        return DisjointSet

    if name == "SpacingConfig":
        from kspacing.config.settings import SpacingConfig
        return SpacingConfig

    # Convenience functions
    if name in ("max_spacing", "max_clusters"):
        from kspacing.api import convenience
        return getattr(convenience, name)

    # Errors
    if name in ("InvalidClusterTarget", "InvalidDistanceParameter", "IndexOutOfRange", "InsufficientEdges"):
        from kspacing import errors
        return getattr(errors, name)

    # Types
    if name in ("WeightedEdge", "EdgeGraph", "BitVectorSet", "SpacingResult", "ClusterCountResult"):
        from kspacing import types
        return getattr(types, name)

    raise AttributeError(f"module 'kspacing' has no attribute {name!r}")


__all__ = [
    # Main classes
    "ExplicitClusteringEngine",
    "ImplicitClusteringDriver",
    "NeighborEnumerator",
    "HammingIndex",
    "DisjointSet",
    "SpacingConfig",

    # Convenience functions
    "max_spacing",
    "max_clusters",

    # Errors
    "InvalidClusterTarget",
    "InvalidDistanceParameter",
    "IndexOutOfRange",
    "InsufficientEdges",

    # Types
    "WeightedEdge",
    "EdgeGraph",
    "BitVectorSet",
    "SpacingResult",
    "ClusterCountResult",

    # Version
    "__version__",
]
