"""
Convenience Functions

Top-level functions that read an input file and answer one query without
explicit engine instantiation. These are designed for quick scripts and
REPL usage.

Example:
    >>> from kspacing import max_spacing, max_clusters
    >>> max_spacing("clustering1.txt", k=4).spacing
    >>> max_clusters("clustering_big.txt", spacing=3).clusters
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from kspacing.types.results import ClusterCountResult, SpacingResult


def max_spacing(
    path: str | Path,
    k: int,
    **kwargs: Any,
) -> "SpacingResult":
    """
    Spacing of a k-clustering for an explicit edge file.

    Args:
        path: Path to the edge file
        k: Target number of clusters
        **kwargs: SpacingConfig overrides (e.g. label_base=0, debug=True)
    """
    from kspacing.config import SpacingConfig
    from kspacing.engine.explicit import ExplicitClusteringEngine
    from kspacing.io.readers import read_edge_file

    config = SpacingConfig(**kwargs)
    graph = read_edge_file(path, label_base=config.label_base)
    return ExplicitClusteringEngine.from_graph(graph, config=config).run(k)


def max_clusters(
    path: str | Path,
    spacing: int,
    **kwargs: Any,
) -> "ClusterCountResult":
    """
    Largest k with spacing >= `spacing` for a bit-vector file.

    Args:
        path: Path to the bit-vector file
        spacing: Required spacing threshold T
        **kwargs: SpacingConfig overrides
    """
    from kspacing.config import SpacingConfig
    from kspacing.engine.implicit import ImplicitClusteringDriver
    from kspacing.io.readers import read_bit_vector_file

    config = SpacingConfig(**kwargs)
    vectors = read_bit_vector_file(path)
    return ImplicitClusteringDriver(vectors, config=config).run(spacing)
