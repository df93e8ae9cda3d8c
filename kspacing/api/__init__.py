"""
Public API

Modules:
    convenience: One-call helpers for file inputs
"""

from kspacing.api.convenience import max_clusters, max_spacing

__all__ = ["max_spacing", "max_clusters"]
