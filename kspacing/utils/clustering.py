"""
Clustering Algorithms

Union-Find (Disjoint Set Union) shared by the explicit-distance engine and
the Hamming-distance driver.

Both models seed one singleton set per element and shrink the partition
through union() calls; count() is the number of clusters left.
"""

from __future__ import annotations

from collections import defaultdict

from kspacing.errors import IndexOutOfRange


class DisjointSet:
    """
    Union-Find data structure with path compression and union by size.

    Time Complexity:
        - find(): O(α(n)) amortized (nearly constant)
        - union(): O(α(n)) amortized
        - count(): O(1)
        where α is the inverse Ackermann function
    """

    __slots__ = ("_parent", "_size", "_count")

    def __init__(self, n: int) -> None:
        """Initialize with n singleton sets labeled 0 to n-1."""
        if n < 0:
            raise ValueError(f"Element count must be non-negative, got {n}")
        self._parent = list(range(n))
        self._size = [1] * n
        self._count = n

    def __len__(self) -> int:
        return len(self._parent)

    def _check(self, x: int) -> None:
        if x < 0 or x >= len(self._parent):
            raise IndexOutOfRange(
                f"Element {x} is outside [0, {len(self._parent)})"
            )

    def find(self, x: int) -> int:
        """Find root of element x, re-pointing every node on the path to it."""
        self._check(x)
        parent = self._parent

        root = x
        while parent[root] != root:
            root = parent[root]

        while parent[x] != root:
            parent[x], x = root, parent[x]
        return root

    def union(self, x: int, y: int) -> bool:
        """Union components containing x and y. Returns True if merged."""
        rx, ry = self.find(x), self.find(y)
        if rx == ry:
            return False

        # Smaller tree goes under the larger; ties attach y's root under x's
        if self._size[rx] < self._size[ry]:
            rx, ry = ry, rx
        self._parent[ry] = rx
        self._size[rx] += self._size[ry]
        self._count -= 1
        return True

    def count(self) -> int:
        """Number of disjoint sets remaining."""
        return self._count

    def connected(self, x: int, y: int) -> bool:
        """Check if x and y are in the same component."""
        return self.find(x) == self.find(y)

    def size_of(self, x: int) -> int:
        """Number of elements in the set containing x."""
        return self._size[self.find(x)]

    def groups(self) -> list[list[int]]:
        """Get all components as lists of element identifiers."""
        components: dict[int, list[int]] = defaultdict(list)
        for i in range(len(self._parent)):
            components[self.find(i)].append(i)
        return list(components.values())


def union_find_components(
    n: int,
    edges: list[tuple[int, int]],
) -> list[list[int]]:
    """
    Find connected components given edges.

    Args:
        n: Number of elements
        edges: List of (i, j) pairs to join

    Returns:
        List of components (each is a list of element identifiers)
    """
    ds = DisjointSet(n)
    for i, j in edges:
        ds.union(i, j)
    return ds.groups()
