"""
Bit-Vector Helpers

Fixed-length bit-vectors are packed into Python integers. Position 0 is the
first bit of a file row and maps to the most significant bit, so
int("0110", 2) packs the row "0 1 1 0".

The brute-force helpers compare every pair and are only meant for small
collections (verification and tests).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np
from scipy.spatial.distance import cdist

from kspacing.utils.clustering import union_find_components


def pack_bits(bits: Sequence[int | str] | str, bit_length: int | None = None) -> int:
    """
    Pack a sequence of 0/1 values into an integer.

    Args:
        bits: Either a string like "0110" or a sequence of 0/1 ints or "0"/"1" tokens
        bit_length: Expected length; checked when given

    Raises:
        ValueError: On a length mismatch or a token other than 0/1
    """
    tokens = list(bits)
    if bit_length is not None and len(tokens) != bit_length:
        raise ValueError(f"Expected {bit_length} bits, got {len(tokens)}")

    value = 0
    for token in tokens:
        if token in (0, "0"):
            value <<= 1
        elif token in (1, "1"):
            value = (value << 1) | 1
        else:
            raise ValueError(f"Invalid bit value: {token!r}")
    return value


def format_bits(value: int, bit_length: int) -> str:
    """Render a packed vector as a string of 0/1 characters."""
    return format(value, f"0{bit_length}b") if bit_length else ""


def flip_mask(position: int, bit_length: int) -> int:
    """Mask that flips the bit at `position` (0 = first/most significant)."""
    return 1 << (bit_length - 1 - position)


def hamming_distance(a: int, b: int) -> int:
    """Number of differing bits between two packed vectors."""
    return (a ^ b).bit_count()


def unpack_matrix(vectors: Sequence[int], bit_length: int) -> np.ndarray:
    """Unpack vectors into an (n x L) uint8 matrix of bits."""
    matrix = np.zeros((len(vectors), bit_length), dtype=np.uint8)
    for row, value in enumerate(vectors):
        for col in range(bit_length):
            if value & flip_mask(col, bit_length):
                matrix[row, col] = 1
    return matrix


def _distance_matrix(vectors: Sequence[int], bit_length: int) -> np.ndarray:
    """
    Pairwise Hamming distance matrix in bit counts.

    scipy's "hamming" metric returns the fraction of differing positions,
    so it is scaled back by L and rounded.
    """
    matrix = unpack_matrix(vectors, bit_length)
    fractions = cdist(matrix, matrix, metric="hamming")
    return np.rint(fractions * bit_length).astype(np.int64)


def hamming_pairs_bruteforce(
    owners: dict[int, int] | Iterable[tuple[int, int]],
    bit_length: int,
    distance: int,
) -> set[tuple[int, int]]:
    """
    All owner pairs whose vectors differ in exactly `distance` bits.

    Args:
        owners: Mapping (or pairs) of packed vector -> element identifier
        bit_length: Vector length L
        distance: Target Hamming distance

    Returns:
        Set of (smaller_id, larger_id) pairs
    """
    items = list(owners.items()) if isinstance(owners, dict) else list(owners)
    if len(items) < 2:
        return set()

    vectors = [vector for vector, _ in items]
    ids = [owner for _, owner in items]
    distances = _distance_matrix(vectors, bit_length)

    rows, cols = np.nonzero(np.triu(distances == distance, k=1))
    return {
        (min(ids[i], ids[j]), max(ids[i], ids[j]))
        for i, j in zip(rows.tolist(), cols.tolist())
    }


def bruteforce_cluster_count(
    vectors: Sequence[int],
    bit_length: int,
    spacing_threshold: int,
) -> int:
    """
    Cluster count after joining every pair closer than `spacing_threshold`.

    Quadratic; used as an oracle for small inputs.
    """
    if not vectors:
        return 0
    distances = _distance_matrix(vectors, bit_length)
    rows, cols = np.nonzero(np.triu(distances < spacing_threshold, k=1))
    edges = list(zip(rows.tolist(), cols.tolist()))
    return len(union_find_components(len(vectors), edges))
