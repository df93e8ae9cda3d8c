"""
Input Readers

Parse the two plain-text input formats into EdgeGraph / BitVectorSet.

Edge format (explicit model):
    [number_of_nodes]
    [node_a] [node_b] [distance]
    ...

Bit-vector format (Hamming model):
    [number_of_nodes] [bits_per_node]
    [bit 1] [bit 2] ... [bit L]
    ...

Blank lines are ignored. Errors name the 1-based line number.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from pathlib import Path

from kspacing.types.graph import BitVectorSet, EdgeGraph, WeightedEdge
from kspacing.utils.bits import pack_bits

logger = logging.getLogger(__name__)


def _numbered(lines: Iterable[str]) -> Iterable[tuple[int, list[str]]]:
    """Yield (line_number, tokens) for non-blank lines."""
    for number, line in enumerate(lines, 1):
        tokens = line.split()
        if tokens:
            yield number, tokens


def _parse_int(token: str, number: int, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"Line {number}: {what} must be an integer, got {token!r}") from None


def _parse_distance(token: str, number: int) -> int | float:
    try:
        return int(token)
    except ValueError:
        pass
    try:
        value = float(token)
    except ValueError:
        raise ValueError(f"Line {number}: distance must be numeric, got {token!r}") from None
    if not math.isfinite(value):
        raise ValueError(f"Line {number}: distance must be finite, got {token!r}")
    return value


def parse_edge_lines(lines: Iterable[str], *, label_base: int = 1) -> EdgeGraph:
    """
    Parse the explicit edge format.

    Args:
        lines: Text lines (header first)
        label_base: Label of the first node in the data

    Returns:
        EdgeGraph with edges in file order

    Raises:
        ValueError: On a missing header or a malformed row
    """
    rows = _numbered(lines)
    header = next(iter(rows), None)
    if header is None:
        raise ValueError("Missing header line with the number of nodes")

    number, tokens = header
    if len(tokens) != 1:
        raise ValueError(f"Line {number}: header must hold only the number of nodes")
    node_count = _parse_int(tokens[0], number, "number of nodes")

    edges: list[WeightedEdge] = []
    for number, tokens in rows:
        if len(tokens) != 3:
            raise ValueError(f"Line {number}: expected 'node node distance', got {len(tokens)} fields")
        source = _parse_int(tokens[0], number, "node label")
        target = _parse_int(tokens[1], number, "node label")
        if source < 0 or target < 0:
            raise ValueError(f"Line {number}: node labels must be non-negative")
        distance = _parse_distance(tokens[2], number)
        if distance < 0:
            raise ValueError(f"Line {number}: distance must be non-negative, got {distance}")
        edges.append(WeightedEdge(source=source, target=target, distance=distance))

    logger.debug(f"Parsed {len(edges)} edges over {node_count} nodes")
    return EdgeGraph(node_count=node_count, edges=edges, label_base=label_base)


def parse_bit_vector_lines(lines: Iterable[str]) -> BitVectorSet:
    """
    Parse the bit-vector format.

    Rows may list bits separated by whitespace ("0 1 1 0") or as a single
    token ("0110"). Element labels follow row order starting at 0.

    Args:
        lines: Text lines (header first)

    Returns:
        BitVectorSet with one packed vector per element

    Raises:
        ValueError: On a malformed header or row, or a row count that does
            not match the header
    """
    rows = _numbered(lines)
    header = next(iter(rows), None)
    if header is None:
        raise ValueError("Missing header line with the number of nodes and bits")

    number, tokens = header
    if len(tokens) != 2:
        raise ValueError(f"Line {number}: header must be '[number_of_nodes] [bits_per_node]'")
    node_count = _parse_int(tokens[0], number, "number of nodes")
    bit_length = _parse_int(tokens[1], number, "bits per node")
    if bit_length < 1:
        raise ValueError(f"Line {number}: bits per node must be positive, got {bit_length}")

    vectors: list[int] = []
    for number, tokens in rows:
        bits: list[str] | str = tokens[0] if len(tokens) == 1 else tokens
        try:
            vectors.append(pack_bits(bits, bit_length))
        except ValueError as e:
            raise ValueError(f"Line {number}: {e}") from None

    if len(vectors) != node_count:
        raise ValueError(f"Header declares {node_count} nodes but {len(vectors)} rows were found")

    logger.debug(f"Parsed {node_count} vectors of {bit_length} bits")
    return BitVectorSet(bit_length=bit_length, vectors=vectors)


def read_edge_file(path: str | Path, *, label_base: int = 1) -> EdgeGraph:
    """Read an explicit edge file. Raises FileNotFoundError if missing."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Edge file not found: {path}")
    with open(path, encoding="utf-8") as f:
        return parse_edge_lines(f, label_base=label_base)


def read_bit_vector_file(path: str | Path) -> BitVectorSet:
    """Read a bit-vector file. Raises FileNotFoundError if missing."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Bit-vector file not found: {path}")
    with open(path, encoding="utf-8") as f:
        return parse_bit_vector_lines(f)
