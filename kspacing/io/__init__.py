"""
Input Readers

Text-file parsing for both distance models.

Modules:
    readers: Edge-list and bit-vector formats
"""

from kspacing.io.readers import (
    parse_bit_vector_lines,
    parse_edge_lines,
    read_bit_vector_file,
    read_edge_file,
)

__all__ = [
    "parse_edge_lines",
    "parse_bit_vector_lines",
    "read_edge_file",
    "read_bit_vector_file",
]
