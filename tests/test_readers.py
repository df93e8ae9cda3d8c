"""
Tests for the edge and bit-vector readers.

Tests cover:
- Header and row parsing for both formats
- Blank lines and packed bit rows
- Line-numbered errors
- File access
"""

import pytest

from kspacing.io.readers import (
    parse_bit_vector_lines,
    parse_edge_lines,
    read_bit_vector_file,
    read_edge_file,
)


class TestParseEdgeLines:
    """Tests for the explicit edge format."""

    def test_parses_header_and_edges(self):
        """Edges keep file order and integer distances."""
        graph = parse_edge_lines(["3", "1 2 1", "2 3 2", "1 3 3"])
        assert graph.node_count == 3
        assert graph.label_base == 1
        assert [(e.source, e.target, e.distance) for e in graph.edges] == [
            (1, 2, 1),
            (2, 3, 2),
            (1, 3, 3),
        ]
        assert isinstance(graph.edges[0].distance, int)

    def test_float_distance(self):
        """Non-integer distances parse as floats."""
        graph = parse_edge_lines(["2", "1 2 0.75"])
        assert graph.edges[0].distance == pytest.approx(0.75)

    def test_blank_lines_ignored(self):
        """Blank lines, including trailing ones, are skipped."""
        graph = parse_edge_lines(["", "2", "", "1 2 4", "   ", ""])
        assert graph.edge_count == 1

    def test_label_base_passed_through(self):
        """label_base is recorded on the graph."""
        assert parse_edge_lines(["2", "0 1 1"], label_base=0).label_base == 0

    def test_missing_header(self):
        """An empty input has no header."""
        with pytest.raises(ValueError, match="Missing header"):
            parse_edge_lines([])

    def test_header_with_extra_fields(self):
        """The header holds only the node count."""
        with pytest.raises(ValueError, match="Line 1"):
            parse_edge_lines(["3 4"])

    def test_short_row(self):
        """Rows need three fields; the error names the line."""
        with pytest.raises(ValueError, match="Line 3"):
            parse_edge_lines(["3", "1 2 1", "2 3"])

    def test_non_numeric_distance(self):
        """Distances must be numeric."""
        with pytest.raises(ValueError, match="distance must be numeric"):
            parse_edge_lines(["2", "1 2 far"])

    def test_negative_distance(self):
        """Negative distances are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            parse_edge_lines(["2", "1 2 -1"])

    @pytest.mark.parametrize("token", ["nan", "inf", "-inf"])
    def test_non_finite_distance(self, token):
        """NaN and infinite distances are rejected with the line number."""
        with pytest.raises(ValueError, match="Line 3: distance must be finite"):
            parse_edge_lines(["3", "1 2 1", f"2 3 {token}"])

    def test_negative_label(self):
        """Negative labels are reported with the line number."""
        with pytest.raises(ValueError, match="Line 2: node labels must be non-negative"):
            parse_edge_lines(["3", "1 -2 5"])

    def test_non_integer_label(self):
        """Labels must be integers."""
        with pytest.raises(ValueError, match="node label"):
            parse_edge_lines(["2", "a 2 1"])


class TestParseBitVectorLines:
    """Tests for the bit-vector format."""

    def test_spaced_bits(self):
        """Whitespace-separated rows pack with the first bit most significant."""
        vectors = parse_bit_vector_lines(["3 4", "0 1 0 1", "1 1 1 1", "0 0 0 0"])
        assert vectors.bit_length == 4
        assert vectors.vectors == [0b0101, 0b1111, 0b0000]

    def test_packed_rows(self):
        """A row may be a single run of bits."""
        vectors = parse_bit_vector_lines(["2 3", "011", "100"])
        assert vectors.vectors == [0b011, 0b100]

    def test_trailing_whitespace(self):
        """Trailing spaces on rows are tolerated."""
        vectors = parse_bit_vector_lines(["1 3", "1 0 1 ", ""])
        assert vectors.vectors == [0b101]

    def test_duplicates_preserved(self):
        """Duplicate rows stay as separate elements."""
        vectors = parse_bit_vector_lines(["2 2", "1 0", "1 0"])
        assert vectors.element_count == 2
        assert vectors.distinct_count() == 1

    def test_header_needs_two_fields(self):
        """Header must give both the node count and the bit length."""
        with pytest.raises(ValueError, match="Line 1"):
            parse_bit_vector_lines(["3"])

    def test_zero_bit_length(self):
        """Bit length must be positive."""
        with pytest.raises(ValueError, match="positive"):
            parse_bit_vector_lines(["0 0"])

    def test_wrong_row_width(self):
        """Rows must have exactly L bits; the error names the line."""
        with pytest.raises(ValueError, match="Line 2: Expected 3 bits"):
            parse_bit_vector_lines(["1 3", "1 0"])

    def test_invalid_bit(self):
        """Only 0 and 1 are bits."""
        with pytest.raises(ValueError, match="Line 2"):
            parse_bit_vector_lines(["1 2", "1 2"])

    def test_row_count_mismatch(self):
        """The number of rows must match the header."""
        with pytest.raises(ValueError, match="declares 3 nodes but 2 rows"):
            parse_bit_vector_lines(["3 2", "10", "01"])


class TestReadFiles:
    """Tests for the file-level readers."""

    def test_read_edge_file(self, tmp_path):
        """Edge files parse from disk."""
        path = tmp_path / "edges.txt"
        path.write_text("3\n1 2 1\n2 3 2\n1 3 3\n")
        graph = read_edge_file(path)
        assert graph.node_count == 3
        assert graph.edge_count == 3

    def test_read_bit_vector_file(self, tmp_path):
        """Bit-vector files parse from disk."""
        path = tmp_path / "bits.txt"
        path.write_text("2 3\n0 0 1\n1 1 1\n")
        assert read_bit_vector_file(path).vectors == [0b001, 0b111]

    def test_missing_edge_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            read_edge_file(tmp_path / "missing.txt")

    def test_missing_bit_vector_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            read_bit_vector_file(tmp_path / "missing.txt")
