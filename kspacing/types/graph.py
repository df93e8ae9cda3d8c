"""
Input Types

In-memory forms of the two distance models handed to the clustering core.

Models:
    - WeightedEdge: One explicit (source, target, distance) triple
    - EdgeGraph: Node count plus the edge list of the explicit model
    - BitVectorSet: Packed bit-vectors of the implicit (Hamming) model
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class WeightedEdge(BaseModel):
    """
    An unordered pair of element labels with a non-negative distance.

    Attributes:
        source: Label of one endpoint (as found in the input)
        target: Label of the other endpoint
        distance: Edge cost; ints stay ints
    """

    model_config = ConfigDict(frozen=True)

    source: int = Field(..., ge=0)
    target: int = Field(..., ge=0)
    distance: int | float

    @field_validator("distance")
    @classmethod
    def _non_negative(cls, value: int | float) -> int | float:
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"Distance must be finite, got {value}")
        if value < 0:
            raise ValueError(f"Distance must be non-negative, got {value}")
        return value

    def __str__(self) -> str:
        return f"{self.source}-{self.target}({self.distance})"


class EdgeGraph(BaseModel):
    """
    Explicit-distance input.

    Attributes:
        node_count: Number of elements M
        edges: Weighted edges in file order (not necessarily sorted)
        label_base: Label of the first element (1 for the original data files)
    """

    node_count: int = Field(..., ge=0)
    edges: list[WeightedEdge] = Field(default_factory=list)
    label_base: int = Field(default=1, ge=0)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def labels(self) -> set[int]:
        """Distinct labels referenced by the edges."""
        seen: set[int] = set()
        for edge in self.edges:
            seen.add(edge.source)
            seen.add(edge.target)
        return seen


class BitVectorSet(BaseModel):
    """
    Implicit-distance input.

    Element i owns vectors[i]; labels follow ingestion order starting at 0.

    Attributes:
        bit_length: Number of bits L in every vector
        vectors: Packed vectors (position 0 is the most significant bit)
    """

    bit_length: int = Field(..., ge=1)
    vectors: list[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_widths(self) -> "BitVectorSet":
        limit = 1 << self.bit_length
        for label, value in enumerate(self.vectors):
            if value < 0 or value >= limit:
                raise ValueError(
                    f"Vector for element {label} does not fit in {self.bit_length} bits"
                )
        return self

    @property
    def element_count(self) -> int:
        return len(self.vectors)

    def distinct_count(self) -> int:
        return len(set(self.vectors))
