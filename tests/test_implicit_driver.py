"""
Tests for the Hamming-distance clustering driver.

Tests cover:
- Duplicate collapse during build
- Cluster counts for small collections
- Threshold validation
- Agreement with a brute-force oracle
- Verification, results and telemetry
"""

import random

import pytest

from kspacing.config import SpacingConfig
from kspacing.engine.implicit import ImplicitClusteringDriver
from kspacing.errors import InvalidDistanceParameter
from kspacing.types.graph import BitVectorSet
from kspacing.utils.bits import bruteforce_cluster_count
from kspacing.utils.telemetry import MergeCollector, telemetry_collector


def _driver(bit_length: int, vectors: list[int], **config) -> ImplicitClusteringDriver:
    return ImplicitClusteringDriver(
        BitVectorSet(bit_length=bit_length, vectors=vectors),
        config=SpacingConfig(**config),
    )


class TestBuild:
    """Tests for build() and duplicate collapse."""

    def test_duplicates_merge_before_enumeration(self):
        """Two identical vectors among four drop count by exactly one."""
        driver = _driver(4, [0b0101, 0b0101, 0b1111, 0b0000])
        index, ds = driver.build()

        assert ds.count() == 3
        assert len(index) == 3
        assert ds.connected(0, 1)

    def test_duplicate_keeps_first_owner(self):
        """The first element carrying a vector owns it."""
        index, _ = _driver(2, [0b10, 0b01, 0b10]).build()
        assert index.owner(0b10) == 0

    def test_no_duplicates(self):
        """Distinct vectors leave every element a singleton."""
        _, ds = _driver(3, [0b000, 0b001, 0b111]).build()
        assert ds.count() == 3

    def test_build_is_fresh_each_time(self):
        """Each build starts from new structures."""
        driver = _driver(2, [0b00, 0b00, 0b11])
        first = driver.build()[1].count()
        assert driver.build()[1].count() == first == 2


class TestMaxK:
    """Tests for max_k_with_spacing_at_least."""

    def test_three_vectors_threshold_two(self):
        """000 and 001 merge, 111 stays apart -> 2 clusters."""
        assert _driver(3, [0b000, 0b001, 0b111]).max_k_with_spacing_at_least(2) == 2

    def test_threshold_one_merges_duplicates_only(self):
        """T=1 only collapses identical vectors."""
        driver = _driver(3, [0b000, 0b000, 0b001, 0b111])
        assert driver.max_k_with_spacing_at_least(1) == 3

    def test_threshold_beyond_length(self):
        """T > L merges everything into one cluster."""
        assert _driver(3, [0b000, 0b001, 0b111]).max_k_with_spacing_at_least(4) == 1

    def test_repeated_queries(self):
        """Queries do not leak state into each other."""
        driver = _driver(3, [0b000, 0b001, 0b111])
        assert driver.max_k_with_spacing_at_least(3) == 1
        assert driver.max_k_with_spacing_at_least(2) == 2

    def test_empty_collection(self):
        """No vectors, no clusters."""
        assert _driver(4, []).max_k_with_spacing_at_least(3) == 0

    @pytest.mark.parametrize("threshold", [0, -2])
    def test_invalid_threshold(self, threshold):
        """T < 1 is rejected before any work."""
        driver = _driver(3, [0b000, 0b001])
        collector = MergeCollector()
        with telemetry_collector(collector):
            with pytest.raises(InvalidDistanceParameter):
                driver.max_k_with_spacing_at_least(threshold)
        assert collector.records == []

    @pytest.mark.parametrize("seed", [21, 22, 23])
    @pytest.mark.parametrize("threshold", [1, 2, 3, 4])
    def test_matches_bruteforce(self, seed, threshold):
        """Cluster count equals joining every pair closer than T."""
        rng = random.Random(seed)
        # Values from a narrow range so duplicates occur
        vectors = [rng.randrange(256) for _ in range(60)]
        driver = _driver(8, vectors)
        assert driver.max_k_with_spacing_at_least(threshold) == bruteforce_cluster_count(
            vectors, 8, threshold
        )


class TestRun:
    """Tests for run() results and telemetry."""

    def test_result_fields(self):
        """ClusterCountResult reports the answer and input sizes."""
        result = _driver(3, [0b000, 0b000, 0b001, 0b111]).run(3)
        assert result.spacing_threshold == 3
        assert result.clusters == 1
        assert result.element_count == 4
        assert result.distinct_vectors == 3
        assert result.bit_length == 3
        assert set(result.timing) == {"build", "distance_1", "distance_2"}

    def test_records_each_stage(self):
        """One record for duplicate collapse and one per distance."""
        collector = MergeCollector()
        with telemetry_collector(collector):
            _driver(3, [0b000, 0b000, 0b001, 0b111]).run(3)

        stages = [record.stage for record in collector.records]
        assert stages == ["hamming_d0", "hamming_d1", "hamming_d2"]
        assert [record.merges for record in collector.records] == [1, 1, 1]

        report = collector.summary()
        assert report.total_merges == 3
        assert report.final_clusters == 1


class TestVerify:
    """Tests for brute-force verification."""

    @pytest.mark.parametrize("distance", [1, 2, 3])
    def test_verify_passes(self, distance):
        """The enumerator agrees with brute force."""
        rng = random.Random(5)
        vectors = [rng.randrange(64) for _ in range(30)]
        assert _driver(6, vectors).verify(distance) is True

    def test_verify_limit(self):
        """Collections above verify_max_vectors are refused."""
        driver = _driver(3, [0b000, 0b001, 0b111], verify_max_vectors=2)
        with pytest.raises(ValueError, match="verify_max_vectors"):
            driver.verify(1)

    def test_verify_invalid_distance(self):
        """verify() rejects d < 1."""
        with pytest.raises(InvalidDistanceParameter):
            _driver(3, [0b000]).verify(0)
