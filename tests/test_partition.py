"""
Tests for lovelace partitioning
"""

import pytest

from showcase_offchain.partition import MIN_CHUNK_LOVELACE, partition


class TestPartition:
    """Chunk sizes, counts and input checks"""

    def test_small_total_floors_chunk_size(self):
        """10 ADA over 100 requested chunks gives five 2 ADA chunks"""
        assert partition(10_000_000, 2_000_000, 100) == [2_000_000] * 5

    def test_even_split(self):
        assert partition(100_000_000, MIN_CHUNK_LOVELACE, 25) == [4_000_000] * 25

    def test_remainder_is_flushed_as_last_chunk(self):
        assert partition(10_000_001, 2_000_000, 5) == [2_000_000] * 5 + [1]

    def test_last_chunk_never_exceeds_chunk_size(self):
        chunks = partition(123_456_789, MIN_CHUNK_LOVELACE, 75)
        assert chunks[:-1] == [MIN_CHUNK_LOVELACE] * (len(chunks) - 1)
        assert 0 < chunks[-1] <= MIN_CHUNK_LOVELACE

    def test_total_below_minimum_is_single_chunk(self):
        assert partition(1_000_000, MIN_CHUNK_LOVELACE, 50) == [1_000_000]

    def test_total_equal_to_chunk_is_single_chunk(self):
        assert partition(2_000_000, MIN_CHUNK_LOVELACE, 1) == [2_000_000]

    @pytest.mark.parametrize("total,chunks", [(50_000_000, 100), (7_777_777, 3), (2_000_001, 2)])
    def test_chunks_sum_to_total(self, total, chunks):
        result = partition(total, MIN_CHUNK_LOVELACE, chunks)
        size = max(total // chunks, MIN_CHUNK_LOVELACE)
        assert sum(result) == total
        assert all(c == size for c in result[:-1])

    def test_non_positive_total_fails(self):
        with pytest.raises(ValueError):
            partition(0)
        with pytest.raises(ValueError):
            partition(-5)

    def test_invalid_chunk_parameters_fail(self):
        with pytest.raises(ValueError):
            partition(10_000_000, 2_000_000, 0)
        with pytest.raises(ValueError):
            partition(10_000_000, 0, 5)
