"""
Value partitioning for multi-output locks
"""

from typing import List


MIN_CHUNK_LOVELACE = 2_000_000


def partition(total: int, min_chunk: int = MIN_CHUNK_LOVELACE, chunks: int = 1) -> List[int]:
    """
    Split an amount of lovelace into output-sized chunks.

    The chunk size is ``total // chunks`` floored at ``min_chunk``. Full chunks
    are emitted while the remainder is larger than the chunk size, then the
    remainder itself is emitted, so the last chunk is at most the chunk size
    and may be much smaller. Chunk sizes are not checked against the ledger's
    minimum UTxO value.

    Args:
        total: Amount to split, in lovelace
        min_chunk: Lower bound for the chunk size
        chunks: Requested number of chunks

    Returns:
        List of chunk amounts summing to ``total``
    """
    if total <= 0:
        raise ValueError(f"Amount to partition must be positive, got {total}")
    if chunks <= 0 or min_chunk <= 0:
        raise ValueError("Chunk count and minimum chunk size must be positive")

    target = total // chunks
    if target < min_chunk:
        target = min_chunk

    result = []
    remainder = total
    while remainder > target:
        result.append(target)
        remainder -= target
    result.append(remainder)

    return result
