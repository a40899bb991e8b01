"""
Input Sharding

Splits the ordered record sequence into contiguous shards for the worker pool.
Each shard remembers the input position of its first item so workers can tag
records with their original sequence index.
"""

from typing import Sequence, Tuple, TypeVar

T = TypeVar("T")

# (start offset in the original sequence, contiguous items)
Shard = Tuple[int, list]


def chunkify(items: Sequence[T], num_chunks: int) -> list[list[T]]:
    """
    Distribute items across contiguous chunks of near-equal size.

    The first len(items) % num_chunks chunks receive one extra item. Chunks
    that would be empty are dropped, except that empty input still yields a
    single empty chunk so downstream stages always have something to fold.

    Example:
        >>> chunkify([1, 2, 3, 4, 5], 2)
        [[1, 2, 3], [4, 5]]
    """
    if num_chunks < 1:
        raise ValueError(f"num_chunks must be at least 1, got {num_chunks}")

    num_items = len(items)
    items_per_chunk = num_items // num_chunks
    remainder = num_items - (num_chunks * items_per_chunk)

    result = []
    start = 0
    for idx in range(num_chunks):
        chunk_size = items_per_chunk + (1 if idx < remainder else 0)
        end = start + chunk_size

        if start < num_items:
            result.append(list(items[start:end]))
        start = end

    return result or [[]]


def make_shards(items: Sequence[T], num_shards: int) -> list[Shard]:
    """Chunk items and pair each chunk with its start offset."""
    shards = []
    start = 0
    for chunk in chunkify(items, num_shards):
        shards.append((start, chunk))
        start += len(chunk)
    return shards
