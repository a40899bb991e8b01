"""
Statistics Aggregator

Folds deduplicated qualifying records into per-author and global word
frequency tables. Each shard is folded independently into a partial
GlobalStatistics; partials are combined by key-wise addition of every count,
so the merged result is the same for any shard count and any merge order.
"""

from collections import Counter
from dataclasses import dataclass, field
from functools import reduce
from typing import Iterable, Optional, Sequence

from .models import QualifyingRecord
from .sharding import chunkify
from .tokenizer import map_word_count


@dataclass
class AuthorStatistics:
    """
    Statistics for one author, keyed by author_id.

    The names belong to the author's earliest record in input order
    (first_seen_index), which keeps them independent of sharding.
    """
    author_id: str
    author_name: str
    author_nickname: Optional[str]
    display_name: str
    first_seen_index: int
    message_count: int = 0
    word_frequency: Counter = field(default_factory=Counter)

    @classmethod
    def from_record(cls, record: QualifyingRecord) -> "AuthorStatistics":
        return cls(
            author_id=record.author_id,
            author_name=record.author_name,
            author_nickname=record.author_nickname,
            display_name=record.display_name,
            first_seen_index=record.sequence_index,
        )

    def adopt_names(self, other: "AuthorStatistics") -> None:
        """Take over the names of other if it was seen earlier in the input."""
        if other.first_seen_index < self.first_seen_index:
            self.author_name = other.author_name
            self.author_nickname = other.author_nickname
            self.display_name = other.display_name
            self.first_seen_index = other.first_seen_index


@dataclass
class GlobalStatistics:
    """Merged (or partial) statistics over a set of deduplicated records."""
    unique_messages: int = 0
    authors: dict[str, AuthorStatistics] = field(default_factory=dict)
    word_frequency: Counter = field(default_factory=Counter)

    @property
    def unique_authors(self) -> int:
        return len(self.authors)


def _fold_record(
    stats: GlobalStatistics, record: QualifyingRecord, min_word_length: int
) -> GlobalStatistics:
    author = stats.authors.get(record.author_id)
    if author is None:
        author = AuthorStatistics.from_record(record)
        stats.authors[record.author_id] = author
    elif record.sequence_index < author.first_seen_index:
        author.adopt_names(AuthorStatistics.from_record(record))

    author.message_count += 1
    stats.unique_messages += 1
    for word, count in map_word_count(record.content, min_word_length):
        author.word_frequency[word] += count
        stats.word_frequency[word] += count
    return stats


def aggregate_partial(
    records: Iterable[QualifyingRecord], min_word_length: int
) -> GlobalStatistics:
    """
    Fold one shard of deduplicated records.

    Args:
        records: Deduplicated qualifying records of a single shard
        min_word_length: Minimum token length passed to the tokenizer

    Returns:
        Partial GlobalStatistics for the shard
    """
    stats = GlobalStatistics()
    for record in records:
        _fold_record(stats, record, min_word_length)
    return stats


def _merge_pair(accumulated: GlobalStatistics, partial: GlobalStatistics) -> GlobalStatistics:
    accumulated.unique_messages += partial.unique_messages
    accumulated.word_frequency.update(partial.word_frequency)
    for author_id, author in partial.authors.items():
        current = accumulated.authors.get(author_id)
        if current is None:
            current = AuthorStatistics(
                author_id=author.author_id,
                author_name=author.author_name,
                author_nickname=author.author_nickname,
                display_name=author.display_name,
                first_seen_index=author.first_seen_index,
            )
            accumulated.authors[author_id] = current
        else:
            current.adopt_names(author)
        current.message_count += author.message_count
        current.word_frequency.update(author.word_frequency)
    return accumulated


def merge_statistics(partials: Iterable[GlobalStatistics]) -> GlobalStatistics:
    """
    Combine partial statistics by key-wise addition of all counts.

    Inputs are left untouched. Author names resolve to the partial that saw
    the author earliest in the input.

    Example:
        >>> merged = merge_statistics([aggregate_partial(a, 3), aggregate_partial(b, 3)])
        >>> merged == aggregate_partial(a + b, 3)
        True
    """
    return reduce(_merge_pair, partials, GlobalStatistics())


def aggregate(
    records: Sequence[QualifyingRecord], min_word_length: int, num_shards: int = 1
) -> GlobalStatistics:
    """Aggregate in-process over contiguous shards, then merge."""
    partials = [
        aggregate_partial(shard, min_word_length)
        for shard in chunkify(records, num_shards)
    ]
    return merge_statistics(partials)
