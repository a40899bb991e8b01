"""
Result Builder

Assembles the final AnalysisResult from merged statistics: totals, author
rankings and word rankings. Full frequency tables are always kept; top-N
lists are read-time views over them.
"""

import heapq
from collections import Counter
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .aggregator import GlobalStatistics

DEFAULT_TOP_WORDS = 10


def _word_order(item: tuple[str, int]) -> tuple[int, str]:
    word, count = item
    return (-count, word)


def rank_words(frequency: Mapping[str, int], n: Optional[int] = None) -> list[tuple[str, int]]:
    """
    Order words by count descending, then by the word itself ascending.

    Args:
        frequency: Mapping of word to count
        n: Number of words to return, None for all of them

    Example:
        >>> rank_words({"cat": 2, "bat": 2, "dog": 5}, 2)
        [('dog', 5), ('bat', 2)]
    """
    if n is None:
        return sorted(frequency.items(), key=_word_order)
    # O(n log k) selection; the key is a total order so ties are stable
    return heapq.nsmallest(n, frequency.items(), key=_word_order)


@dataclass
class AuthorAnalysis:
    """Per-author section of the analysis result."""
    author_id: str
    author_name: str
    author_nickname: Optional[str]
    display_name: str
    total_messages_to_deleted_user: int  # before deduplication
    unique_message_count: int
    word_frequency: dict[str, int] = field(default_factory=dict)

    def most_common_words(self, n: Optional[int] = DEFAULT_TOP_WORDS) -> list[tuple[str, int]]:
        return rank_words(self.word_frequency, n)

    def to_dict(self, top_words: Optional[int] = DEFAULT_TOP_WORDS) -> dict:
        return {
            "author_id": self.author_id,
            "author_name": self.author_name,
            "author_nickname": self.author_nickname,
            "display_name": self.display_name,
            "total_messages_to_deleted_user": self.total_messages_to_deleted_user,
            "unique_message_count": self.unique_message_count,
            "word_frequency": self.word_frequency,
            "most_common_words": [
                [word, count] for word, count in self.most_common_words(top_words)
            ],
        }


@dataclass
class AnalysisResult:
    """
    Final, immutable-by-convention output of one analysis run.

    Attributes:
        total_records (int): Records loaded from the input
        messages_to_deleted_users (int): Qualifying records before deduplication
        unique_messages (int): Qualifying records after deduplication
        unique_authors (int): Distinct author ids among unique messages
        authors (list[AuthorAnalysis]): Ranked by unique message count
            descending, then author_id ascending
        global_word_frequency (dict[str, int]): Word -> count across all
            authors, keys in sorted order
    """
    total_records: int
    messages_to_deleted_users: int
    unique_messages: int
    unique_authors: int
    authors: list[AuthorAnalysis]
    global_word_frequency: dict[str, int]

    def top_words(self, n: Optional[int] = DEFAULT_TOP_WORDS) -> list[tuple[str, int]]:
        return rank_words(self.global_word_frequency, n)

    def top_authors(self, n: Optional[int] = DEFAULT_TOP_WORDS) -> list[AuthorAnalysis]:
        return self.authors if n is None else self.authors[:n]

    def to_dict(self, top_words: Optional[int] = DEFAULT_TOP_WORDS) -> dict:
        """JSON-ready form; identical results produce identical documents."""
        return {
            "total_records": self.total_records,
            "messages_to_deleted_users": self.messages_to_deleted_users,
            "unique_messages": self.unique_messages,
            "unique_authors": self.unique_authors,
            "authors_analysis": [author.to_dict(top_words) for author in self.authors],
            "global_word_frequency": self.global_word_frequency,
        }


def _sorted_table(frequency: Mapping[str, int]) -> dict[str, int]:
    return {word: frequency[word] for word in sorted(frequency)}


def build(
    stats: GlobalStatistics,
    total_qualifying_before_dedup: int,
    qualifying_per_author: Optional[Mapping[str, int]] = None,
    total_records: Optional[int] = None,
) -> AnalysisResult:
    """
    Build the AnalysisResult from merged statistics.

    Args:
        stats: Merged GlobalStatistics over the deduplicated records
        total_qualifying_before_dedup: Qualifying record count before dedup
        qualifying_per_author: Pre-dedup qualifying count per author_id;
            defaults to the post-dedup counts when not supplied
        total_records: Records loaded from the input; defaults to
            total_qualifying_before_dedup

    Returns:
        AnalysisResult with ranked authors and sorted frequency tables
    """
    qualifying_per_author = Counter(qualifying_per_author or {})
    ranked = sorted(
        stats.authors.values(),
        key=lambda author: (-author.message_count, author.author_id),
    )
    authors = [
        AuthorAnalysis(
            author_id=author.author_id,
            author_name=author.author_name,
            author_nickname=author.author_nickname,
            display_name=author.display_name,
            total_messages_to_deleted_user=(
                qualifying_per_author.get(author.author_id) or author.message_count
            ),
            unique_message_count=author.message_count,
            word_frequency=_sorted_table(author.word_frequency),
        )
        for author in ranked
    ]
    return AnalysisResult(
        total_records=(
            total_qualifying_before_dedup if total_records is None else total_records
        ),
        messages_to_deleted_users=total_qualifying_before_dedup,
        unique_messages=stats.unique_messages,
        unique_authors=stats.unique_authors,
        authors=authors,
        global_word_frequency=_sorted_table(stats.word_frequency),
    )
