"""
Message Tokenizer

Turns raw message text into normalized word tokens for frequency counting.
Provides the map phase of the word-frequency pipeline: content is split on
non-alphanumeric boundaries, case-folded, and filtered by a minimum word
length. Numbers are never counted as words.
"""

import re
from typing import Generator, Iterator, Tuple

# Maximal runs of Unicode letters and digits; underscore counts as a separator
WORD_PATTERN = re.compile(r"[^\W_]+")


def iter_tokens(content: str, min_length: int) -> Generator[str, None, None]:
    """
    Extract normalized word tokens from message content.

    Args:
        content: Raw message text
        min_length: Minimum token length, 0 disables the length filter

    Yields:
        Case-folded tokens of at least min_length characters that are not
        made up entirely of digits

    Raises:
        ValueError: If min_length is negative

    Example:
        >>> list(iter_tokens("Hello, World! 42 times", 3))
        ['hello', 'world', 'times']
    """
    if min_length < 0:
        raise ValueError(f"min_length must be non-negative, got {min_length}")
    for match in WORD_PATTERN.finditer(content):
        token = match.group().casefold()
        if len(token) < min_length or token.isdigit():
            continue
        yield token


class TokenSequence:
    """Lazy, re-iterable view over the tokens of one message."""

    def __init__(self, content: str, min_length: int):
        if min_length < 0:
            raise ValueError(f"min_length must be non-negative, got {min_length}")
        self.content = content
        self.min_length = min_length

    def __iter__(self) -> Iterator[str]:
        return iter_tokens(self.content, self.min_length)

    def __repr__(self) -> str:
        return f"TokenSequence({self.content!r}, min_length={self.min_length})"


def tokenize(content: str, min_length: int) -> TokenSequence:
    """Tokenize content; every iteration of the result re-scans the text."""
    return TokenSequence(content, min_length)


def map_word_count(content: str, min_length: int) -> Generator[Tuple[str, int], None, None]:
    """
    Map phase: emit (word, 1) pairs for every token of a message.

    Example:
        >>> list(map_word_count("hello world hello", 3))
        [('hello', 1), ('world', 1), ('hello', 1)]
    """
    for token in iter_tokens(content, min_length):
        yield (token, 1)
