"""
Message Classifier

Decides whether a message record was directed at a deleted user and, if so,
turns it into a QualifyingRecord tagged with its position in the input.
"""

from typing import Generator, Iterable, Optional

from .models import MessageRecord, QualifyingRecord


def _is_present(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


def is_deleted_user_mention(record: MessageRecord) -> bool:
    """A record qualifies when either mention field is present and non-blank."""
    return _is_present(record.mentioned_user_name) or _is_present(
        record.mentioned_user_nickname
    )


def display_name_for(record: MessageRecord) -> str:
    """Prefer the author's nickname, fall back to the account name."""
    if _is_present(record.author_nickname):
        return record.author_nickname
    return record.author_name


def classify(record: MessageRecord, sequence_index: int) -> Optional[QualifyingRecord]:
    """
    Classify a single record.

    Args:
        record: Message record from the input collaborator
        sequence_index: Position of the record in the original input

    Returns:
        QualifyingRecord carrying the trimmed content, or None when the
        record does not mention a deleted user
    """
    if not is_deleted_user_mention(record):
        return None
    nickname = record.author_nickname if _is_present(record.author_nickname) else None
    return QualifyingRecord(
        sequence_index=sequence_index,
        message_id=record.message_id,
        author_id=record.author_id,
        author_name=record.author_name,
        author_nickname=nickname,
        display_name=display_name_for(record),
        content=record.content.strip(),
    )


def classify_all(
    records: Iterable[MessageRecord], start_index: int = 0
) -> Generator[QualifyingRecord, None, None]:
    """Yield the qualifying records of a shard that starts at start_index."""
    for offset, record in enumerate(records):
        qualifying = classify(record, start_index + offset)
        if qualifying is not None:
            yield qualifying
