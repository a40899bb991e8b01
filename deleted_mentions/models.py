"""
Message Record Models

Data structures shared by every stage of the deleted-user analysis pipeline:
the raw message record as read from the input file, and the qualifying record
produced by the classifier for messages that mention a deleted user.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

# (author_id, trimmed content): identifies one logical message send
DedupKey = Tuple[str, str]

REQUIRED_FIELDS = (
    "message_id",
    "content",
    "timestamp",
    "author_name",
    "author_id",
)
OPTIONAL_FIELDS = (
    "author_nickname",
    "mentioned_user_name",
    "mentioned_user_nickname",
)


def _optional_text(value: Any) -> Optional[str]:
    """Map absent, null and blank values to None."""
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else None


def _required_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class MessageRecord:
    """
    A single chat message as captured in the input file.

    Attributes:
        message_id (str): Opaque identifier of this capture of the message
        content (str): Raw message text
        timestamp (str): Opaque timestamp string, never parsed
        author_name (str): Account name of the sender
        author_id (str): Stable identity of the sender
        author_nickname (Optional[str]): Display nickname, None when blank
        mentioned_user_name (Optional[str]): Name of the mentioned account
        mentioned_user_nickname (Optional[str]): Nickname of the mentioned account

    Example:
        record = MessageRecord.from_dict({
            "message_id": "1",
            "content": "hello there",
            "timestamp": "2024-01-01T00:00:00",
            "author_name": "alice",
            "author_nickname": "Al",
            "author_id": "u1",
            "mentioned_user_name": "Deleted User",
        })
    """
    message_id: str
    content: str
    timestamp: str
    author_name: str
    author_id: str
    author_nickname: Optional[str] = None
    mentioned_user_name: Optional[str] = None
    mentioned_user_nickname: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: dict) -> "MessageRecord":
        """
        Build a record from its deserialized JSON object.

        Missing required fields default to an empty string and optional
        fields that are missing, null or blank become None. Unknown keys are
        ignored.

        Raises:
            ValueError: If raw is not a JSON object
        """
        if not isinstance(raw, dict):
            raise ValueError(
                f"Message record must be an object, got {type(raw).__name__}"
            )
        values = {name: _required_text(raw.get(name)) for name in REQUIRED_FIELDS}
        values.update(
            {name: _optional_text(raw.get(name)) for name in OPTIONAL_FIELDS}
        )
        return cls(**values)

    def to_dict(self) -> dict:
        """Return the wire form of this record."""
        return {
            "message_id": self.message_id,
            "content": self.content,
            "timestamp": self.timestamp,
            "author_name": self.author_name,
            "author_nickname": self.author_nickname,
            "author_id": self.author_id,
            "mentioned_user_name": self.mentioned_user_name,
            "mentioned_user_nickname": self.mentioned_user_nickname,
        }


@dataclass(frozen=True)
class QualifyingRecord:
    """
    A message directed at a deleted user, tagged with its input position.

    The sequence index is the record's position in the original input and
    backs every tie-break downstream, so results never depend on how the
    input was sharded.
    """
    sequence_index: int
    message_id: str
    author_id: str
    author_name: str
    author_nickname: Optional[str]
    display_name: str
    content: str  # trimmed

    @property
    def dedup_key(self) -> DedupKey:
        return (self.author_id, self.content)
