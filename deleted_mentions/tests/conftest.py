"""Shared fixtures for the deleted-user analysis tests."""

import pytest

from deleted_mentions.models import MessageRecord


def make_message(
    content,
    author_id="u1",
    message_id=None,
    author_name="alice",
    author_nickname=None,
    mentioned_user_name="Deleted User",
    mentioned_user_nickname=None,
    timestamp="2024-01-01T00:00:00",
):
    """Build a MessageRecord with sensible defaults for tests."""
    return MessageRecord(
        message_id=message_id if message_id is not None else f"m-{author_id}-{content}",
        content=content,
        timestamp=timestamp,
        author_name=author_name,
        author_id=author_id,
        author_nickname=author_nickname,
        mentioned_user_name=mentioned_user_name,
        mentioned_user_nickname=mentioned_user_nickname,
    )


@pytest.fixture
def message_factory():
    return make_message


@pytest.fixture
def mixed_messages():
    """A small corpus with duplicates, non-qualifying records and several authors."""
    return [
        make_message("Hello world", author_id="u1", message_id="1"),
        make_message("hello world", author_id="u1", message_id="2"),
        make_message("  Hello world  ", author_id="u1", message_id="3"),
        make_message("Where did you go?", author_id="u2", author_name="bob",
                     author_nickname="Bobby", message_id="4"),
        make_message("general chatter", author_id="u3", mentioned_user_name=None,
                     message_id="5"),
        make_message("Where did you go?", author_id="u2", author_name="bob",
                     author_nickname="Bobby", message_id="6"),
        make_message("miss you world", author_id="u3", author_name="carol",
                     mentioned_user_name="", mentioned_user_nickname="ghost",
                     message_id="7"),
        make_message("ok", author_id="u4", author_name="dave", message_id="8"),
        make_message("123 456", author_id="u4", author_name="dave", message_id="9"),
        make_message("world tour 2024 world", author_id="u2", author_name="bob",
                     author_nickname="B", message_id="10"),
    ]
