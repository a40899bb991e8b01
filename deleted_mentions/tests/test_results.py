"""
Tests for the result builder: totals, rankings and top-N views.
"""

from deleted_mentions.aggregator import aggregate
from deleted_mentions.dedup import classify_and_dedupe_shard, ordered_survivors
from deleted_mentions.results import build, rank_words

from .conftest import make_message


def build_result(messages, min_word_length=3):
    partial = classify_and_dedupe_shard((0, messages))
    stats = aggregate(ordered_survivors(partial.survivors), min_word_length)
    return build(
        stats,
        total_qualifying_before_dedup=partial.qualifying_count,
        qualifying_per_author=partial.qualifying_per_author,
        total_records=partial.records_seen,
    )


def test_rank_words_ties_broken_alphabetically():
    frequency = {"zeta": 2, "alpha": 2, "mid": 5, "beta": 1}
    assert rank_words(frequency) == [("mid", 5), ("alpha", 2), ("zeta", 2), ("beta", 1)]
    assert rank_words(frequency, 2) == [("mid", 5), ("alpha", 2)]
    assert rank_words(frequency, 0) == []
    assert rank_words({}, 3) == []


def test_totals(mixed_messages):
    result = build_result(mixed_messages)
    assert result.total_records == 10
    assert result.messages_to_deleted_users == 9
    assert result.unique_messages == 7
    assert result.unique_authors == 4


def test_author_ranking(mixed_messages):
    result = build_result(mixed_messages)
    ranking = [(a.author_id, a.unique_message_count) for a in result.authors]
    # Equal counts fall back to author_id order
    assert ranking == [("u1", 2), ("u2", 2), ("u4", 2), ("u3", 1)]

    totals = {a.author_id: a.total_messages_to_deleted_user for a in result.authors}
    assert totals == {"u1": 3, "u2": 3, "u3": 1, "u4": 2}
    assert [a.author_id for a in result.top_authors(2)] == ["u1", "u2"]


def test_global_top_words(mixed_messages):
    result = build_result(mixed_messages)
    assert result.top_words(3) == [("world", 5), ("hello", 2), ("you", 2)]
    # The full table survives the top-N view
    assert len(result.global_word_frequency) == 7
    assert list(result.global_word_frequency) == sorted(result.global_word_frequency)


def test_author_top_words(mixed_messages):
    result = build_result(mixed_messages)
    bob = next(a for a in result.authors if a.author_id == "u2")
    assert bob.display_name == "Bobby"
    assert bob.most_common_words(2) == [("world", 2), ("did", 1)]
    assert len(bob.most_common_words(None)) == 5

    dave = next(a for a in result.authors if a.author_id == "u4")
    assert dave.word_frequency == {}
    assert dave.most_common_words() == []


def test_case_sensitive_dedup_end_to_end():
    """'Hello world' and 'hello world' from one author are two unique messages."""
    messages = [
        make_message("Hello world", author_id="u1", mentioned_user_name="deleted1", message_id="1"),
        make_message("hello world", author_id="u1", mentioned_user_name="deleted1", message_id="2"),
    ]
    result = build_result(messages)
    assert result.messages_to_deleted_users == 2
    assert result.unique_messages == 2
    assert result.authors[0].author_id == "u1"
    assert result.authors[0].unique_message_count == 2
    assert result.global_word_frequency == {"hello": 2, "world": 2}


def test_empty_input():
    result = build_result([])
    assert result.total_records == 0
    assert result.messages_to_deleted_users == 0
    assert result.unique_messages == 0
    assert result.unique_authors == 0
    assert result.authors == []
    assert result.global_word_frequency == {}
    assert result.top_words() == []


def test_to_dict_layout(mixed_messages):
    document = build_result(mixed_messages).to_dict(top_words=1)
    assert document["messages_to_deleted_users"] == 9
    assert document["unique_messages"] == 7
    first = document["authors_analysis"][0]
    assert first["author_id"] == "u1"
    assert first["most_common_words"] == [["hello", 2]]
    assert first["word_frequency"] == {"hello": 2, "world": 2}


def test_build_defaults_without_pre_dedup_counts(mixed_messages):
    partial = classify_and_dedupe_shard((0, mixed_messages))
    stats = aggregate(ordered_survivors(partial.survivors), 3)
    result = build(stats, total_qualifying_before_dedup=partial.qualifying_count)
    assert result.total_records == 9
    assert all(a.total_messages_to_deleted_user == a.unique_message_count for a in result.authors)
