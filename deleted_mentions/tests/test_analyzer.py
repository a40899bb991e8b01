"""
Integration tests for the input/output collaborators and the command line.
"""

import json
from pathlib import Path

import pytest

from deleted_mentions.analyzer import main, parse_arguments
from deleted_mentions.message_io import load_messages, parse_messages, save_results

from .conftest import make_message


@pytest.fixture
def messages_file(tmp_path, mixed_messages):
    path = tmp_path / "messages.json"
    path.write_text(json.dumps([m.to_dict() for m in mixed_messages]), encoding="utf-8")
    return path


def test_load_messages_preserves_order(messages_file, mixed_messages):
    records = load_messages(messages_file)
    assert [r.message_id for r in records] == [m.message_id for m in mixed_messages]
    assert [r.content for r in records] == [m.content for m in mixed_messages]
    # Blank mention strings come back as absent
    assert records[6].mentioned_user_name is None
    assert records[6].mentioned_user_nickname == "ghost"


def test_load_messages_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="invalid JSON"):
        load_messages(path)


def test_load_messages_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_messages(tmp_path / "missing.json")


def test_parse_messages_structure():
    with pytest.raises(ValueError, match="JSON array"):
        parse_messages({"messages": []})
    with pytest.raises(ValueError, match="message #1"):
        parse_messages([{"content": "ok"}, "oops"])
    assert parse_messages([]) == []


def test_save_results(tmp_path, messages_file):
    output = tmp_path / "results.json"
    assert main(["sequential", "-i", str(messages_file), "-o", str(output)]) == 0

    document = json.loads(output.read_text(encoding="utf-8"))
    assert document["total_records"] == 10
    assert document["messages_to_deleted_users"] == 9
    assert document["unique_messages"] == 7
    assert document["unique_authors"] == 4
    assert document["global_word_frequency"]["world"] == 5


def test_saved_results_do_not_depend_on_mode(tmp_path, messages_file):
    outputs = []
    for mode, shards in (("sequential", "1"), ("parallel", "3"), ("both", "5")):
        output = tmp_path / f"{mode}.json"
        argv = [mode, "-i", str(messages_file), "-o", str(output),
                "--num-processes", "2", "--num-shards", shards]
        assert main(argv) == 0
        outputs.append(output.read_bytes())
    assert outputs[0] == outputs[1] == outputs[2]


def test_save_results_unwritable_path(tmp_path, mixed_messages):
    from deleted_mentions.framework import run_pipeline

    result = run_pipeline(mixed_messages, 3, num_shards=1)
    with pytest.raises(OSError):
        save_results(result, tmp_path / "missing-dir" / "out.json")


def test_main_verbose_report(messages_file, capsys):
    assert main(["sequential", "-i", str(messages_file), "-v"]) == 0
    output = capsys.readouterr().out
    assert "ANALYSIS RESULTS" in output
    assert "Unique messages (after deduplication): 7" in output
    assert "AUTHORS ANALYSIS" in output
    assert "1. world: 5" in output
    assert "PERFORMANCE" in output


def test_main_reports_input_errors(tmp_path, capsys):
    assert main(["sequential", "-i", str(tmp_path / "missing.json")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_main_rejects_bad_config(messages_file, capsys):
    assert main(["sequential", "-i", str(messages_file), "--min-word-length", "-2"]) == 1
    assert "Minimum word length" in capsys.readouterr().err


def test_parse_arguments_defaults():
    args = parse_arguments(["-i", "in.json"])
    assert args.mode == "parallel"
    assert args.min_word_length == 3
    assert args.output is None
    assert args.verbose is False


def test_min_word_length_flag(tmp_path):
    path = tmp_path / "one.json"
    path.write_text(json.dumps([make_message("cat category").to_dict()]), encoding="utf-8")
    output = tmp_path / "out.json"
    assert main(["sequential", "-i", str(path), "-o", str(output), "--min-word-length", "4"]) == 0
    assert json.loads(output.read_text(encoding="utf-8"))["global_word_frequency"] == {"category": 1}


def test_sample_data(capsys):
    sample = Path(__file__).resolve().parents[2] / "data" / "sample_messages.json"
    assert main(["sequential", "-i", str(sample)]) == 0
    output = capsys.readouterr().out
    assert "Total messages loaded: 7" in output
    assert "Total messages to deleted users: 6" in output
    # "Come back soon!" and "come back soon!" are different sends
    assert "Unique messages (after deduplication): 5" in output
    assert "Unique authors: 3" in output
