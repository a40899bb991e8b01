"""
Input and output collaborators for the analysis pipeline.

Loads the message file into MessageRecord objects and writes the analysis
result as JSON. Failures here are run-terminating; nothing is retried.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

from .models import MessageRecord
from .results import DEFAULT_TOP_WORDS, AnalysisResult

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def parse_messages(data: Any, source: str = "<input>") -> list[MessageRecord]:
    """
    Convert deserialized JSON into message records, preserving order.

    Raises:
        ValueError: If data is not a list of objects
    """
    if not isinstance(data, list):
        raise ValueError(
            f"{source}: expected a JSON array of messages, got {type(data).__name__}"
        )
    records = []
    for position, raw in enumerate(data):
        try:
            records.append(MessageRecord.from_dict(raw))
        except ValueError as e:
            raise ValueError(f"{source}: message #{position}: {e}") from e
    return records


def load_messages(path: PathLike) -> list[MessageRecord]:
    """
    Read a JSON file containing an array of message objects.

    Args:
        path: Path to the UTF-8 encoded input file

    Returns:
        Message records in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON or has the wrong structure
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON: {e}") from e

    records = parse_messages(data, source=str(path))
    logger.info(f"Loaded {len(records)} messages from {path}")
    return records


def save_results(
    result: AnalysisResult, path: PathLike, top_words: int = DEFAULT_TOP_WORDS
) -> None:
    """Write the result as pretty-printed JSON."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(top_words), f, indent=2, ensure_ascii=False)
        f.write("\n")
    logger.info(f"Results saved to {path}")
