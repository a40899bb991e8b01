"""
Dedup Reducer

Removes repeated sends of the same logical message. Two qualifying records
are the same message when they share a dedup key (author id and trimmed
content); message ids are ignored because one message may have been captured
several times. The surviving instance is always the one with the lowest
sequence index, so the outcome does not depend on shard boundaries or on the
order in which partial maps are merged.
"""

from collections import Counter
from dataclasses import dataclass, field
from functools import reduce
from typing import Iterable

from .classifier import classify_all
from .models import DedupKey, QualifyingRecord
from .sharding import Shard


def _keep_earliest(
    survivors: dict[DedupKey, QualifyingRecord], record: QualifyingRecord
) -> dict[DedupKey, QualifyingRecord]:
    current = survivors.get(record.dedup_key)
    if current is None or record.sequence_index < current.sequence_index:
        survivors[record.dedup_key] = record
    return survivors


def dedupe_partial(records: Iterable[QualifyingRecord]) -> dict[DedupKey, QualifyingRecord]:
    """Map phase: best-seen record per dedup key, in any iteration order."""
    return reduce(_keep_earliest, records, {})


def merge_dedup_partials(
    partials: Iterable[dict[DedupKey, QualifyingRecord]],
) -> dict[DedupKey, QualifyingRecord]:
    """
    Reduce phase: merge partial maps keeping the lowest-index record per key.

    Commutative and associative, so partial maps may be merged in any order
    or grouping.
    """
    merged: dict[DedupKey, QualifyingRecord] = {}
    for partial in partials:
        for record in partial.values():
            _keep_earliest(merged, record)
    return merged


def ordered_survivors(survivors: dict[DedupKey, QualifyingRecord]) -> list[QualifyingRecord]:
    return sorted(survivors.values(), key=lambda record: record.sequence_index)


def dedupe(records: Iterable[QualifyingRecord]) -> list[QualifyingRecord]:
    """
    Deduplicate qualifying records.

    Returns:
        Records unique by dedup key, each the lowest-sequence-index instance
        of its key, in ascending sequence-index order. Applying dedupe to its
        own output returns the same list.
    """
    return ordered_survivors(dedupe_partial(records))


@dataclass
class DedupPartial:
    """
    Phase-one output of one shard: classification counts plus the partial
    dedup map.

    Attributes:
        records_seen (int): Records in the shard, qualifying or not
        qualifying_count (int): Qualifying records before deduplication
        qualifying_per_author (Counter): Qualifying records per author_id
            before deduplication
        survivors (dict): Dedup key -> lowest-index qualifying record
    """
    records_seen: int = 0
    qualifying_count: int = 0
    qualifying_per_author: Counter = field(default_factory=Counter)
    survivors: dict = field(default_factory=dict)


def classify_and_dedupe_shard(shard: Shard) -> DedupPartial:
    """Worker function: classify one shard and build its partial dedup map."""
    start_index, records = shard
    partial = DedupPartial(records_seen=len(records))
    for qualifying in classify_all(records, start_index):
        partial.qualifying_count += 1
        partial.qualifying_per_author[qualifying.author_id] += 1
        _keep_earliest(partial.survivors, qualifying)
    return partial


def merge_shard_partials(partials: Iterable[DedupPartial]) -> DedupPartial:
    """Sum the classification counts and merge the dedup maps of all shards."""
    partials = list(partials)
    merged = DedupPartial()
    for partial in partials:
        merged.records_seen += partial.records_seen
        merged.qualifying_count += partial.qualifying_count
        merged.qualifying_per_author.update(partial.qualifying_per_author)
    merged.survivors = merge_dedup_partials(p.survivors for p in partials)
    return merged
