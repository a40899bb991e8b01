"""
Deleted-User Analysis Framework

Fork-join driver for the analysis pipeline. The ordered record sequence is
cut into contiguous shards and processed in two phases:

1. Classify + dedup: each shard is classified and reduced to a partial dedup
   map; partial maps are merged in the parent process.
2. Aggregate: the surviving records are re-sharded in input order, each shard
   is folded into partial statistics, and the partials are merged.

Workers own their shard and their partial result; merges only run in the
parent. Both phases can run sequentially (in-process) or on a
multiprocessing pool, and the result is identical either way.
"""

# Standard library imports
import logging
import os
import time
from dataclasses import dataclass
from functools import partial
from multiprocessing import Pool
from typing import Callable, Sequence, Tuple

# Third-party imports
import psutil

# Local imports
from .aggregator import GlobalStatistics, aggregate_partial, merge_statistics
from .configs import AnalysisConfig
from .dedup import classify_and_dedupe_shard, merge_shard_partials, ordered_survivors
from .models import MessageRecord
from .results import AnalysisResult, build
from .sharding import Shard, make_shards

logger = logging.getLogger(__name__)

# map(function, iterable) -> iterable of results; builtin map or Pool.map
Mapper = Callable


@dataclass
class RunTimings:
    """Wall-clock timings and resource usage of one pipeline run."""
    mode: str
    processes: int
    shards: int
    classify_seconds: float = 0.0
    aggregate_seconds: float = 0.0
    total_seconds: float = 0.0
    memory_mb: float = 0.0


def get_memory_usage() -> float:
    """Get current memory usage in MB"""
    process = psutil.Process()
    return process.memory_info().rss / (1024 * 1024)


def resolve_processes(config: AnalysisConfig) -> int:
    """Requested worker count, capped at the available CPU cores."""
    available = os.cpu_count() or 1
    if config.num_processes is None:
        return available
    return min(config.num_processes, available)


def resolve_shards(config: AnalysisConfig, processes: int) -> int:
    return config.num_shards if config.num_shards is not None else processes


def aggregate_shard(shard: Shard, min_word_length: int) -> GlobalStatistics:
    """Worker function for phase two; the shard offset is not needed here."""
    _, records = shard
    return aggregate_partial(records, min_word_length)


def run_pipeline(
    records: Sequence[MessageRecord],
    min_word_length: int,
    num_shards: int,
    mapper: Mapper = map,
    timings: RunTimings = None,
) -> AnalysisResult:
    """
    Run both phases with the given mapper.

    Args:
        records: Ordered message records from the input collaborator
        min_word_length: Minimum token length for word counting
        num_shards: Number of contiguous shards per phase
        mapper: Builtin map for in-process work or a Pool's map
        timings: Optional RunTimings to fill in

    Returns:
        AnalysisResult for the whole input
    """
    start_time = time.time()
    dedup_partials = list(mapper(classify_and_dedupe_shard, make_shards(records, num_shards)))
    classified = merge_shard_partials(dedup_partials)
    survivors = ordered_survivors(classified.survivors)
    classify_time = time.time() - start_time

    logger.debug(
        f"Phase 1: {len(dedup_partials)} shards, {classified.qualifying_count} "
        f"qualifying, {len(survivors)} unique ({classify_time:.4f}s)"
    )

    aggregate_start = time.time()
    aggregate_with_params = partial(aggregate_shard, min_word_length=min_word_length)
    stats_partials = list(mapper(aggregate_with_params, make_shards(survivors, num_shards)))
    stats = merge_statistics(stats_partials)
    aggregate_time = time.time() - aggregate_start

    logger.debug(
        f"Phase 2: {len(stats_partials)} shards, {stats.unique_authors} authors, "
        f"{len(stats.word_frequency)} distinct words ({aggregate_time:.4f}s)"
    )

    if timings is not None:
        timings.classify_seconds = classify_time
        timings.aggregate_seconds = aggregate_time
        timings.total_seconds = time.time() - start_time
        timings.memory_mb = get_memory_usage()

    return build(
        stats,
        total_qualifying_before_dedup=classified.qualifying_count,
        qualifying_per_author=classified.qualifying_per_author,
        total_records=classified.records_seen,
    )


def run_sequential(
    records: Sequence[MessageRecord], config: AnalysisConfig
) -> Tuple[AnalysisResult, RunTimings]:
    """Process every shard in the calling process."""
    processes = 1
    shards = resolve_shards(config, processes)
    timings = RunTimings(mode="sequential", processes=processes, shards=shards)
    result = run_pipeline(records, config.min_word_length, shards, map, timings)
    logger.info(f"Sequential run over {shards} shard(s) took {timings.total_seconds:.4f} seconds")
    return result, timings


def run_parallel(
    records: Sequence[MessageRecord], config: AnalysisConfig
) -> Tuple[AnalysisResult, RunTimings]:
    """Process shards on a multiprocessing pool."""
    processes = resolve_processes(config)
    shards = resolve_shards(config, processes)
    timings = RunTimings(mode="parallel", processes=processes, shards=shards)
    with Pool(processes=processes) as pool:
        result = run_pipeline(records, config.min_word_length, shards, pool.map, timings)
    logger.info(
        f"Parallel run used {processes} CPU cores (out of {os.cpu_count()} available), "
        f"{shards} shard(s), took {timings.total_seconds:.4f} seconds"
    )
    return result, timings


def calculate_speedup(sequential_time: float, parallel_time: float) -> float:
    """Sequential over parallel wall time; inf when the parallel run took no time."""
    if parallel_time == 0:
        logger.warning("Parallel time is zero, cannot calculate speedup")
        return float("inf")
    return sequential_time / parallel_time


def analyze(
    records: Sequence[MessageRecord], config: AnalysisConfig
) -> Tuple[AnalysisResult, list[RunTimings]]:
    """
    Analyze records according to config.mode.

    In "both" mode the sequential and parallel runs are compared and the
    parallel result is returned.

    Raises:
        RuntimeError: If the sequential and parallel results differ
    """
    if config.mode == "sequential":
        result, timings = run_sequential(records, config)
        return result, [timings]
    if config.mode == "parallel":
        result, timings = run_parallel(records, config)
        return result, [timings]

    sequential_result, sequential_timings = run_sequential(records, config)
    parallel_result, parallel_timings = run_parallel(records, config)
    if sequential_result != parallel_result:
        raise RuntimeError("Sequential and parallel results don't match")
    logger.info("Sequential and parallel results are identical")
    speedup = calculate_speedup(
        sequential_timings.total_seconds, parallel_timings.total_seconds
    )
    logger.info(f"Speedup: {speedup:.2f}x")
    return parallel_result, [sequential_timings, parallel_timings]
