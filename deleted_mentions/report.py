"""
Terminal report for analysis results.
"""

from .framework import RunTimings
from .results import AnalysisResult


def print_header(title: str) -> None:
    """Print a formatted header"""
    print(f"\n{title}")
    print("=" * max(len(title), 18))


def display_results(
    result: AnalysisResult,
    verbose: bool = False,
    top_authors: int = 10,
    author_words: int = 5,
    global_words: int = 20,
) -> None:
    """
    Print the analysis summary, and with verbose the author ranking and the
    global word ranking.
    """
    print_header("ANALYSIS RESULTS")
    print(f"Total messages loaded: {result.total_records}")
    print(f"Total messages to deleted users: {result.messages_to_deleted_users}")
    print(f"Unique messages (after deduplication): {result.unique_messages}")
    print(f"Unique authors: {result.unique_authors}")

    if verbose:
        print_header("AUTHORS ANALYSIS")
        for rank, author in enumerate(result.top_authors(top_authors), start=1):
            nickname = author.author_nickname or "-"
            print(f"\n{rank}. {author.author_name} ({nickname})")
            print(f"   Author ID: {author.author_id}")
            print(f"   Messages to deleted user: {author.total_messages_to_deleted_user}")
            print(f"   Unique messages: {author.unique_message_count}")

            common_words = author.most_common_words(author_words)
            if common_words:
                print("   Most common words:")
                for word, count in common_words:
                    print(f"     - {word}: {count}")

        print_header(f"GLOBAL WORD FREQUENCY (TOP {global_words})")
        for rank, (word, count) in enumerate(result.top_words(global_words), start=1):
            print(f"{rank}. {word}: {count}")

    print("\nAnalysis complete!")


def display_timings(timings: list[RunTimings]) -> None:
    """Print per-phase timings for each run."""
    print_header("PERFORMANCE")
    for run in timings:
        print(f"{run.mode.capitalize()} ({run.processes} process(es), {run.shards} shard(s)):")
        print(f"   Classify + dedup:   {run.classify_seconds:.4f} seconds")
        print(f"   Aggregate:          {run.aggregate_seconds:.4f} seconds")
        print(f"   Total:              {run.total_seconds:.4f} seconds")
        print(f"   Memory (RSS):       {run.memory_mb:.1f} MB")
