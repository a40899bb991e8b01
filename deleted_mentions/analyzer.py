"""
Deleted-User Mention Analyzer

Command-line entry point. Loads a JSON file of chat messages, keeps the ones
sent to deleted users, removes duplicate sends, and reports message counts,
author rankings and word frequencies.

Usage:
    deleted-user-analyzer -i messages.json
    deleted-user-analyzer sequential -i messages.json -v
    deleted-user-analyzer both -i messages.json --num-processes 4 -o results.json
"""

# Standard library imports
import argparse
import logging
import sys
from typing import Optional, Sequence

# Local imports
from .configs import MODES, AnalysisConfig
from .framework import analyze
from .message_io import load_messages, save_results
from .report import display_results, display_timings

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments for the analyzer."""
    parser = argparse.ArgumentParser(
        prog="deleted-user-analyzer",
        description="Efficiently analyze JSON files for deleted user mentions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  deleted-user-analyzer -i messages.json                  # Parallel run, summary only
  deleted-user-analyzer sequential -i messages.json       # Single process
  deleted-user-analyzer both -i messages.json             # Run both and verify they match
  deleted-user-analyzer -i messages.json -v               # Detailed report and timings
  deleted-user-analyzer -i messages.json -o results.json  # Save detailed results
  deleted-user-analyzer -i messages.json --min-word-length 4 --num-processes 2
        """,
    )

    parser.add_argument(
        "mode",
        nargs="?",
        choices=MODES,
        default="parallel",
        help="Processing mode: 'sequential', 'parallel', or 'both' (default: parallel)",
    )
    parser.add_argument("-i", "--input", required=True, help="Input JSON file of messages")
    parser.add_argument("-o", "--output", help="Write detailed results to this JSON file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Detailed report, timings and debug logs"
    )
    parser.add_argument(
        "--min-word-length",
        type=int,
        default=3,
        help="Shortest token counted as a word (default: 3)",
    )
    parser.add_argument(
        "--num-processes",
        type=int,
        default=None,
        help="Number of processes for parallel processing (default: all CPU cores)",
    )
    parser.add_argument(
        "--num-shards",
        type=int,
        default=None,
        help="Number of contiguous input shards (default: one per process)",
    )
    parser.add_argument(
        "--top-words",
        type=int,
        default=10,
        help="Most common words listed per author in the saved results (default: 10)",
    )

    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the analyzer; returns the process exit code."""
    args = parse_arguments(argv)
    configure_logging(args.verbose)

    try:
        config = AnalysisConfig(
            min_word_length=args.min_word_length,
            mode=args.mode,
            num_processes=args.num_processes,
            num_shards=args.num_shards,
        )
        if args.verbose:
            print(f"Starting analysis of: {args.input}")
        records = load_messages(args.input)
        if args.verbose:
            print(f"Loaded {len(records)} messages")

        result, timings = analyze(records, config)

        display_results(result, verbose=args.verbose)
        if args.verbose:
            display_timings(timings)

        if args.output:
            save_results(result, args.output, top_words=args.top_words)
            print(f"Results saved to: {args.output}")
        else:
            print("Use --output <filename.json> to save detailed results")
    except (OSError, ValueError, RuntimeError) as e:
        logger.error(f"Analysis failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
