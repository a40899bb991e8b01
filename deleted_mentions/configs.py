"""
Configuration dataclasses for deleted-user analysis runs.

The configuration is passed explicitly to every pipeline call; nothing in the
package reads ambient or global settings.
"""

from dataclasses import dataclass
from typing import Optional

MODES = ("sequential", "parallel", "both")


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Configuration for one analysis run.

    Only min_word_length affects the computed statistics; the remaining
    fields control how the work is scheduled and never change the result.

    Attributes:
        min_word_length (int): Shortest token counted as a word, 0 for no limit
        mode (str): Processing mode ("sequential", "parallel", "both")
        num_processes (Optional[int]): Worker processes, None for all CPU cores
        num_shards (Optional[int]): Contiguous input shards, None for one per process

    Example:
        config = AnalysisConfig(
            min_word_length=4,
            mode="parallel",
            num_processes=2
        )
    """
    min_word_length: int = 3
    mode: str = "parallel"
    num_processes: Optional[int] = None
    num_shards: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.min_word_length < 0:
            raise ValueError("Minimum word length must be non-negative")
        if self.mode not in MODES:
            raise ValueError(f"Mode must be one of {', '.join(MODES)}, got {self.mode!r}")
        if self.num_processes is not None and self.num_processes < 1:
            raise ValueError("Number of processes must be at least 1")
        if self.num_shards is not None and self.num_shards < 1:
            raise ValueError("Number of shards must be at least 1")
