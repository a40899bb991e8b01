"""Batch analysis of chat messages sent to deleted users."""

from .aggregator import AuthorStatistics, GlobalStatistics, aggregate, merge_statistics
from .classifier import classify
from .configs import AnalysisConfig
from .dedup import dedupe
from .framework import analyze
from .models import MessageRecord, QualifyingRecord
from .results import AnalysisResult, AuthorAnalysis, build
from .tokenizer import tokenize

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "AuthorAnalysis",
    "AuthorStatistics",
    "GlobalStatistics",
    "MessageRecord",
    "QualifyingRecord",
    "aggregate",
    "analyze",
    "build",
    "classify",
    "dedupe",
    "merge_statistics",
    "tokenize",
]
