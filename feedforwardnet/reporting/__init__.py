"""Reporting utilities for FeedForwardNet."""

from .artifacts import describe_network, write_manifest
from .metrics import EpochLog
from .plots import PlotAdapter
from .summary import summarize, write_summary
from .weights import WeightReport

__all__ = [
    "EpochLog",
    "PlotAdapter",
    "WeightReport",
    "describe_network",
    "summarize",
    "write_manifest",
    "write_summary",
]
