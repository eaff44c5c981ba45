"""FeedForwardNet public API."""

from .core import activations, nodes, types  # noqa: F401
from .core.init import initial_weights
from .core.network import Network
from .core.types import Dataset, EpochReport, Instance, RunResult
from .data import instances_from_arrays
from .training.pipelines import load_preset, presets, run_pipeline

__all__ = [
    "Dataset",
    "EpochReport",
    "Instance",
    "Network",
    "RunResult",
    "activations",
    "initial_weights",
    "instances_from_arrays",
    "load_preset",
    "nodes",
    "presets",
    "run_pipeline",
    "types",
]
