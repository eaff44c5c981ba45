"""Core numerical primitives for FeedForwardNet."""

from . import activations, nodes, types
from .init import initial_weights
from .network import EpochPrinter, Network

__all__ = ["EpochPrinter", "Network", "activations", "initial_weights", "nodes", "types"]
