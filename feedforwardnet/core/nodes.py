"""Units of a one-hidden-layer network.

Every node is one of a closed set of variants (see :class:`NodeKind`).
Hidden and output nodes keep their incoming connections as
:class:`NodeWeightPair` links holding an *index* into the previous layer,
so a node never owns a reference to another node. Operations that need the
previous layer's activations take that layer as the ``upstream`` argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .activations import exp, sigmoid, sigmoid_deriv_from_output
from .types import NodeKind


@dataclass
class NodeWeightPair:
    """Incoming edge: position of the parent in the previous layer and its weight."""

    index: int
    weight: float


class Node:
    """Base unit. Subclasses enable the operations their kind supports."""

    kind: NodeKind

    def __init__(self) -> None:
        self._output = 0.0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(output={self._output!r})"

    @property
    def output(self) -> float:
        return self._output

    @property
    def parents(self) -> Sequence[NodeWeightPair]:
        return ()

    def set_input(self, value: float) -> None:
        self._unsupported("set_input")

    def calculate_output(self, upstream: Sequence["Node"]) -> None:
        self._unsupported("calculate_output")

    def normalize_output(self, exp_sum: float) -> None:
        self._unsupported("normalize_output")

    def calculate_delta(self, error_signal: float) -> None:
        self._unsupported("calculate_delta")

    def update_weight(self, learning_rate: float, upstream: Sequence["Node"]) -> None:
        self._unsupported("update_weight")

    def _unsupported(self, operation: str) -> None:
        raise TypeError(f"{operation} is not defined for {self.kind.value} nodes")


class InputNode(Node):
    kind = NodeKind.INPUT

    def set_input(self, value: float) -> None:
        self._output = float(value)


class BiasNode(Node):
    """Constant unit whose activation is always exactly ``1.0``."""

    def __init__(self) -> None:
        super().__init__()
        self._output = 1.0


class BiasToHiddenNode(BiasNode):
    kind = NodeKind.BIAS_TO_HIDDEN


class BiasToOutputNode(BiasNode):
    kind = NodeKind.BIAS_TO_OUTPUT


class WeightedNode(Node):
    """A unit with incoming weighted edges and a backpropagated delta."""

    def __init__(self, parents: Sequence[NodeWeightPair] = ()) -> None:
        super().__init__()
        self._parents: List[NodeWeightPair] = list(parents)
        self.delta = 0.0

    @property
    def parents(self) -> List[NodeWeightPair]:
        return self._parents

    def weighted_sum(self, upstream: Sequence[Node]) -> float:
        total = 0.0
        for pair in self._parents:
            total += upstream[pair.index].output * pair.weight
        return total

    def update_weight(self, learning_rate: float, upstream: Sequence[Node]) -> None:
        for pair in self._parents:
            pair.weight += learning_rate * self.delta * upstream[pair.index].output


class HiddenNode(WeightedNode):
    kind = NodeKind.HIDDEN

    def calculate_output(self, upstream: Sequence[Node]) -> None:
        self._output = sigmoid(self.weighted_sum(upstream))

    def calculate_delta(self, error_signal: float) -> None:
        # error_signal is the weighted sum of downstream output deltas.
        self.delta = error_signal * sigmoid_deriv_from_output(self._output)


class OutputNode(WeightedNode):
    kind = NodeKind.OUTPUT

    def calculate_output(self, upstream: Sequence[Node]) -> None:
        self._output = exp(self.weighted_sum(upstream))

    def normalize_output(self, exp_sum: float) -> None:
        self._output = float(np.float64(self._output) / exp_sum)

    def calculate_delta(self, error_signal: float) -> None:
        # softmax + cross-entropy: the delta is target - prediction as given.
        self.delta = error_signal


__all__ = [
    "BiasNode",
    "BiasToHiddenNode",
    "BiasToOutputNode",
    "HiddenNode",
    "InputNode",
    "Node",
    "NodeWeightPair",
    "OutputNode",
    "WeightedNode",
]
