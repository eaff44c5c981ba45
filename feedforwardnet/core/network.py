"""One-hidden-layer network trained by online backpropagation."""

from __future__ import annotations

from typing import List, Mapping, Sequence

import numpy as np

from .nodes import (
    BiasToHiddenNode,
    BiasToOutputNode,
    HiddenNode,
    InputNode,
    Node,
    NodeWeightPair,
    OutputNode,
)
from .types import Array, EpochReport, Instance


def _as_matrix(name: str, weights, rows: int, cols: int) -> Array:
    matrix = np.asarray(weights, dtype=np.float64)
    if matrix.shape != (rows, cols):
        raise ValueError(
            f"{name} must have shape ({rows}, {cols}) but has shape {matrix.shape}"
        )
    return matrix


class EpochPrinter:
    """Print ``Epoch: <i>, Loss: <loss>`` after every epoch."""

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        print("Epoch: %d, Loss: %.3e" % (epoch, metrics["loss"]))

    __call__ = on_epoch


class Network:
    """Feed-forward classifier: input -> sigmoid hidden layer -> softmax output.

    After construction the last node of both ``input_nodes`` and
    ``hidden_nodes`` is a bias node.

    Parameters
    ----------
    training_set:
        Non-empty sequence of instances. The first instance fixes the input
        and output dimensionality.
    hidden_node_count:
        Number of hidden units, not counting the hidden bias.
    learning_rate:
        Positive step size for the per-instance weight updates.
    max_epoch:
        Number of passes :meth:`train` makes over the training set.
    rng:
        Generator used to shuffle the training set at the start of every
        epoch. It is advanced serially and never reseeded.
    hidden_weights:
        ``(hidden_node_count, num_attributes + 1)`` initial weights, row =
        hidden unit, column = input unit (bias last).
    output_weights:
        ``(num_classes, hidden_node_count + 1)`` initial weights, row =
        output unit, column = hidden unit (bias last).
    callbacks:
        Objects with an ``on_epoch(epoch, metrics)`` method, or plain
        callables, notified after every epoch. ``None`` installs
        :class:`EpochPrinter`.

    A ``list`` passed as ``training_set`` is kept by reference and shuffled
    in place, so the caller sees every epoch's order. Other sequences are
    copied into a new list first.
    """

    def __init__(
        self,
        training_set: Sequence[Instance],
        hidden_node_count: int,
        learning_rate: float,
        max_epoch: int,
        rng: np.random.Generator,
        hidden_weights,
        output_weights,
        *,
        callbacks: Sequence[object] | None = None,
    ) -> None:
        if len(training_set) == 0:
            raise ValueError("training_set must contain at least one instance")
        if hidden_node_count < 0:
            raise ValueError("hidden_node_count must be non-negative")
        if learning_rate <= 0:
            raise ValueError("learning_rate must be positive")
        if max_epoch < 0:
            raise ValueError("max_epoch must be non-negative")

        self.training_set: List[Instance] = (
            training_set if isinstance(training_set, list) else list(training_set)
        )
        self.learning_rate = float(learning_rate)
        self.max_epoch = int(max_epoch)
        self.rng = rng
        self.callbacks = [EpochPrinter()] if callbacks is None else list(callbacks)

        input_node_count = len(self.training_set[0].attributes)
        output_node_count = len(self.training_set[0].class_values)
        hidden = _as_matrix(
            "hidden_weights", hidden_weights, hidden_node_count, input_node_count + 1
        )
        output = _as_matrix(
            "output_weights", output_weights, output_node_count, hidden_node_count + 1
        )

        self.input_nodes: List[Node] = [InputNode() for _ in range(input_node_count)]
        self.input_nodes.append(BiasToHiddenNode())

        self.hidden_nodes: List[Node] = []
        for i in range(hidden_node_count):
            parents = [
                NodeWeightPair(j, float(hidden[i, j])) for j in range(len(self.input_nodes))
            ]
            self.hidden_nodes.append(HiddenNode(parents))
        self.hidden_nodes.append(BiasToOutputNode())

        self.output_nodes: List[OutputNode] = []
        for i in range(output_node_count):
            parents = [
                NodeWeightPair(j, float(output[i, j])) for j in range(len(self.hidden_nodes))
            ]
            self.output_nodes.append(OutputNode(parents))

        self._check_alignment()

    # ------------------------------------------------------------------
    # Structure

    @property
    def num_attributes(self) -> int:
        return len(self.input_nodes) - 1

    @property
    def num_hidden(self) -> int:
        return len(self.hidden_nodes) - 1

    @property
    def num_classes(self) -> int:
        return len(self.output_nodes)

    @property
    def hidden_units(self) -> List[HiddenNode]:
        """Hidden nodes that carry weights, i.e. the hidden layer minus its bias."""

        return self.hidden_nodes[:-1]  # type: ignore[return-value]

    def _check_alignment(self) -> None:
        # Backprop accumulates into slot k for the k-th hidden-layer node, so
        # every output node's k-th parent has to be that node.
        for layer, upstream in (
            (self.hidden_units, self.input_nodes),
            (self.output_nodes, self.hidden_nodes),
        ):
            for node in layer:
                indices = [pair.index for pair in node.parents]
                if indices != list(range(len(upstream))):
                    raise ValueError(
                        f"{node.kind.value} node parents {indices} do not span the "
                        f"previous layer of {len(upstream)} nodes in order"
                    )

    # ------------------------------------------------------------------
    # Forward pass, prediction and loss

    def forward(self, instance: Instance) -> Array:
        """Return the softmax class probabilities for ``instance``."""

        attributes = instance.attributes
        if len(attributes) != self.num_attributes:
            raise ValueError(
                f"Instance has {len(attributes)} attributes but the network "
                f"expects {self.num_attributes}"
            )
        for node, value in zip(self.input_nodes, attributes):
            node.set_input(value)

        for node in self.hidden_units:
            node.calculate_output(self.input_nodes)

        exp_sum = 0.0
        for node in self.output_nodes:
            node.calculate_output(self.hidden_nodes)
            exp_sum += node.output
        scores = np.empty(len(self.output_nodes), dtype=np.float64)
        for idx, node in enumerate(self.output_nodes):
            node.normalize_output(exp_sum)
            scores[idx] = node.output
        return scores

    def predict(self, instance: Instance) -> int:
        """Index of the most probable class; ties go to the lowest index."""

        scores = self.forward(instance)
        max_idx = -1
        for idx in range(len(scores)):
            if max_idx == -1 or scores[idx] > scores[max_idx]:
                max_idx = idx
        return max_idx

    def loss(self, instance: Instance) -> float:
        """Cross-entropy of the predicted distribution against the one-hot label."""

        scores = self.forward(instance)
        target = np.asarray(instance.class_values, dtype=np.float64)
        return float(-np.sum(target * np.log(scores)))

    def mean_loss(self, instances: Sequence[Instance] | None = None) -> float:
        instances = self.training_set if instances is None else instances
        total = 0.0
        for instance in instances:
            total += self.loss(instance)
        return total / len(instances)

    def accuracy(self, instances: Sequence[Instance] | None = None) -> float:
        instances = self.training_set if instances is None else instances
        hits = sum(1 for inst in instances if self.predict(inst) == inst.label)
        return hits / len(instances)

    # ------------------------------------------------------------------
    # Training

    def step(self, instance: Instance) -> None:
        """One online SGD update: forward pass, all deltas, then all weights."""

        scores = self.forward(instance)
        target = instance.class_values
        hidden_errors = [0.0] * len(self.hidden_nodes)

        for j, node in enumerate(self.output_nodes):
            node.calculate_delta(float(target[j] - scores[j]))
            for k, pair in enumerate(node.parents):
                hidden_errors[k] += pair.weight * node.delta
        for k, node in enumerate(self.hidden_units):
            node.calculate_delta(hidden_errors[k])

        for node in self.hidden_units:
            node.update_weight(self.learning_rate, self.input_nodes)
        for node in self.output_nodes:
            node.update_weight(self.learning_rate, self.hidden_nodes)

    def train(self, rng: np.random.Generator | None = None) -> List[EpochReport]:
        """Run ``max_epoch`` epochs of shuffled online training.

        Returns one :class:`EpochReport` per epoch with the mean loss and
        accuracy over the full training set, measured after the epoch.
        """

        rng = self.rng if rng is None else rng
        history: List[EpochReport] = []
        for epoch in range(self.max_epoch):
            rng.shuffle(self.training_set)
            for instance in self.training_set:
                self.step(instance)

            report = EpochReport(
                epoch=epoch,
                loss=self.mean_loss(),
                accuracy=self.accuracy(),
            )
            history.append(report)
            self._emit_epoch(epoch, report.as_metrics())
        return history

    def _emit_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(epoch, metrics)

    # ------------------------------------------------------------------
    # Weights

    def hidden_weights(self) -> Array:
        return np.array(
            [[pair.weight for pair in node.parents] for node in self.hidden_units],
            dtype=np.float64,
        ).reshape(self.num_hidden, len(self.input_nodes))

    def output_weights(self) -> Array:
        return np.array(
            [[pair.weight for pair in node.parents] for node in self.output_nodes],
            dtype=np.float64,
        ).reshape(self.num_classes, len(self.hidden_nodes))

    def state_dict(self) -> Mapping[str, Array]:
        return {"hidden": self.hidden_weights(), "output": self.output_weights()}

    def load_state_dict(self, state: Mapping[str, Array]) -> None:
        for key in ("hidden", "output"):
            if key not in state:
                raise KeyError(f"Missing weight {key} in state dict")
        hidden = _as_matrix(
            "hidden", state["hidden"], self.num_hidden, len(self.input_nodes)
        )
        output = _as_matrix(
            "output", state["output"], self.num_classes, len(self.hidden_nodes)
        )
        for layer, matrix in ((self.hidden_units, hidden), (self.output_nodes, output)):
            for node, row in zip(layer, matrix):
                for pair in node.parents:
                    pair.weight = float(row[pair.index])


__all__ = ["EpochPrinter", "Network"]
