"""Core typing contracts for FeedForwardNet."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Tuple

import numpy as np

Array = np.ndarray


class NodeKind(str, Enum):
    """The closed set of unit variants a network is built from."""

    INPUT = "input"
    BIAS_TO_HIDDEN = "bias_to_hidden"
    HIDDEN = "hidden"
    BIAS_TO_OUTPUT = "bias_to_output"
    OUTPUT = "output"


@dataclass(frozen=True)
class Instance:
    """A single labelled example.

    Attributes
    ----------
    attributes:
        Real-valued inputs, identical length across a dataset.
    class_values:
        One-hot class membership indicators; exactly one entry is ``1``.
    """

    attributes: Tuple[float, ...]
    class_values: Tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", tuple(float(a) for a in self.attributes))
        object.__setattr__(self, "class_values", tuple(int(c) for c in self.class_values))

    @property
    def label(self) -> int:
        """Index of the true class."""

        return self.class_values.index(1)


@dataclass(frozen=True)
class EpochReport:
    """Metrics observed at the end of one training epoch."""

    epoch: int
    loss: float
    accuracy: float

    def as_metrics(self) -> Mapping[str, float]:
        return {"loss": self.loss, "accuracy": self.accuracy}

    @classmethod
    def from_metrics(cls, epoch: int, metrics: Mapping[str, float]) -> "EpochReport":
        return cls(
            epoch=int(epoch),
            loss=float(metrics["loss"]),
            accuracy=float(metrics["accuracy"]),
        )


@dataclass(frozen=True)
class Dataset:
    """A named list of instances together with where it came from."""

    name: str
    instances: Tuple[Instance, ...]
    provenance: Dict[str, object] = field(default_factory=dict)

    @property
    def num_attributes(self) -> int:
        return len(self.instances[0].attributes)

    @property
    def num_classes(self) -> int:
        return len(self.instances[0].class_values)


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`feedforwardnet.training.pipelines.run_pipeline`."""

    epochs: int
    final_loss: float
    final_accuracy: float
    metrics_path: str
    manifest_path: str
    summary_path: str = ""
