"""Utility helpers for dataset loaders."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from ..core.types import Array, Instance


def one_hot(labels: Array, num_classes: int) -> Array:
    labels = np.asarray(labels, dtype=np.int64).reshape(-1)
    if labels.size and (labels.min() < 0 or labels.max() >= num_classes):
        raise ValueError(f"Labels must lie in [0, {num_classes})")
    out = np.zeros((labels.shape[0], num_classes), dtype=np.int64)
    out[np.arange(labels.shape[0]), labels] = 1
    return out


def standardize(x: Array, eps: float = 1e-8) -> Tuple[Array, Array, Array]:
    """Return ``x`` standardised column-wise together with mean and std."""

    mean = x.mean(axis=0, keepdims=True)
    std = x.std(axis=0, keepdims=True)
    std = np.where(std < eps, 1.0, std)
    return (x - mean) / std, mean, std


def instances_from_arrays(
    inputs: Array, labels: Sequence[int], num_classes: int | None = None
) -> List[Instance]:
    """Pair each row of ``inputs`` with the one-hot encoding of its label."""

    inputs = np.asarray(inputs, dtype=np.float64)
    if inputs.ndim != 2:
        raise ValueError(f"inputs must be 2-D, got shape {inputs.shape}")
    labels = np.asarray(labels, dtype=np.int64).reshape(-1)
    if labels.shape[0] != inputs.shape[0]:
        raise ValueError(
            f"Got {inputs.shape[0]} input rows but {labels.shape[0]} labels"
        )
    if num_classes is None:
        num_classes = int(labels.max()) + 1 if labels.size else 0
    targets = one_hot(labels, num_classes)
    return [
        Instance(attributes=tuple(row.tolist()), class_values=tuple(target.tolist()))
        for row, target in zip(inputs, targets)
    ]


__all__ = ["instances_from_arrays", "one_hot", "standardize"]
