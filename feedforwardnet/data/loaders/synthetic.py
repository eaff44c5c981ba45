"""Pure in-memory synthetic datasets."""

from __future__ import annotations

import numpy as np

from ...core.types import Dataset
from ..registry import register_dataset
from ..utils import instances_from_arrays


def _make_blobs(
    n_points: int, num_classes: int, d_in: int, spread: float, seed: int
) -> tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    centers = rng.uniform(-3.0, 3.0, size=(num_classes, d_in))
    labels = np.arange(n_points) % num_classes
    x = centers[labels] + spread * rng.standard_normal((n_points, d_in))
    idx = rng.permutation(n_points)
    return x[idx], labels[idx]


@register_dataset("blobs")
def load_blobs(
    n_points: int = 120,
    num_classes: int = 3,
    d_in: int = 2,
    spread: float = 0.5,
    seed: int = 0,
    **_: object,
) -> Dataset:
    """Isotropic Gaussian clusters, one per class, with balanced labels."""

    if num_classes < 2:
        raise ValueError("blobs needs at least two classes")
    x, y = _make_blobs(n_points, num_classes, d_in, spread, seed)
    provenance = {
        "type": "synthetic",
        "generator": "blobs",
        "n_points": n_points,
        "num_classes": num_classes,
        "d_in": d_in,
        "spread": spread,
        "seed": seed,
    }
    return Dataset(
        name="blobs",
        instances=tuple(instances_from_arrays(x, y, num_classes)),
        provenance=provenance,
    )


@register_dataset("xor")
def load_xor(repeats: int = 1, noise: float = 0.0, seed: int = 0, **_: object) -> Dataset:
    """The four XOR corners, repeated ``repeats`` times with optional jitter."""

    corners = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
    labels = np.array([0, 1, 1, 0])
    x = np.tile(corners, (repeats, 1))
    y = np.tile(labels, repeats)
    if noise > 0:
        rng = np.random.default_rng(seed)
        x = x + noise * rng.standard_normal(x.shape)
    provenance = {
        "type": "synthetic",
        "generator": "xor",
        "repeats": repeats,
        "noise": noise,
        "seed": seed,
    }
    return Dataset(
        name="xor",
        instances=tuple(instances_from_arrays(x, y, 2)),
        provenance=provenance,
    )
