"""Fisher's Iris data as bundled with scikit-learn (no network access)."""

from __future__ import annotations

from sklearn.datasets import load_iris as _sk_load_iris

from ...core.types import Dataset
from ..registry import register_dataset
from ..utils import instances_from_arrays, standardize


@register_dataset("iris")
def load_iris(standardize_inputs: bool = True, **_: object) -> Dataset:
    bunch = _sk_load_iris()
    x = bunch.data.astype("float64")
    if standardize_inputs:
        x, _mean, _std = standardize(x)
    provenance = {
        "type": "sklearn",
        "name": "iris",
        "standardize_inputs": standardize_inputs,
        "classes": [str(name) for name in bunch.target_names],
    }
    return Dataset(
        name="iris",
        instances=tuple(instances_from_arrays(x, bunch.target, len(bunch.target_names))),
        provenance=provenance,
    )
