"""Generic CSV loader for classification tasks."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
from sklearn.preprocessing import LabelEncoder

from ...core.types import Dataset
from ..registry import register_dataset
from ..utils import instances_from_arrays, standardize


def _load_csv(path: Path, target_col: str) -> tuple[np.ndarray, np.ndarray, list[str]]:
    df = pd.read_csv(path)
    if target_col not in df.columns:
        raise KeyError(f"Target column {target_col!r} not found in CSV")
    encoder = LabelEncoder()
    y = encoder.fit_transform(df.pop(target_col).astype(str))
    X = df.to_numpy(dtype=np.float64)
    return X, y, [str(c) for c in encoder.classes_]


@register_dataset("csv")
def load_csv(
    *,
    csv_path: str | Path | None = None,
    target_col: str = "target",
    standardize_inputs: bool = True,
    **_: object,
) -> Dataset:
    """Load a classification dataset; every non-target column is an attribute."""

    if csv_path is None:
        raise ValueError("csv dataset requires a csv_path option")
    path = Path(csv_path)
    X, y, classes = _load_csv(path, target_col)
    if standardize_inputs:
        X, _mean, _std = standardize(X)

    provenance = {
        "path": str(path),
        "target_col": target_col,
        "standardize_inputs": standardize_inputs,
        "classes": classes,
    }
    return Dataset(
        name="csv",
        instances=tuple(instances_from_arrays(X, y, len(classes))),
        provenance=provenance,
    )
