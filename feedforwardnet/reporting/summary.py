"""End-of-run summary built from the epoch reports."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Sequence

import numpy as np

from ..core.types import EpochReport


def summarize(reports: Sequence[EpochReport]) -> Mapping[str, object]:
    """Final epoch, best epochs and overall loss change of a training run.

    ``best_loss`` is the first epoch with the lowest loss and
    ``best_accuracy`` the first with the highest accuracy. Everything but
    ``epochs`` is ``None`` for a run without epochs.
    """

    if not reports:
        return {
            "epochs": 0,
            "final": None,
            "best_loss": None,
            "best_accuracy": None,
            "loss_change": None,
        }
    losses = np.asarray([r.loss for r in reports], dtype=np.float64)
    accuracies = np.asarray([r.accuracy for r in reports], dtype=np.float64)
    final = reports[-1]
    best_loss = reports[int(np.argmin(losses))]
    best_accuracy = reports[int(np.argmax(accuracies))]
    return {
        "epochs": len(reports),
        "final": {"epoch": final.epoch, "loss": final.loss, "accuracy": final.accuracy},
        "best_loss": {"epoch": best_loss.epoch, "loss": best_loss.loss},
        "best_accuracy": {"epoch": best_accuracy.epoch, "accuracy": best_accuracy.accuracy},
        "loss_change": float(losses[-1] - losses[0]),
    }


def write_summary(reports: Sequence[EpochReport], path: str | Path) -> str:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summarize(reports), sort_keys=True, indent=2))
    return str(path)


__all__ = ["summarize", "write_summary"]
