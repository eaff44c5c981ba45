"""Per-epoch training log."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Mapping

from ..core.types import EpochReport


class EpochLog:
    """Collect the :class:`EpochReport` of every epoch and mirror it to JSONL.

    One line per epoch: ``{"epoch", "loss", "accuracy", "seed"}``. The file
    is emptied when the log is created so it only ever holds one run.
    """

    def __init__(self, path: str | Path, *, seed: int | None = None) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.seed = seed
        self.reports: List[EpochReport] = []

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        self.record(EpochReport.from_metrics(epoch, metrics))

    __call__ = on_epoch

    def record(self, report: EpochReport) -> None:
        self.reports.append(report)
        line = {
            "epoch": report.epoch,
            "loss": report.loss,
            "accuracy": report.accuracy,
            "seed": self.seed,
        }
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(line) + "\n")


__all__ = ["EpochLog"]
