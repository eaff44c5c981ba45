"""Training curves rendered with matplotlib on the Agg backend."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping

from ..core.types import EpochReport

CURVES_FILENAME = "training_curves.png"


class PlotAdapter:
    """Draw mean loss and training accuracy per epoch, one panel each.

    Nothing is collected or written unless ``enable_plots`` is set. The
    figure is saved to ``run_dir / CURVES_FILENAME`` by :meth:`close`.
    """

    def __init__(self, run_dir: str | Path, enable_plots: bool = False):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self.reports: List[EpochReport] = []

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        if self.enable_plots:
            self.reports.append(EpochReport.from_metrics(epoch, metrics))

    __call__ = on_epoch

    def close(self) -> Path | None:
        if not self.enable_plots or not self.reports:
            return None
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt

        epochs = [r.epoch for r in self.reports]
        fig, (loss_ax, acc_ax) = plt.subplots(2, 1, sharex=True, figsize=(6, 6))
        loss_ax.plot(epochs, [r.loss for r in self.reports], color="tab:red")
        loss_ax.set_ylabel("Mean cross-entropy")
        acc_ax.plot(epochs, [r.accuracy for r in self.reports], color="tab:blue")
        acc_ax.set_ylabel("Training accuracy")
        acc_ax.set_ylim(0.0, 1.05)
        acc_ax.set_xlabel("Epoch")
        fig.tight_layout()

        self.run_dir.mkdir(parents=True, exist_ok=True)
        out = self.run_dir / CURVES_FILENAME
        fig.savefig(out)
        plt.close(fig)
        return out


__all__ = ["CURVES_FILENAME", "PlotAdapter"]
