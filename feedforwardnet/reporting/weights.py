"""Plain-text dump of the current network weights."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, TextIO

from ..core.network import Network

_RULE = "-" * 91


class WeightReport:
    """Append the network's weights to a text file after every epoch.

    Hidden-layer weights come first, one per line, hidden unit by hidden
    unit; then the output-layer weights, output unit by output unit. The
    file is only ever appended to, so earlier runs stay in it. A
    destination that cannot be opened is reported and skipped so training
    carries on.
    """

    def __init__(self, path: str | Path, network: Network) -> None:
        self.path = Path(path)
        self.network = network

    def on_epoch(self, epoch: int, metrics: Mapping[str, float] | None = None) -> None:
        self.write(epoch)

    __call__ = on_epoch

    def write(self, epoch: int) -> None:
        try:
            handle = self.path.open("a", encoding="utf-8")
        except OSError:
            print("no file found for output")
            return
        with handle:
            self._write_epoch(handle, epoch)

    def _write_epoch(self, out: TextIO, epoch: int) -> None:
        out.write(f"EPOCH: {epoch}\n")
        out.write("**************************\n")
        out.write(f"Updated Weights between the Hidden and Input Layers after Epoch {epoch}\n")
        out.write(_RULE + "\n")
        for node in self.network.hidden_nodes:
            for pair in node.parents:
                out.write(f"{pair.weight!r}\n")
        out.write(f"\nUpdated Weights between the Output and Hidden Layers after Epoch {epoch}\n")
        out.write(_RULE + "\n")
        for node in self.network.output_nodes:
            for pair in node.parents:
                out.write(f"{pair.weight!r}\n")
        out.write("\n")


__all__ = ["WeightReport"]
