"""Run manifest describing the dataset, the network shape and the environment."""

from __future__ import annotations

import json
import platform
import subprocess
import time
from pathlib import Path
from typing import Mapping

import numpy as np

from ..core.network import Network
from ..core.types import Dataset


def _git_sha() -> str:
    try:
        out = subprocess.check_output(["git", "rev-parse", "HEAD"], stderr=subprocess.DEVNULL)
        return out.decode().strip()
    except Exception:  # pragma: no cover - git may be unavailable in tests
        return "unknown"


def describe_network(network: Network) -> Mapping[str, object]:
    """Layer sizes (bias nodes counted separately) and trainable weight count."""

    hidden_weights = network.num_hidden * len(network.input_nodes)
    output_weights = network.num_classes * len(network.hidden_nodes)
    return {
        "attributes": network.num_attributes,
        "hidden": network.num_hidden,
        "classes": network.num_classes,
        "bias_nodes": 2,
        "weights": {
            "hidden": hidden_weights,
            "output": output_weights,
            "total": hidden_weights + output_weights,
        },
        "learning_rate": network.learning_rate,
        "max_epoch": network.max_epoch,
    }


def write_manifest(
    path: str | Path,
    *,
    config: Mapping[str, object],
    dataset: Dataset,
    network: Network,
) -> str:
    """Write the reproducibility manifest of one run as JSON."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    manifest = {
        "git_sha": _git_sha(),
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "config": config,
        "dataset": {
            "name": dataset.name,
            "instances": len(dataset.instances),
            "provenance": dict(dataset.provenance),
        },
        "network": describe_network(network),
        "environment": {
            "python": platform.python_version(),
            "numpy": np.__version__,
        },
    }
    path.write_text(json.dumps(manifest, indent=2))
    return str(path)


__all__ = ["describe_network", "write_manifest"]
