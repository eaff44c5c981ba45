"""Pipeline assembly: dataset + initial weights + network + sinks."""

from __future__ import annotations

import json
import time
from copy import deepcopy
from pathlib import Path
from typing import Dict, Mapping

import numpy as np

from ..core.init import initial_weights
from ..core.network import EpochPrinter, Network
from ..core.types import RunResult
from ..data import registry
from ..reporting.artifacts import write_manifest
from ..reporting.metrics import EpochLog
from ..reporting.plots import PlotAdapter
from ..reporting.summary import write_summary
from ..reporting.weights import WeightReport

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor": {
        "data": {"name": "xor", "options": {"repeats": 4}},
        "model": {"hidden": 4, "init_scale": 0.5},
        "train": {
            "epochs": 500,
            "lr": 0.5,
            "seed": 3,
            "run_dir": "runs/xor",
            "enable_plots": False,
            "dump_weights": False,
        },
    },
    "blobs": {
        "data": {
            "name": "blobs",
            "options": {"n_points": 150, "num_classes": 3, "d_in": 2, "seed": 0},
        },
        "model": {"hidden": 5, "init_scale": 0.05},
        "train": {
            "epochs": 50,
            "lr": 0.1,
            "seed": 7,
            "run_dir": "runs/blobs",
            "enable_plots": False,
            "dump_weights": False,
        },
    },
    "iris": {
        "data": {"name": "iris", "options": {"standardize_inputs": True}},
        "model": {"hidden": 6, "init_scale": 0.05},
        "train": {
            "epochs": 100,
            "lr": 0.05,
            "seed": 1,
            "run_dir": "runs/iris",
            "enable_plots": False,
            "dump_weights": True,
        },
    },
}

_REQUIRED_SECTIONS = {"data", "model", "train"}


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> Mapping[str, object]:
    try:
        return deepcopy(_PRESETS[name])
    except KeyError as exc:
        raise KeyError(f"Unknown preset: {name}") from exc


def load_config_file(path: str | Path) -> Mapping[str, object]:
    """Read a JSON or YAML config file into a mapping."""

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise ValueError(f"Unsupported config file type: {path.suffix}")
    text = path.read_text()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as exc:  # pragma: no cover - dependency missing
            raise RuntimeError("PyYAML is required to load YAML configs") from exc
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text or "{}")
    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


def merge_config(base: dict, override: Mapping[str, object]) -> dict:
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            base[key] = merge_config(dict(base[key]), value)
        else:
            base[key] = value
    return base


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    missing = _REQUIRED_SECTIONS - set(config)
    if missing:
        raise KeyError(f"Config is missing required sections: {', '.join(sorted(missing))}")

    data_cfg = dict(config["data"])
    model_cfg = dict(config["model"])
    train_cfg = dict(config["train"])

    dataset = registry.get(data_cfg["name"], **data_cfg.get("options", {}))

    seed = int(train_cfg.get("seed", 0))
    hidden = int(model_cfg.get("hidden", 4))
    epochs = int(train_cfg.get("epochs", 1))
    lr = float(train_cfg.get("lr", 0.1))

    init_rng = np.random.default_rng(seed)
    shuffle_rng = np.random.default_rng(seed + 1)
    hidden_weights, output_weights = initial_weights(
        init_rng,
        d_in=dataset.num_attributes,
        hidden=hidden,
        d_out=dataset.num_classes,
        scale=float(model_cfg.get("init_scale", 0.05)),
    )

    run_dir = _resolve_run_dir(train_cfg, dataset.name)
    run_dir.mkdir(parents=True, exist_ok=True)

    if not train_cfg.get("quiet", False):
        _print_startup_summary(
            dataset_name=dataset.name,
            instances=len(dataset.instances),
            dims=[dataset.num_attributes, hidden, dataset.num_classes],
            epochs=epochs,
            lr=lr,
            seed=seed,
        )

    epoch_log = EpochLog(run_dir / "metrics.jsonl", seed=seed)
    plots = PlotAdapter(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))
    callbacks: list[object] = [epoch_log, plots]
    if not train_cfg.get("quiet", False):
        callbacks.insert(0, EpochPrinter())

    network = Network(
        list(dataset.instances),
        hidden_node_count=hidden,
        learning_rate=lr,
        max_epoch=epochs,
        rng=shuffle_rng,
        hidden_weights=hidden_weights,
        output_weights=output_weights,
        callbacks=callbacks,
    )
    if train_cfg.get("dump_weights", False):
        network.callbacks.append(WeightReport(run_dir / "weights.txt", network))

    history = network.train()
    plots.close()

    with (run_dir / "final.npz").open("wb") as handle:
        np.savez_compressed(handle, **network.state_dict())

    safe_config = json.loads(json.dumps(config))
    manifest = write_manifest(
        run_dir / "manifest.json",
        config=safe_config,
        dataset=dataset,
        network=network,
    )
    summary_path = write_summary(epoch_log.reports, run_dir / "summary.json")
    (run_dir / "config.json").write_text(json.dumps(safe_config, indent=2))

    if history:
        final_loss, final_accuracy = history[-1].loss, history[-1].accuracy
    else:
        final_loss, final_accuracy = network.mean_loss(), network.accuracy()
    return RunResult(
        epochs=len(history),
        final_loss=float(final_loss),
        final_accuracy=float(final_accuracy),
        metrics_path=str(epoch_log.path),
        manifest_path=manifest,
        summary_path=summary_path,
    )


def _resolve_run_dir(train_cfg: Mapping[str, object], dataset: str) -> Path:
    if "run_dir" in train_cfg:
        return Path(train_cfg["run_dir"])
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return Path("runs") / timestamp / dataset


def _print_startup_summary(
    *,
    dataset_name: str,
    instances: int,
    dims: list[int],
    epochs: int,
    lr: float,
    seed: int,
) -> None:
    print("=== FeedForwardNet run ===")
    print(f"Dataset       : {dataset_name} ({instances} instances)")
    print(f"Dimensions    : {dims}")
    print(f"Epochs        : {epochs}")
    print(f"Learning rate : {lr}")
    print(f"Seed          : {seed}")
    print("==========================")


__all__ = ["load_config_file", "load_preset", "merge_config", "presets", "run_pipeline"]
