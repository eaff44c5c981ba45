"""Command line entry point for FeedForwardNet training runs."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path
from typing import Iterable

from feedforwardnet.data import registry as data_registry
from feedforwardnet.training import pipelines


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="blobs",
        help="Preset configuration to execute",
    )
    parser.add_argument(
        "--config", type=Path, help="Optional JSON/YAML config override"
    )
    parser.add_argument(
        "--dataset",
        choices=sorted(data_registry.names()),
        help="Override the dataset used by the run",
    )
    parser.add_argument("--csv-path", help="Path to a CSV file for the csv dataset")
    parser.add_argument(
        "--target-col", help="Target column name for the csv dataset"
    )
    parser.add_argument("--hidden", type=int, help="Number of hidden units")
    parser.add_argument("--epochs", type=int, help="Number of training epochs")
    parser.add_argument("--lr", type=float, help="Learning rate")
    parser.add_argument(
        "--seed", type=int, help="Seed for initial weights and epoch shuffling"
    )
    parser.add_argument("--run-dir", help="Directory receiving run artifacts")
    parser.add_argument(
        "--dump-weights",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Append the weights to weights.txt after every epoch",
    )
    parser.add_argument(
        "--enable-plots",
        action="store_true",
        help="Write loss and accuracy curves to training_curves.png",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress the per-epoch console lines"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> dict:
    config = json.loads(json.dumps(pipelines.load_preset(args.preset)))

    if args.config:
        override = pipelines.load_config_file(args.config)
        if {"data", "model", "train"} <= set(override.keys()):
            config = json.loads(json.dumps(override))
        else:
            config = pipelines.merge_config(config, override)

    if args.dataset:
        options: dict = {}
        if args.dataset == "csv":
            if args.csv_path:
                options["csv_path"] = args.csv_path
            if args.target_col:
                options["target_col"] = args.target_col
        config["data"] = {"name": args.dataset, "options": options}

    model_cfg = config.setdefault("model", {})
    train_cfg = config.setdefault("train", {})
    if args.hidden is not None:
        model_cfg["hidden"] = int(args.hidden)
    if args.epochs is not None:
        train_cfg["epochs"] = int(args.epochs)
    if args.lr is not None:
        train_cfg["lr"] = float(args.lr)
    if args.seed is not None:
        train_cfg["seed"] = int(args.seed)
    if args.run_dir:
        train_cfg["run_dir"] = args.run_dir
    if args.dump_weights is not None:
        train_cfg["dump_weights"] = bool(args.dump_weights)
    if args.enable_plots:
        train_cfg["enable_plots"] = True
    if args.quiet:
        train_cfg["quiet"] = True
    return config


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    config = resolve_config(args)

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    result = pipelines.run_pipeline(config)
    print(json.dumps(asdict(result), sort_keys=True))


if __name__ == "__main__":
    main()
