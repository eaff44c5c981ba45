import json
from pathlib import Path

import numpy as np
import pytest

from feedforwardnet.training import pipelines


def _config(run_dir: Path, **train_overrides) -> dict:
    train = {
        "epochs": 5,
        "lr": 0.1,
        "seed": 11,
        "run_dir": str(run_dir),
        "enable_plots": False,
        "dump_weights": True,
        "quiet": True,
    }
    train.update(train_overrides)
    return {
        "data": {"name": "blobs", "options": {"n_points": 30, "num_classes": 3, "seed": 0}},
        "model": {"hidden": 3, "init_scale": 0.1},
        "train": train,
    }


def test_pipeline_produces_artifacts(tmp_path):
    config = _config(tmp_path / "run")
    result = pipelines.run_pipeline(config)

    run_dir = Path(config["train"]["run_dir"])
    assert result.epochs == 5
    records = [json.loads(line) for line in Path(result.metrics_path).read_text().splitlines()]
    assert [r["epoch"] for r in records] == [0, 1, 2, 3, 4]
    assert all(r["seed"] == 11 for r in records)
    assert records[-1]["loss"] == pytest.approx(result.final_loss)
    assert records[-1]["accuracy"] == pytest.approx(result.final_accuracy)

    manifest = json.loads(Path(result.manifest_path).read_text())
    assert manifest["config"]["train"]["seed"] == 11
    assert manifest["dataset"]["name"] == "blobs"
    assert manifest["dataset"]["instances"] == 30
    assert manifest["dataset"]["provenance"]["generator"] == "blobs"
    assert manifest["network"]["hidden"] == 3
    assert manifest["network"]["weights"]["total"] == 3 * 3 + 3 * 4
    summary = json.loads(Path(result.summary_path).read_text())
    assert summary["epochs"] == 5
    assert summary["final"]["loss"] == pytest.approx(result.final_loss)
    assert summary["final"]["accuracy"] == pytest.approx(result.final_accuracy)
    assert (run_dir / "config.json").exists()

    weights = (run_dir / "weights.txt").read_text()
    assert weights.count("EPOCH: ") == 5
    with np.load(run_dir / "final.npz") as state:
        assert state["hidden"].shape == (3, 3)
        assert state["output"].shape == (3, 4)


def test_weight_dump_accumulates_across_runs(tmp_path):
    run_dir = tmp_path / "run"
    pipelines.run_pipeline(_config(run_dir, epochs=2))
    pipelines.run_pipeline(_config(run_dir, epochs=3))

    weights = (run_dir / "weights.txt").read_text()
    assert weights.count("EPOCH: ") == 5
    assert len((run_dir / "metrics.jsonl").read_text().splitlines()) == 3


def test_pipeline_determinism(tmp_path):
    first = pipelines.run_pipeline(_config(tmp_path / "run1", dump_weights=False))
    second = pipelines.run_pipeline(_config(tmp_path / "run2", dump_weights=False))
    assert Path(first.metrics_path).read_text() == Path(second.metrics_path).read_text()
    assert first.final_loss == second.final_loss


def test_pipeline_prints_banner_and_epoch_lines(tmp_path, capsys):
    pipelines.run_pipeline(_config(tmp_path / "run", epochs=2, quiet=False, dump_weights=False))
    out = capsys.readouterr().out
    assert "=== FeedForwardNet run ===" in out
    assert "Epoch: 0, Loss: " in out
    assert "Epoch: 1, Loss: " in out


def test_missing_sections_are_rejected():
    with pytest.raises(KeyError):
        pipelines.run_pipeline({"data": {"name": "xor"}, "model": {}})


def test_presets_are_independent_copies():
    preset = pipelines.load_preset("xor")
    preset["train"]["epochs"] = 1
    assert pipelines.load_preset("xor")["train"]["epochs"] == 500
    assert set(pipelines.presets()) == {"blobs", "iris", "xor"}
    with pytest.raises(KeyError):
        pipelines.load_preset("missing")


def test_yaml_and_json_config_files(tmp_path):
    yaml_path = tmp_path / "override.yaml"
    yaml_path.write_text("train:\n  epochs: 3\n  lr: 0.5\n")
    json_path = tmp_path / "override.json"
    json_path.write_text(json.dumps({"model": {"hidden": 7}}))

    merged = pipelines.load_preset("blobs")
    merged = pipelines.merge_config(dict(merged), pipelines.load_config_file(yaml_path))
    merged = pipelines.merge_config(merged, pipelines.load_config_file(json_path))
    assert merged["train"]["epochs"] == 3
    assert merged["train"]["lr"] == 0.5
    assert merged["train"]["seed"] == 7
    assert merged["model"] == {"hidden": 7, "init_scale": 0.05}

    with pytest.raises(ValueError):
        pipelines.load_config_file(tmp_path / "override.txt")
