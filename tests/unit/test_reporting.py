import json
from pathlib import Path

import numpy as np
import pytest

from feedforwardnet.core.network import Network
from feedforwardnet.core.types import EpochReport
from feedforwardnet.data.utils import instances_from_arrays
from feedforwardnet.reporting.artifacts import describe_network
from feedforwardnet.reporting.metrics import EpochLog
from feedforwardnet.reporting.plots import CURVES_FILENAME, PlotAdapter
from feedforwardnet.reporting.summary import summarize, write_summary
from feedforwardnet.reporting.weights import WeightReport


def _network():
    instances = instances_from_arrays(np.array([[0.0, 1.0], [1.0, 0.0]]), [0, 1], 2)
    hidden_w = np.arange(6, dtype=float).reshape(2, 3) / 10
    output_w = -np.arange(6, dtype=float).reshape(2, 3) / 10
    return Network(
        instances, 2, 0.1, 1, np.random.default_rng(0), hidden_w, output_w, callbacks=[]
    )


def test_weight_report_layout(tmp_path):
    network = _network()
    path = tmp_path / "weights.txt"
    report = WeightReport(path, network)
    report.on_epoch(0, {"loss": 1.0})
    report.on_epoch(1, {"loss": 0.5})

    lines = path.read_text().splitlines()
    assert lines[0] == "EPOCH: 0"
    assert lines[1] == "*" * 26
    assert lines[2] == "Updated Weights between the Hidden and Input Layers after Epoch 0"
    assert [float(v) for v in lines[4:10]] == [0.0, 0.1, 0.2, 0.3, 0.4, 0.5]
    assert lines[10] == ""
    assert lines[11] == "Updated Weights between the Output and Hidden Layers after Epoch 0"
    assert [float(v) for v in lines[13:19]] == [-0.0, -0.1, -0.2, -0.3, -0.4, -0.5]
    assert lines.count("EPOCH: 1") == 1


def test_weight_report_survives_unwritable_destination(tmp_path, capsys):
    report = WeightReport(tmp_path, _network())
    report.on_epoch(0, {})
    assert capsys.readouterr().out.strip() == "no file found for output"


def test_weight_report_appends_to_existing_file(tmp_path):
    path = tmp_path / "weights.txt"
    path.write_text("earlier run\n")
    WeightReport(path, _network()).on_epoch(0, {})

    lines = path.read_text().splitlines()
    assert lines[0] == "earlier run"
    assert lines[1] == "EPOCH: 0"


def test_epoch_log_keeps_reports_and_writes_jsonl(tmp_path):
    log = EpochLog(tmp_path / "m.jsonl", seed=3)
    log.on_epoch(0, {"loss": 0.9, "accuracy": 0.5})
    log(1, {"loss": 0.4, "accuracy": 0.75})

    assert log.reports == [
        EpochReport(epoch=0, loss=0.9, accuracy=0.5),
        EpochReport(epoch=1, loss=0.4, accuracy=0.75),
    ]
    records = [json.loads(line) for line in log.path.read_text().splitlines()]
    assert records[1] == {"epoch": 1, "loss": 0.4, "accuracy": 0.75, "seed": 3}


def test_epoch_log_starts_a_fresh_file(tmp_path):
    path = tmp_path / "m.jsonl"
    path.write_text('{"epoch": 7}\n')
    log = EpochLog(path)
    log.on_epoch(0, {"loss": 1.0, "accuracy": 0.0})
    assert len(path.read_text().splitlines()) == 1


def test_summary_reports_final_and_best_epochs(tmp_path):
    reports = [
        EpochReport(epoch=0, loss=3.0, accuracy=0.25),
        EpochReport(epoch=1, loss=1.0, accuracy=0.75),
        EpochReport(epoch=2, loss=2.0, accuracy=0.75),
    ]
    summary = summarize(reports)
    assert summary["epochs"] == 3
    assert summary["final"] == {"epoch": 2, "loss": 2.0, "accuracy": 0.75}
    assert summary["best_loss"] == {"epoch": 1, "loss": 1.0}
    assert summary["best_accuracy"] == {"epoch": 1, "accuracy": 0.75}
    assert summary["loss_change"] == pytest.approx(-1.0)

    first = write_summary(reports, tmp_path / "s1.json")
    second = write_summary(reports, tmp_path / "s2.json")
    assert Path(first).read_text() == Path(second).read_text()


def test_summary_of_run_without_epochs():
    summary = summarize([])
    assert summary["epochs"] == 0
    assert summary["final"] is None
    assert summary["best_loss"] is None


def test_describe_network_counts_bias_weights():
    description = describe_network(_network())
    assert description["attributes"] == 2
    assert description["hidden"] == 2
    assert description["classes"] == 2
    assert description["weights"] == {"hidden": 6, "output": 6, "total": 12}


def test_plot_adapter_draws_loss_and_accuracy(tmp_path):
    adapter = PlotAdapter(tmp_path, enable_plots=True)
    adapter.on_epoch(0, {"loss": 1.0, "accuracy": 0.5})
    adapter.on_epoch(1, {"loss": 0.5, "accuracy": 1.0})
    out = adapter.close()

    assert out == tmp_path / CURVES_FILENAME
    assert out.exists()
    assert [r.accuracy for r in adapter.reports] == [0.5, 1.0]


def test_plot_adapter_disabled_writes_nothing(tmp_path):
    adapter = PlotAdapter(tmp_path / "off", enable_plots=False)
    adapter.on_epoch(0, {"loss": 1.0, "accuracy": 0.0})
    assert adapter.close() is None
    assert adapter.reports == []
    assert not (tmp_path / "off").exists()
