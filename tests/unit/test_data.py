import numpy as np
import pytest

from feedforwardnet.core.types import Instance
from feedforwardnet.data import registry
from feedforwardnet.data.utils import instances_from_arrays, one_hot


def test_instances_from_arrays_one_hot_encodes_labels():
    instances = instances_from_arrays(np.array([[1.0, 2.0], [3.0, 4.0]]), [2, 0], 3)
    assert instances[0] == Instance(attributes=(1.0, 2.0), class_values=(0, 0, 1))
    assert instances[1].class_values == (1, 0, 0)
    assert instances[1].label == 0


def test_one_hot_rejects_out_of_range_labels():
    with pytest.raises(ValueError):
        one_hot(np.array([0, 3]), 3)


def test_instances_are_immutable():
    instance = Instance(attributes=[1, 2], class_values=[0, 1])
    assert instance.attributes == (1.0, 2.0)
    with pytest.raises(AttributeError):
        instance.attributes = (0.0,)  # type: ignore[misc]


def test_blobs_are_balanced_and_deterministic():
    first = registry.get("blobs", n_points=30, num_classes=3, d_in=4, seed=2)
    second = registry.get("blobs", n_points=30, num_classes=3, d_in=4, seed=2)
    assert first.instances == second.instances
    assert first.num_attributes == 4
    assert first.num_classes == 3
    counts = np.bincount([inst.label for inst in first.instances], minlength=3)
    assert counts.tolist() == [10, 10, 10]


def test_xor_corners():
    dataset = registry.get("xor", repeats=2)
    assert len(dataset.instances) == 8
    labels = [inst.label for inst in dataset.instances[:4]]
    assert labels == [0, 1, 1, 0]


def test_iris_is_loaded_from_sklearn():
    dataset = registry.get("iris")
    assert len(dataset.instances) == 150
    assert dataset.num_attributes == 4
    assert dataset.num_classes == 3
    column = np.array([inst.attributes[0] for inst in dataset.instances])
    assert abs(column.mean()) < 1e-9


def test_csv_loader_encodes_string_targets(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a,b,species\n1,2,cat\n3,4,dog\n5,6,cat\n7,8,bird\n")
    dataset = registry.get("csv", csv_path=path, target_col="species", standardize_inputs=False)
    assert dataset.provenance["classes"] == ["bird", "cat", "dog"]
    assert dataset.instances[0] == Instance(attributes=(1.0, 2.0), class_values=(0, 1, 0))
    assert dataset.instances[3].label == 0


def test_csv_loader_requires_target_column(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a,b\n1,2\n")
    with pytest.raises(KeyError):
        registry.get("csv", csv_path=path, target_col="label")


def test_unknown_dataset():
    with pytest.raises(KeyError):
        registry.get("does-not-exist")
