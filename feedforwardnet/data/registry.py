"""Dataset registry."""

from __future__ import annotations

from typing import Any, Callable, Iterable, MutableMapping

from ..core.types import Dataset

DatasetFactory = Callable[..., Dataset]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: DatasetFactory | None = None,
) -> Callable[[DatasetFactory], DatasetFactory] | DatasetFactory:
    """Register a dataset factory.

    ``register_dataset`` can be used both as a decorator::

        @register_dataset("iris")
        def make_iris(**kwargs):
            ...

    or directly::

        register_dataset("iris", make_iris)
    """

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_dataset requires a name when used without a decorator")
    return _decorator


def get(name: str, **options: Any) -> Dataset:
    """Build the dataset registered under ``name`` with ``options``."""

    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY))
        raise KeyError(f"Unknown dataset {name!r}. Available datasets: {available}")
    dataset = _REGISTRY[name](**options)
    if not dataset.instances:
        raise ValueError(f"Dataset {name!r} produced no instances")
    return dataset


def names() -> Iterable[str]:
    return sorted(_REGISTRY)


__all__ = ["DatasetFactory", "get", "names", "register_dataset"]
