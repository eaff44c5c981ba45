"""Dataset registry and built-in loaders."""

from . import loaders  # noqa: F401  (registers the built-in datasets)
from . import registry
from .utils import instances_from_arrays, one_hot

__all__ = ["instances_from_arrays", "loaders", "one_hot", "registry"]
