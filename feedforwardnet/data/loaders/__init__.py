"""Built-in dataset loaders; importing this package registers them."""

from . import csv_generic, iris, synthetic  # noqa: F401

__all__ = ["csv_generic", "iris", "synthetic"]
