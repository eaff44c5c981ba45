"""Activation utilities for FeedForwardNet."""

from __future__ import annotations

import numpy as np


def sigmoid(z: float) -> float:
    """Return the logistic sigmoid ``1 / (1 + e^-z)``."""

    return float(1.0 / (1.0 + np.exp(-np.float64(z))))


def sigmoid_deriv_from_output(a: float) -> float:
    """Derivative of the sigmoid expressed through its output ``a``."""

    return a * (1.0 - a)


def exp(z: float) -> float:
    """Unnormalised softmax numerator.

    Large logits overflow to ``inf`` instead of raising.
    """

    return float(np.exp(np.float64(z)))
