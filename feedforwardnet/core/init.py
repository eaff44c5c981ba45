"""Initial weight generation."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .types import Array


def initial_weights(
    rng: np.random.Generator,
    d_in: int,
    hidden: int,
    d_out: int,
    scale: float = 0.05,
) -> Tuple[Array, Array]:
    """Return ``(hidden_weights, output_weights)`` for a :class:`Network`.

    Shapes are ``(hidden, d_in + 1)`` and ``(d_out, hidden + 1)``; the
    extra column holds the bias weight.
    """

    hidden_weights = rng.standard_normal((hidden, d_in + 1)) * scale
    output_weights = rng.standard_normal((d_out, hidden + 1)) * scale
    return hidden_weights.astype(np.float64), output_weights.astype(np.float64)
