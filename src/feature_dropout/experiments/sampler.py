"""
Per-iteration hyperparameter sampling.

Every sweep iteration seeds its own generator with ``base_seed + iteration_index``
and draws, in this order:

1. iteration count from ``ranges.iteration_count`` (inclusive)
2. a raw integer from ``ranges.learning_rate_raw`` (inclusive), divided by 10000
3. max bin count from ``ranges.max_bin_count_per_feature`` (inclusive)

Changing the draw order or the seed derivation changes every logged sample.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..config.sweep import HyperparameterRanges, IntRange

LEARNING_RATE_SCALE = 10000


@dataclass(frozen=True)
class HyperparameterSample:
    """Hyperparameters shared by all trials of one sweep iteration."""

    iteration_index: int
    seed: int
    iteration_count: int
    learning_rate: float
    max_bin_count_per_feature: int


def _draw(rng: np.random.Generator, bounds: IntRange) -> int:
    return int(rng.integers(bounds.low, bounds.high, endpoint=True))


def sample_hyperparameters(
    base_seed: int,
    iteration_index: int,
    ranges: HyperparameterRanges | None = None,
) -> HyperparameterSample:
    """Draw the hyperparameters for one iteration."""
    ranges = ranges or HyperparameterRanges()
    ranges.validate()

    seed = base_seed + iteration_index
    rng = np.random.default_rng(seed)

    iteration_count = _draw(rng, ranges.iteration_count)
    learning_rate = _draw(rng, ranges.learning_rate_raw) / LEARNING_RATE_SCALE
    max_bin_count = _draw(rng, ranges.max_bin_count_per_feature)

    return HyperparameterSample(
        iteration_index=iteration_index,
        seed=seed,
        iteration_count=iteration_count,
        learning_rate=learning_rate,
        max_bin_count_per_feature=max_bin_count,
    )


def sample_sweep(
    base_seed: int,
    iterations: int,
    ranges: HyperparameterRanges | None = None,
) -> list[HyperparameterSample]:
    """Samples for iteration indices ``0 .. iterations - 1``."""
    return [sample_hyperparameters(base_seed, index, ranges) for index in range(iterations)]
