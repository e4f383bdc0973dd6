"""Protocols for the sweep's external collaborators."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

import pandas as pd

from .metrics import FoldResult

if TYPE_CHECKING:
    from ..experiments.artifacts import TrialResult
    from ..experiments.sampler import HyperparameterSample


class TrainerProtocol(Protocol):
    """Cross-validating trainer used by the sweep.

    Implementations block until every fold has been trained and scored and
    return exactly ``fold_count`` results, in fold order.
    """

    algorithm_name: str

    def cross_validate(
        self,
        dataset: pd.DataFrame,
        feature_columns: Sequence[str],
        label_column: str,
        hyperparameters: HyperparameterSample,
        fold_count: int,
        seed: int,
    ) -> list[FoldResult]:
        """Train and score one model per fold."""
        ...


class ResultsSinkProtocol(Protocol):
    """Append-only destination for trial results."""

    def ensure_header(self) -> None:
        """Write the header once if the destination has no content."""
        ...

    def append(self, result: TrialResult) -> None:
        """Persist one trial result after all previously appended ones."""
        ...
