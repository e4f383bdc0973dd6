"""
Fold aggregation.

Reduces the per-fold results of one trial to a single TrialResult:
scalar metrics are summed across folds and divided by the fold count, MCC
and Geometric Mean are computed per fold from the confusion matrix and then
averaged, and every float is rounded with ``round_metric`` (four decimals,
half away from zero).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from ..common.errors import ConfigurationError
from ..common.metrics import FoldResult, geometric_mean, matthews_correlation, round_metric
from .artifacts import TrialResult
from .feature_sets import FeatureSetVariant
from .sampler import HyperparameterSample

ALGORITHM_NAME = 'Gam'


def _fold_mean(folds: Sequence[FoldResult], metric: Callable[[FoldResult], float]) -> float:
    return sum(metric(fold) for fold in folds) / len(folds)


def aggregate_folds(
    folds: Sequence[FoldResult],
    *,
    job_id: str,
    label_column: str,
    variant: FeatureSetVariant,
    hyperparameters: HyperparameterSample,
    elapsed_seconds: float,
    algorithm_name: str = ALGORITHM_NAME,
    timestamp: str | None = None,
) -> TrialResult:
    """
    Average fold metrics into one rounded trial result.

    Args:
        folds: Per-fold results from the trainer
        job_id: Identifier shared by every trial of the run
        label_column: Label the models were trained on
        variant: Feature set used for the trial
        hyperparameters: Sample used for the trial
        elapsed_seconds: Wall-clock time of the cross-validation call
        algorithm_name: Reported trainer name
        timestamp: ISO timestamp (defaults to now, UTC)

    Returns:
        TrialResult with all floats rounded to four decimals

    Raises:
        ConfigurationError: If ``folds`` is empty
    """
    if len(folds) < 1:
        raise ConfigurationError('Cannot aggregate zero folds')

    return TrialResult(
        job_id=job_id,
        timestamp=timestamp or datetime.now(UTC).isoformat(),
        label_column=label_column,
        elapsed_seconds=round_metric(elapsed_seconds),
        feature_set_name=variant.name,
        removed_label=variant.removed_label,
        algorithm_name=algorithm_name,
        seed=hyperparameters.seed,
        iteration_count=hyperparameters.iteration_count,
        max_bin_count_per_feature=hyperparameters.max_bin_count_per_feature,
        learning_rate=round_metric(hyperparameters.learning_rate),
        geometric_mean=round_metric(
            _fold_mean(folds, lambda fold: geometric_mean(fold.confusion_matrix))
        ),
        mcc=round_metric(_fold_mean(folds, lambda fold: matthews_correlation(fold.confusion_matrix))),
        f1=round_metric(_fold_mean(folds, lambda fold: fold.f1)),
        auc_pr=round_metric(_fold_mean(folds, lambda fold: fold.area_under_pr_curve)),
        positive_precision=round_metric(_fold_mean(folds, lambda fold: fold.positive_precision)),
        positive_recall=round_metric(_fold_mean(folds, lambda fold: fold.positive_recall)),
        negative_precision=round_metric(_fold_mean(folds, lambda fold: fold.negative_precision)),
        negative_recall=round_metric(_fold_mean(folds, lambda fold: fold.negative_recall)),
    )
