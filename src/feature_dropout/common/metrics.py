"""
Confusion-matrix derived metrics and fold-level metric containers.

MCC and Geometric Mean are computed by hand from the four class-pair counts
so every fold is scored the same way regardless of the trainer backend.

Degenerate matrices: when a denominator evaluates to zero the metric is
``nan``. It is never clamped and never raised; ``nan`` flows through fold
averaging and rounding unchanged and is written as ``nan`` in the results log.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import numpy as np

METRIC_DECIMALS = 4


@dataclass(frozen=True)
class ConfusionMatrixCounts:
    """Raw counts for a two-class outcome (positive class is label 1)."""

    true_positive: int
    true_negative: int
    false_positive: int
    false_negative: int
    num_classes: int = 2

    def __post_init__(self) -> None:
        for name in ('true_positive', 'true_negative', 'false_positive', 'false_negative'):
            if getattr(self, name) < 0:
                raise ValueError(f'{name} must be non-negative, got {getattr(self, name)}')

    @property
    def is_binary(self) -> bool:
        return self.num_classes == 2

    @classmethod
    def from_matrix(cls, matrix: Any) -> ConfusionMatrixCounts:
        """
        Build counts from an sklearn-layout confusion matrix.

        sklearn orders rows by true label and columns by predicted label, so
        with ``labels=[0, 1]`` the layout is ``[[tn, fp], [fn, tp]]``.
        Anything other than a 2x2 matrix yields zero counts tagged with the
        actual class count, which the metric functions score as ``0.0``.
        """
        arr = np.asarray(matrix)
        if arr.shape != (2, 2):
            n_classes = int(arr.shape[0]) if arr.ndim >= 1 else 0
            return cls(0, 0, 0, 0, num_classes=n_classes)

        return cls(
            true_positive=int(arr[1, 1]),
            true_negative=int(arr[0, 0]),
            false_positive=int(arr[0, 1]),
            false_negative=int(arr[1, 0]),
        )


@dataclass(frozen=True)
class FoldResult:
    """Metrics reported by the trainer for one cross-validation fold."""

    confusion_matrix: ConfusionMatrixCounts
    f1: float
    area_under_pr_curve: float
    positive_precision: float
    positive_recall: float
    negative_precision: float
    negative_recall: float


def _safe_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.nan
    return numerator / denominator


def matthews_correlation(counts: ConfusionMatrixCounts) -> float:
    """
    Matthews Correlation Coefficient.

    mcc = (tp*tn - fp*fn) / sqrt((tp+fp)(tp+fn)(tn+fp)(tn+fn))

    Returns 0.0 for a non two-class matrix and ``nan`` when any bracketed
    sum is zero.
    """
    if not counts.is_binary:
        return 0.0

    tp = counts.true_positive
    tn = counts.true_negative
    fp = counts.false_positive
    fn = counts.false_negative

    numerator = tp * tn - fp * fn
    denominator = math.sqrt(1.0 * (tp + fp) * (tp + fn) * (tn + fp) * (tn + fn))
    return _safe_ratio(numerator, denominator)


def geometric_mean(counts: ConfusionMatrixCounts) -> float:
    """
    Geometric mean of sensitivity and specificity.

    Returns 0.0 for a non two-class matrix and ``nan`` when either
    ratio has a zero denominator.
    """
    if not counts.is_binary:
        return 0.0

    sensitivity = _safe_ratio(counts.true_positive, counts.true_positive + counts.false_negative)
    specificity = _safe_ratio(counts.true_negative, counts.false_positive + counts.true_negative)
    if math.isnan(sensitivity) or math.isnan(specificity):
        return math.nan
    return math.sqrt(sensitivity * specificity)


def mcc_from_counts(tp: int, tn: int, fp: int, fn: int) -> float:
    """MCC from four raw counts."""
    return matthews_correlation(ConfusionMatrixCounts(tp, tn, fp, fn))


def geometric_mean_from_counts(tp: int, tn: int, fp: int, fn: int) -> float:
    """Geometric mean from four raw counts."""
    return geometric_mean(ConfusionMatrixCounts(tp, tn, fp, fn))


def round_metric(value: float, ndigits: int = METRIC_DECIMALS) -> float:
    """
    Round half away from zero to ``ndigits`` decimal places.

    Rounds the shortest decimal representation of the float (``repr``), so
    0.00125 becomes 0.0013 even though its binary value sits just below the
    midpoint. Locale never enters. ``nan`` and infinities are returned as-is.
    """
    value = float(value)
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
