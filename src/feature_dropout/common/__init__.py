"""Common building blocks shared across the sweep."""

from .errors import ConfigurationError, ExternalTrainingError, FeatureDropoutError
from .metrics import (
    METRIC_DECIMALS,
    ConfusionMatrixCounts,
    FoldResult,
    geometric_mean,
    geometric_mean_from_counts,
    matthews_correlation,
    mcc_from_counts,
    round_metric,
)
from .protocols import ResultsSinkProtocol, TrainerProtocol

__all__ = [
    # Errors
    'FeatureDropoutError',
    'ConfigurationError',
    'ExternalTrainingError',
    # Metrics
    'METRIC_DECIMALS',
    'ConfusionMatrixCounts',
    'FoldResult',
    'matthews_correlation',
    'geometric_mean',
    'mcc_from_counts',
    'geometric_mean_from_counts',
    'round_metric',
    # Protocols
    'TrainerProtocol',
    'ResultsSinkProtocol',
]
