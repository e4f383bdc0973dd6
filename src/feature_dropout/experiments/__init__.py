"""
Experiment sweep engine for column-dropout feature importance.

Modules:
- feature_sets: Feature-set variant generation
- sampler: Seeded per-iteration hyperparameter sampling
- aggregate: Fold aggregation and rounding
- artifacts: Trial result record and results-log columns
- sweep: Sweep orchestration
"""

from .aggregate import ALGORITHM_NAME, aggregate_folds
from .artifacts import RESULT_COLUMNS, TrialResult
from .feature_sets import BASELINE_NAME, FeatureSetVariant, generate_feature_sets
from .sampler import HyperparameterSample, sample_hyperparameters, sample_sweep
from .sweep import SweepResult, TrialSpec, iter_trials, run_sweep, run_trial

__all__ = [
    # Feature sets
    'BASELINE_NAME',
    'FeatureSetVariant',
    'generate_feature_sets',
    # Sampling
    'HyperparameterSample',
    'sample_hyperparameters',
    'sample_sweep',
    # Aggregation
    'ALGORITHM_NAME',
    'aggregate_folds',
    # Artifacts
    'RESULT_COLUMNS',
    'TrialResult',
    # Sweep
    'TrialSpec',
    'SweepResult',
    'iter_trials',
    'run_trial',
    'run_sweep',
]
