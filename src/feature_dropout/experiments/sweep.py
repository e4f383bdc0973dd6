"""
Feature dropout sweep orchestrator.

Runs every (label, feature set, iteration) trial in a fixed order:
label columns in configured order, then feature-set variants in generation
order, then sweep iterations. Each trial is cross-validated, aggregated and
appended to the results sink before the next one starts. The first failing
trial aborts the sweep; rows already appended stay in the log.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

import pandas as pd

from ..common.errors import ExternalTrainingError, FeatureDropoutError
from ..common.protocols import ResultsSinkProtocol, TrainerProtocol
from ..config.sweep import SweepConfig
from ..utils import get_logger, json_log
from .aggregate import ALGORITHM_NAME, aggregate_folds
from .artifacts import TrialResult
from .feature_sets import FeatureSetVariant, generate_feature_sets
from .sampler import HyperparameterSample, sample_sweep

log = get_logger(__name__)


@dataclass(frozen=True)
class TrialSpec:
    """One trial to run."""

    label_column: str
    variant: FeatureSetVariant
    hyperparameters: HyperparameterSample


@dataclass
class SweepResult:
    """Trial results of one sweep run, in issue order."""

    job_id: str
    results: list[TrialResult] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.results)


def iter_trials(
    label_columns: Sequence[str],
    variants: Sequence[FeatureSetVariant],
    samples: Sequence[HyperparameterSample],
) -> Iterator[TrialSpec]:
    """Yield trials label-major, then by feature set, then by iteration."""
    for label_column in label_columns:
        for variant in variants:
            for sample in samples:
                yield TrialSpec(label_column=label_column, variant=variant, hyperparameters=sample)


def run_trial(
    trial: TrialSpec,
    *,
    dataset: pd.DataFrame,
    trainer: TrainerProtocol,
    fold_count: int,
    job_id: str,
) -> TrialResult:
    """
    Cross-validate one trial and aggregate its folds.

    The trainer is seeded with the iteration seed, the same value logged in
    the row's ``seed`` column.

    Raises:
        ExternalTrainingError: If the trainer fails or returns the wrong
            number of folds
    """
    start_time = time.perf_counter()
    try:
        folds = trainer.cross_validate(
            dataset,
            trial.variant.included_columns,
            trial.label_column,
            trial.hyperparameters,
            fold_count,
            trial.hyperparameters.seed,
        )
    except FeatureDropoutError:
        raise
    except Exception as e:
        raise ExternalTrainingError(
            f'Training failed for {trial.label_column} | {trial.variant.name} '
            f'(iteration {trial.hyperparameters.iteration_index}): {e}'
        ) from e
    elapsed = time.perf_counter() - start_time

    if len(folds) != fold_count:
        raise ExternalTrainingError(
            f'Trainer returned {len(folds)} folds, expected {fold_count}'
        )

    return aggregate_folds(
        folds,
        job_id=job_id,
        label_column=trial.label_column,
        variant=trial.variant,
        hyperparameters=trial.hyperparameters,
        elapsed_seconds=elapsed,
        algorithm_name=getattr(trainer, 'algorithm_name', ALGORITHM_NAME),
    )


def run_sweep(
    config: SweepConfig,
    dataset: pd.DataFrame,
    trainer: TrainerProtocol,
    sink: ResultsSinkProtocol,
    job_id: str | None = None,
) -> SweepResult:
    """
    Run the full feature dropout sweep.

    Args:
        config: Validated sweep configuration
        dataset: Loaded dataset shared by every trial
        trainer: Cross-validating trainer
        sink: Destination for result rows
        job_id: Run identifier (defaults to a new UUID4)

    Returns:
        SweepResult with one TrialResult per trial, in write order

    Raises:
        ConfigurationError: Before any trial runs, for invalid configuration
        ExternalTrainingError: When a trial's training fails
        OSError: When the sink cannot be written
    """
    config.validate()
    job_id = job_id or str(uuid.uuid4())
    settings = config.sweep

    variants = generate_feature_sets(
        config.columns.features,
        drops=settings.drops,
        include_baseline=settings.include_baseline,
    )
    samples = sample_sweep(settings.seed, settings.iterations, config.hyperparameters)
    total = len(config.columns.labels) * len(variants) * len(samples)

    log.info(
        json_log(
            'sweep.start',
            component='experiments',
            job_id=job_id,
            labels=list(config.columns.labels),
            n_feature_sets=len(variants),
            iterations=len(samples),
            folds=settings.folds,
            total_trials=total,
        )
    )
    log.debug(
        json_log(
            'sweep.feature_sets',
            component='experiments',
            feature_sets=[variant.name for variant in variants],
        )
    )

    sink.ensure_header()

    sweep_result = SweepResult(job_id=job_id)
    for i, trial in enumerate(iter_trials(config.columns.labels, variants, samples)):
        log.info(
            json_log(
                'trial.start',
                component='experiments',
                trial_number=i + 1,
                total=total,
                label_column=trial.label_column,
                feature_set=trial.variant.name,
                iteration=trial.hyperparameters.iteration_index,
            )
        )
        result = run_trial(
            trial,
            dataset=dataset,
            trainer=trainer,
            fold_count=settings.folds,
            job_id=job_id,
        )
        sink.append(result)
        sweep_result.results.append(result)

        log.info(
            json_log(
                'trial.completed',
                component='experiments',
                label_column=result.label_column,
                feature_set=result.feature_set_name,
                mcc=result.mcc,
                geometric_mean=result.geometric_mean,
                f1=result.f1,
                auc_pr=result.auc_pr,
                positive_precision=result.positive_precision,
                positive_recall=result.positive_recall,
                build_time_seconds=result.elapsed_seconds,
            )
        )

    log.info(
        json_log(
            'sweep.completed',
            component='experiments',
            job_id=job_id,
            trials=len(sweep_result),
        )
    )
    return sweep_result
