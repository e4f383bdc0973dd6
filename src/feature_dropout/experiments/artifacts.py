"""Trial result record and its results-log layout."""

from __future__ import annotations

from dataclasses import astuple, dataclass

# Results log columns, in write order.
RESULT_COLUMNS: tuple[str, ...] = (
    'jobId',
    'timestamp',
    'labelColumn',
    'elapsedSeconds',
    'featureSetName',
    'removedColumnLabel',
    'algorithmName',
    'seed',
    'iterationCount',
    'maxBinCountPerFeature',
    'learningRate',
    'geometricMean',
    'mcc',
    'f1',
    'aucPrecisionRecall',
    'positivePrecision',
    'positiveRecall',
    'negativePrecision',
    'negativeRecall',
)


@dataclass(frozen=True)
class TrialResult:
    """Aggregated metrics for one (label, feature set, iteration) trial.

    Field order matches ``RESULT_COLUMNS``. Every float is already rounded
    to four decimal places.
    """

    job_id: str
    timestamp: str
    label_column: str
    elapsed_seconds: float
    feature_set_name: str
    removed_label: str
    algorithm_name: str
    seed: int
    iteration_count: int
    max_bin_count_per_feature: int
    learning_rate: float
    geometric_mean: float
    mcc: float
    f1: float
    auc_pr: float
    positive_precision: float
    positive_recall: float
    negative_precision: float
    negative_recall: float

    def as_row(self) -> tuple:
        """Values in results-log column order."""
        return astuple(self)

    def as_record(self) -> dict[str, object]:
        """Mapping of results-log column name to value."""
        return dict(zip(RESULT_COLUMNS, self.as_row(), strict=True))
