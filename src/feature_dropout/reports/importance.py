"""
Column importance table built from the results log.

For one job, each feature-set variant's metric (averaged over sweep
iterations) is compared with the baseline of the same label. A negative
delta means the model got worse without those columns.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..experiments.feature_sets import BASELINE_NAME
from ..utils import get_logger, json_log

log = get_logger(__name__)

METRIC_COLUMNS: dict[str, str] = {
    'mcc': 'mcc',
    'geometric_mean': 'geometricMean',
    'f1': 'f1',
    'auc_pr': 'aucPrecisionRecall',
    'positive_precision': 'positivePrecision',
    'positive_recall': 'positiveRecall',
    'negative_precision': 'negativePrecision',
    'negative_recall': 'negativeRecall',
}


def build_importance_table(
    results: pd.DataFrame,
    job_id: str | None = None,
    metric: str = 'mcc',
) -> pd.DataFrame:
    """
    Compare every variant with its label's baseline.

    Args:
        results: Results log as read by ``read_results``
        job_id: Job to report on (defaults to the job of the last row)
        metric: Key of METRIC_COLUMNS to compare

    Returns:
        DataFrame with labelColumn, featureSetName, removedColumnLabel,
        value, baseline and delta; sorted by label then ascending delta

    Raises:
        ValueError: For an unknown metric, an empty log, an unknown job or
            a label without a baseline row
    """
    if metric not in METRIC_COLUMNS:
        raise ValueError(f'Unknown metric {metric!r}. Valid metrics: {list(METRIC_COLUMNS)}')
    if results.empty:
        raise ValueError('Results log has no rows')

    column = METRIC_COLUMNS[metric]
    job_id = job_id or str(results['jobId'].iloc[-1])
    job_rows = results[results['jobId'] == job_id]
    if job_rows.empty:
        raise ValueError(f"Job '{job_id}' not found in results log")

    grouped = (
        job_rows.groupby(
            ['labelColumn', 'featureSetName', 'removedColumnLabel'],
            sort=False,
            dropna=False,
        )[column]
        .mean()
        .reset_index()
        .rename(columns={column: 'value'})
    )

    baselines = grouped[grouped['featureSetName'] == BASELINE_NAME].set_index('labelColumn')['value']
    missing = sorted(set(grouped['labelColumn']) - set(baselines.index))
    if missing:
        raise ValueError(f'No {BASELINE_NAME} rows for labels: {missing}')

    table = grouped[grouped['featureSetName'] != BASELINE_NAME].copy()
    table['baseline'] = table['labelColumn'].map(baselines)
    table['delta'] = (table['value'] - table['baseline']).round(4)

    table = table.sort_values(by=['labelColumn', 'delta'], ascending=[True, True], kind='stable')

    log.info(
        json_log(
            'importance.table_built',
            component='reports',
            job_id=job_id,
            metric=metric,
            n_rows=len(table),
        )
    )
    return table.reset_index(drop=True)


def export_importance_table(table: pd.DataFrame, output_path: str | Path) -> Path:
    """Write the importance table to CSV."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    table.to_csv(path, index=False)
    log.info(json_log('importance.exported', component='reports', path=str(path)))
    return path
