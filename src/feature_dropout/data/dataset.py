"""Loading the batting statistics dataset used by every trial."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..common.errors import ConfigurationError
from ..utils import get_logger, json_log

log = get_logger(__name__)

_TRUE_TOKENS = frozenset({'true', '1', 'yes', 't', 'y'})
_FALSE_TOKENS = frozenset({'false', '0', 'no', 'f', 'n', ''})


def coerce_binary_label(series: pd.Series) -> pd.Series:
    """Map a boolean-like label column to 0/1 integers."""
    if pd.api.types.is_bool_dtype(series):
        return series.astype(int)
    if pd.api.types.is_numeric_dtype(series):
        values = set(series.dropna().unique().tolist())
        if not values <= {0, 1}:
            raise ConfigurationError(
                f"Label column '{series.name}' is not binary: {sorted(values)[:5]}"
            )
        return series.fillna(0).astype(int)

    tokens = series.fillna('').astype(str).str.strip().str.lower()
    unknown = set(tokens.unique()) - _TRUE_TOKENS - _FALSE_TOKENS
    if unknown:
        raise ConfigurationError(
            f"Label column '{series.name}' has non-boolean values: {sorted(unknown)[:5]}"
        )
    return tokens.isin(_TRUE_TOKENS).astype(int)


def load_dataset(
    path: str | Path,
    feature_columns: Sequence[str],
    label_columns: Sequence[str],
) -> pd.DataFrame:
    """
    Read the input CSV and keep only the configured columns.

    Feature columns are cast to float and label columns to 0/1 integers.
    The returned frame is loaded once and shared by every trial of a sweep.

    Args:
        path: CSV file with a header row
        feature_columns: Ordered feature column names
        label_columns: Ordered binary label column names

    Returns:
        DataFrame with features followed by labels

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If configured columns are missing, a feature
            column is not numeric or a label column is not binary
    """
    data_path = Path(path)
    if not data_path.exists():
        raise FileNotFoundError(f'Dataset not found: {data_path}')

    df = pd.read_csv(data_path)

    wanted = list(feature_columns) + list(label_columns)
    missing = [column for column in wanted if column not in df.columns]
    if missing:
        raise ConfigurationError(f'Missing required columns: {missing}')

    df = df[wanted].copy()
    for column in feature_columns:
        try:
            df[column] = df[column].astype(float)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Feature column '{column}' is not numeric: {e}") from e
    for label in label_columns:
        df[label] = coerce_binary_label(df[label])

    log.info(
        json_log(
            'dataset.loaded',
            component='data.dataset',
            path=str(data_path),
            rows=int(len(df)),
            features=len(feature_columns),
            labels=list(label_columns),
            positives={label: int(df[label].sum()) for label in label_columns},
        )
    )
    return df
