"""Append-only CSV results log."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..experiments.artifacts import RESULT_COLUMNS, TrialResult
from ..utils import get_logger, json_log

log = get_logger(__name__)


class CsvResultsSink:
    """
    Comma-delimited results log shared across runs.

    The file only grows: the header is written once, when the file has no
    content, and each ``append`` adds one row at the end. Existing rows are
    never rewritten or deduplicated. The file is opened and closed per row.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def ensure_header(self) -> None:
        """Create the log if missing and write the header if it is empty."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)
        if self.path.stat().st_size > 0:
            return

        with self.path.open('a', encoding='utf-8', newline='') as fh:
            pd.DataFrame(columns=list(RESULT_COLUMNS)).to_csv(fh, index=False)

        log.info(json_log('results.header_written', component='io.results', path=str(self.path)))

    def append(self, result: TrialResult) -> None:
        """Write one result row after the existing content."""
        frame = pd.DataFrame([result.as_row()], columns=list(RESULT_COLUMNS))
        with self.path.open('a', encoding='utf-8', newline='') as fh:
            frame.to_csv(fh, header=False, index=False, float_format='%.4f', na_rep='nan')


def read_results(path: str | Path) -> pd.DataFrame:
    """Read a results log written by CsvResultsSink."""
    results_path = Path(path)
    if not results_path.exists():
        raise FileNotFoundError(f'Results log not found: {results_path}')
    return pd.read_csv(
        results_path,
        dtype={'removedColumnLabel': str},
        keep_default_na=False,
        na_values=['nan'],
    )
