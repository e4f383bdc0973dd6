"""Reports built from the results log."""

from .importance import METRIC_COLUMNS, build_importance_table, export_importance_table

__all__ = ['METRIC_COLUMNS', 'build_importance_table', 'export_importance_table']
