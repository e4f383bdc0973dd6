"""Input/output helpers."""

from .results import CsvResultsSink, read_results

__all__ = ['CsvResultsSink', 'read_results']
