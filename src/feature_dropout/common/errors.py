"""Exception hierarchy for sweep runs."""

from __future__ import annotations


class FeatureDropoutError(Exception):
    """Base class for errors raised by feature_dropout."""


class ConfigurationError(FeatureDropoutError, ValueError):
    """Static configuration cannot produce a valid sweep.

    Raised before any trial runs: empty feature or label lists, a drop that
    would leave no feature columns, a non-positive fold count, invalid
    hyperparameter ranges or dataset columns missing from the input file.
    """


class ExternalTrainingError(FeatureDropoutError, RuntimeError):
    """The trainer failed while cross-validating a trial. Aborts the sweep."""
