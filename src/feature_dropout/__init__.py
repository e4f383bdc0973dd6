"""Column-dropout feature importance sweeps for binary classifiers."""

__version__ = '0.1.0'
