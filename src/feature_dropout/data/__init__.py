"""Dataset helpers for feature_dropout."""

from .dataset import coerce_binary_label, load_dataset

__all__ = ['coerce_binary_label', 'load_dataset']
