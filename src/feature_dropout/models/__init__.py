"""Trainer implementations for feature_dropout.

- gam: Boosted single-split trees (generalized additive model)
"""

from .gam import GamTrainer

__all__ = ['GamTrainer']
