"""
Generalized additive model trainer.

A histogram gradient-boosted ensemble of single-split trees: each tree
looks at one feature, so the fitted model is a sum of per-feature shape
functions. Cross-validation uses a shuffled StratifiedKFold so both classes
appear in every fold.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd
from sklearn.ensemble import HistGradientBoostingClassifier
from sklearn.metrics import (
    average_precision_score,
    confusion_matrix,
    f1_score,
    precision_score,
    recall_score,
)
from sklearn.model_selection import StratifiedKFold
from sklearn.pipeline import Pipeline

from ..common.metrics import ConfusionMatrixCounts, FoldResult
from ..experiments.aggregate import ALGORITHM_NAME
from ..experiments.sampler import HyperparameterSample
from ..utils import get_logger, json_log

log = get_logger(__name__)

FIXED_PARAMS: dict = {
    'max_leaf_nodes': 2,  # single split per tree keeps the model additive
    'min_samples_leaf': 10,
    'early_stopping': False,
}


def build_pipeline(hyperparameters: HyperparameterSample, random_state: int) -> Pipeline:
    """Build the per-fold GAM pipeline."""
    classifier = HistGradientBoostingClassifier(
        max_iter=hyperparameters.iteration_count,
        learning_rate=hyperparameters.learning_rate,
        max_bins=hyperparameters.max_bin_count_per_feature,
        random_state=random_state,
        **FIXED_PARAMS,
    )
    return Pipeline([('gam', classifier)])


def score_fold(y_true: np.ndarray, y_pred: np.ndarray, p_pos: np.ndarray) -> FoldResult:
    """Score one held-out fold (positive class is 1)."""
    cm = confusion_matrix(y_true, y_pred, labels=[0, 1])
    return FoldResult(
        confusion_matrix=ConfusionMatrixCounts.from_matrix(cm),
        f1=float(f1_score(y_true, y_pred, pos_label=1, zero_division=0.0)),
        area_under_pr_curve=float(average_precision_score(y_true, p_pos)),
        positive_precision=float(precision_score(y_true, y_pred, pos_label=1, zero_division=0.0)),
        positive_recall=float(recall_score(y_true, y_pred, pos_label=1, zero_division=0.0)),
        negative_precision=float(precision_score(y_true, y_pred, pos_label=0, zero_division=0.0)),
        negative_recall=float(recall_score(y_true, y_pred, pos_label=0, zero_division=0.0)),
    )


class GamTrainer:
    """Cross-validating GAM trainer over an in-memory dataset."""

    algorithm_name = ALGORITHM_NAME

    def cross_validate(
        self,
        dataset: pd.DataFrame,
        feature_columns: Sequence[str],
        label_column: str,
        hyperparameters: HyperparameterSample,
        fold_count: int,
        seed: int,
    ) -> list[FoldResult]:
        """
        Train and score one model per stratified fold.

        Args:
            dataset: Loaded dataset with 0/1 label columns
            feature_columns: Columns used as model inputs
            label_column: Binary target column
            hyperparameters: Iteration count, learning rate and bin count
            fold_count: Number of folds
            seed: Seed for fold shuffling and the booster

        Returns:
            One FoldResult per fold, in split order
        """
        X = dataset[list(feature_columns)].to_numpy(dtype=float)
        y = dataset[label_column].to_numpy(dtype=int)

        splitter = StratifiedKFold(n_splits=fold_count, shuffle=True, random_state=seed)

        folds: list[FoldResult] = []
        for fold_index, (train_idx, test_idx) in enumerate(splitter.split(X, y)):
            pipeline = build_pipeline(hyperparameters, random_state=seed)
            pipeline.fit(X[train_idx], y[train_idx])

            proba = pipeline.predict_proba(X[test_idx])
            class_idx = {c: i for i, c in enumerate(pipeline.classes_)}
            p_pos = proba[:, class_idx[1]] if 1 in class_idx else np.zeros(len(test_idx))
            y_pred = pipeline.predict(X[test_idx])

            fold = score_fold(y[test_idx], y_pred, p_pos)
            folds.append(fold)

            log.debug(
                json_log(
                    'trainer.fold_completed',
                    component='models.gam',
                    label_column=label_column,
                    fold=fold_index,
                    f1=fold.f1,
                    auc_pr=fold.area_under_pr_curve,
                )
            )

        return folds
