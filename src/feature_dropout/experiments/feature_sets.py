"""
Feature-set variant generation.

Variants are emitted in a fixed order (baseline first, then drops in the
order configured) because that order becomes the row order of the results
log. Dropping never reorders the remaining columns.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..common.errors import ConfigurationError
from ..config.sweep import DropPlan, NamedRemoval

BASELINE_NAME = 'Baseline'
REMOVED_LABEL_SEPARATOR = '|'


@dataclass(frozen=True)
class FeatureSetVariant:
    """One candidate subset of feature columns."""

    name: str
    included_columns: tuple[str, ...]
    removed_label: str = ''

    @property
    def is_baseline(self) -> bool:
        return self.removed_label == ''


def _drop_columns(
    feature_columns: tuple[str, ...],
    removal: NamedRemoval,
) -> FeatureSetVariant:
    if not removal.columns:
        raise ConfigurationError(f"Removal '{removal.name}' names no columns")
    unknown = [column for column in removal.columns if column not in feature_columns]
    if unknown:
        raise ConfigurationError(f"Removal '{removal.name}' names unknown columns: {unknown}")

    removed = set(removal.columns)
    included = tuple(column for column in feature_columns if column not in removed)
    if not included:
        raise ConfigurationError(f"Removal '{removal.name}' would leave no feature columns")

    return FeatureSetVariant(
        name=removal.name,
        included_columns=included,
        removed_label=REMOVED_LABEL_SEPARATOR.join(removal.columns),
    )


def generate_feature_sets(
    feature_columns: Sequence[str],
    drops: DropPlan | None = None,
    include_baseline: bool = True,
) -> list[FeatureSetVariant]:
    """
    Build the ordered list of feature-set variants to evaluate.

    Args:
        feature_columns: Full ordered list of feature column names
        drops: Drop plan (defaults to dropping each column individually)
        include_baseline: Emit the all-columns variant first

    Returns:
        Variants in emission order

    Raises:
        ConfigurationError: If the feature list is empty or has duplicates,
            a removal names an unknown column or would empty the set, or
            the plan yields no variants
    """
    columns = tuple(feature_columns)
    if not columns:
        raise ConfigurationError('Feature column list is empty')
    if len(set(columns)) != len(columns):
        raise ConfigurationError(f'Feature column list has duplicates: {list(columns)}')

    plan = drops or DropPlan()

    variants: list[FeatureSetVariant] = []
    if include_baseline:
        variants.append(FeatureSetVariant(name=BASELINE_NAME, included_columns=columns))

    if plan.mode == 'each':
        removals = [NamedRemoval(name=f'Removed: {column}', columns=(column,)) for column in columns]
    else:
        removals = list(plan.removals)

    for removal in removals:
        variants.append(_drop_columns(columns, removal))

    if not variants:
        raise ConfigurationError('Drop plan produced no feature-set variants')

    return variants
