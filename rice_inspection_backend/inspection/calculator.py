# inspection/calculator.py
"""
Composition and defect calculation for a batch of rice grains

Composition: weight share of grains matching each standard category
(length bounds AND allowed shape). Categories may overlap, so
composition rows can sum to more than 100%.

Defects: weight share of each defect grain type, independent of the
standard, plus an aggregate "total" row.

All functions here are pure: no I/O, no shared state, inputs untouched.
"""

import math
from decimal import Decimal, ROUND_HALF_UP

from config.constants import DEFECT_TYPES, PERCENT_DECIMALS, TOTAL_DEFECT_LABEL
from .models import (
    CalculationResult,
    CompositionResult,
    DefectResult,
    format_length_bound,
    format_length_range,
)

_PERCENT_QUANTUM = Decimal(1).scaleb(-PERCENT_DECIMALS)


def total_weight(grains):
    """Sum of grain weights, 0 for an empty batch"""
    return sum((grain.weight for grain in grains), 0)


def percentage_of(part, total):
    """
    Weight percentage with the empty-denominator policy

    Returns 0 when total is not positive, never raises.
    """
    if total > 0:
        return part / total * 100
    return 0


def format_percentage(value):
    """
    Format a percentage for reports

    Ties round away from zero on the exact binary value of the float.

    Example:
        >>> format_percentage(66.6666)
        '66.67%'
        >>> format_percentage(0.125)
        '0.13%'
    """
    if not math.isfinite(value):
        return f"{format_length_bound(value)}%"
    rounded = Decimal(value or 0).quantize(_PERCENT_QUANTUM, rounding=ROUND_HALF_UP)
    return f"{rounded}%"


def matches_length(length, category):
    """Both bound checks pass; an unconstrained bound always passes"""
    min_ok = category.condition_min.check(length, category.min_length)
    max_ok = category.condition_max.check(length, category.max_length)
    return min_ok and max_ok


def matches_category(grain, category):
    """Grain belongs to category iff length AND shape match"""
    return matches_length(grain.length, category) and grain.shape in category.shape


def compute_composition(grains, standard):
    """
    Weight-percentage composition per standard category

    Args:
        grains: Sequence of RiceGrain
        standard: Standard whose categories are evaluated in order

    Returns:
        list: CompositionResult per category, in the standard's order

    Example:
        A batch of 10 (whole, 5mm) + 5 (broken, 1mm) against a single
        "Whole" category GE 5 / LE 7 wholegrain gives "66.67%".
    """
    batch_weight = total_weight(grains)
    composition = []

    for category in standard.categories:
        category_weight = sum(
            (grain.weight for grain in grains if matches_category(grain, category)),
            0
        )
        percentage = percentage_of(category_weight, batch_weight)

        composition.append(CompositionResult(
            name=category.name,
            length=format_length_range(category),
            actual=format_percentage(percentage)
        ))

    return composition


def defect_weights(grains):
    """
    Weight per defect type in DEFECT_TYPES order

    Grains of the baseline type, or of a type outside the vocabulary,
    are ignored.
    """
    weights = {defect_type: 0 for defect_type in DEFECT_TYPES}
    for grain in grains:
        if grain.type in weights:
            weights[grain.type] += grain.weight
    return weights


def compute_defects(grains):
    """
    Weight-percentage defect summary

    Args:
        grains: Sequence of RiceGrain

    Returns:
        list: DefectResult per defect type, followed by the "total" row
    """
    batch_weight = total_weight(grains)
    weights = defect_weights(grains)

    defects = [
        DefectResult(
            name=defect_type,
            actual=format_percentage(percentage_of(weights[defect_type], batch_weight))
        )
        for defect_type in DEFECT_TYPES
    ]

    # From raw weights, not from the rounded rows above
    defect_total = sum(weights.values(), 0)
    defects.append(DefectResult(
        name=TOTAL_DEFECT_LABEL,
        actual=format_percentage(percentage_of(defect_total, batch_weight))
    ))

    return defects


def calculate_inspection_results(batch, standard):
    """
    Run composition and defect calculation for one batch

    Args:
        batch: Batch of grains (image and request id are passed through)
        standard: Standard to grade against

    Returns:
        CalculationResult
    """
    grains = batch.grains
    return CalculationResult(
        composition=compute_composition(grains, standard),
        defects=compute_defects(grains),
        total_sample=len(grains),
        image_url=batch.image_url
    )
