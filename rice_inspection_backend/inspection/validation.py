# inspection/validation.py
"""
Optional strict checks for batches and standards

The calculator accepts anything structurally valid and lets odd values
flow through the arithmetic. These checks are applied by the inspection
service only when Config.STRICT_VALIDATION is enabled.
"""

import math
import logging

from config.constants import (
    GRAIN_SHAPES,
    GRAIN_TYPES,
    MIN_CONDITION_TAGS,
    MAX_CONDITION_TAGS,
)
from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)


def _is_real(value):
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def validate_batch(batch):
    """
    Collect problems in a batch

    Args:
        batch: Batch to check

    Returns:
        list: Problem descriptions, empty when the batch is clean
    """
    problems = []

    for idx, grain in enumerate(batch.grains):
        if not _is_real(grain.length) or grain.length <= 0:
            problems.append(f"grain {idx}: length must be a positive number, got {grain.length!r}")
        if not _is_real(grain.weight) or grain.weight <= 0:
            problems.append(f"grain {idx}: weight must be a positive number, got {grain.weight!r}")
        if grain.shape not in GRAIN_SHAPES:
            problems.append(f"grain {idx}: unknown shape {grain.shape!r}")
        if grain.type not in GRAIN_TYPES:
            problems.append(f"grain {idx}: unknown type {grain.type!r}")

    return problems


def validate_standard(standard):
    """
    Collect problems in a standard's categories

    Returns:
        list: Problem descriptions, empty when the standard is clean
    """
    problems = []

    for category in standard.categories:
        label = f"category {category.name!r}"

        for bound_name, bound in (('minLength', category.min_length),
                                  ('maxLength', category.max_length)):
            if not _is_real(bound) or bound < 0:
                problems.append(f"{label}: {bound_name} must be a non-negative number, got {bound!r}")

        if (_is_real(category.min_length) and _is_real(category.max_length)
                and category.min_length > category.max_length):
            problems.append(
                f"{label}: minLength {category.min_length} exceeds maxLength {category.max_length}"
            )

        if category.raw_condition_min not in MIN_CONDITION_TAGS:
            problems.append(f"{label}: unrecognized conditionMin {category.raw_condition_min!r}")
        if category.raw_condition_max not in MAX_CONDITION_TAGS:
            problems.append(f"{label}: unrecognized conditionMax {category.raw_condition_max!r}")

        for shape in category.shape:
            if shape not in GRAIN_SHAPES:
                problems.append(f"{label}: unknown shape {shape!r}")

    return problems


def ensure_valid(batch, standard):
    """
    Raise InvalidInputError when the batch or the standard has problems
    """
    problems = validate_batch(batch) + validate_standard(standard)
    if problems:
        logger.warning(f"Strict validation rejected input: {len(problems)} problem(s)")
        raise InvalidInputError("Invalid inspection input", problems)
