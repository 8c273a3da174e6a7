# inspection/__init__.py
"""
Inspection core
Grain classification against a standard and weight-percentage aggregation
"""

from .calculator import (
    compute_composition,
    compute_defects,
    calculate_inspection_results,
    format_percentage,
    matches_category,
    matches_length,
)
from .models import (
    RiceGrain,
    Batch,
    StandardCategory,
    Standard,
    MinCondition,
    MaxCondition,
    CompositionResult,
    DefectResult,
    CalculationResult,
    InspectionResult,
)
from .exceptions import (
    InspectionError,
    InvalidInputError,
    StandardNotFoundError,
    InspectionNotFoundError,
    DataLoadError,
)

__all__ = [
    'compute_composition',
    'compute_defects',
    'calculate_inspection_results',
    'format_percentage',
    'matches_category',
    'matches_length',
    'RiceGrain',
    'Batch',
    'StandardCategory',
    'Standard',
    'MinCondition',
    'MaxCondition',
    'CompositionResult',
    'DefectResult',
    'CalculationResult',
    'InspectionResult',
    'InspectionError',
    'InvalidInputError',
    'StandardNotFoundError',
    'InspectionNotFoundError',
    'DataLoadError',
]
