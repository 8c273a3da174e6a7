# services/__init__.py
"""
Service layer
Standards catalogue, raw data loading, inspections and report export
"""

from .standard_service import StandardService
from .raw_data_service import RawDataService
from .inspection_service import InspectionService, generate_inspection_id
from .report_service import ReportService

__all__ = [
    'StandardService',
    'RawDataService',
    'InspectionService',
    'generate_inspection_id',
    'ReportService'
]
