# api/routes/__init__.py
"""
API routes module
Individual blueprint imports
"""

from .health import health_bp
from .standards import standards_bp
from .inspections import inspections_bp

__all__ = [
    'health_bp',
    'standards_bp',
    'inspections_bp'
]
