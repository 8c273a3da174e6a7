# api/__init__.py
"""
API module for Flask routes
Handles HTTP endpoints and request/response processing
"""

from .context import init_services, get_services
from .routes import (
    health_bp,
    standards_bp,
    inspections_bp
)

__all__ = [
    'init_services',
    'get_services',
    'health_bp',
    'standards_bp',
    'inspections_bp'
]
