# storage/__init__.py
"""
Storage module
Local JSON/Excel files and the inspection repository
"""

from .local_storage import (
    ensure_directories,
    save_json,
    load_json,
    save_excel,
    delete_file,
    list_files
)
from .repository import InspectionRepository, JsonInspectionRepository

__all__ = [
    'ensure_directories',
    'save_json',
    'load_json',
    'save_excel',
    'delete_file',
    'list_files',
    'InspectionRepository',
    'JsonInspectionRepository'
]
