# storage/repository.py
"""
Inspection repository
Save, fetch, list and delete persisted inspection results
"""

import os
import re
import logging
from abc import ABC, abstractmethod

from inspection.models import InspectionResult
from .local_storage import save_json, load_json, delete_file, list_files, ensure_directories

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r'^[A-Za-z0-9_-]+$')


class InspectionRepository(ABC):
    """Storage capability required by the inspection service"""

    @abstractmethod
    def save(self, result):
        """Insert or replace an InspectionResult"""

    @abstractmethod
    def get(self, inspection_id):
        """Return the InspectionResult or None"""

    @abstractmethod
    def list(self):
        """Return all InspectionResults, newest first"""

    @abstractmethod
    def delete(self, inspection_id):
        """Remove one result, True if it existed"""


class JsonInspectionRepository(InspectionRepository):
    """
    One JSON file per inspection in a folder

    Example:
        >>> repo = JsonInspectionRepository('/tmp/history')
        >>> repo.save(result)
        >>> repo.get(result.id).id == result.id
        True
    """

    def __init__(self, folder):
        self.folder = folder
        ensure_directories([folder])

    def _path(self, inspection_id):
        if not isinstance(inspection_id, str) or not _SAFE_ID.match(inspection_id):
            return None
        return os.path.join(self.folder, f"{inspection_id}.json")

    def save(self, result):
        path = self._path(result.id)
        if path is None:
            raise ValueError(f"Invalid inspection id: {result.id!r}")

        if not save_json(result.to_dict(), path):
            raise OSError(f"Failed to save inspection {result.id}")

        logger.info(f"Inspection saved: {path}")
        return result

    def get(self, inspection_id):
        path = self._path(inspection_id)
        if path is None or not os.path.exists(path):
            return None

        data = load_json(path)
        if not data:
            return None
        try:
            return InspectionResult.from_dict(data)
        except (KeyError, TypeError) as e:
            logger.error(f"Error reading inspection file {path}: {e}")
            return None

    def list(self):
        results = []
        for filename in list_files(self.folder, '.json'):
            data = load_json(os.path.join(self.folder, filename))
            if not data:
                continue
            try:
                results.append(InspectionResult.from_dict(data))
            except (KeyError, TypeError) as e:
                logger.error(f"Error reading inspection file {filename}: {e}")
                continue

        # Newest first
        results.sort(key=lambda r: r.created_at, reverse=True)
        return results

    def delete(self, inspection_id):
        path = self._path(inspection_id)
        if path is None:
            return False
        return delete_file(path)
