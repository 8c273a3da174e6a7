# services/standard_service.py
import os
import logging

from inspection.models import Standard
from inspection.exceptions import DataLoadError, InvalidInputError, StandardNotFoundError
from storage.local_storage import load_json

logger = logging.getLogger(__name__)


class StandardService:
    """Load inspection standards from the standards JSON file"""

    def __init__(self, standards_file):
        self.standards_file = standards_file

    def get_standards(self):
        """
        Load all standards

        Returns:
            list: Standard objects in file order

        Raises:
            DataLoadError: File exists but cannot be decoded
        """
        if not os.path.exists(self.standards_file):
            logger.warning(f"Standards file not found: {self.standards_file}")
            return []

        data = load_json(self.standards_file)
        if data is None:
            raise DataLoadError(f"Failed to load standards from {self.standards_file}")
        if not isinstance(data, list):
            raise DataLoadError("Standards file must contain a JSON list")

        try:
            standards = [Standard.from_dict(item) for item in data]
        except InvalidInputError as e:
            raise DataLoadError(f"Malformed standard: {e.message}") from e

        logger.info(f"Loaded {len(standards)} standards")
        return standards

    def get_standard(self, standard_id):
        """
        Look up one standard by id

        Raises:
            StandardNotFoundError: No standard has this id
        """
        for standard in self.get_standards():
            if standard.id == str(standard_id):
                return standard
        raise StandardNotFoundError(standard_id)
