# services/raw_data_service.py
import os
import logging

from inspection.models import Batch
from inspection.exceptions import DataLoadError, InvalidInputError
from storage.local_storage import load_json

logger = logging.getLogger(__name__)


class RawDataService:
    """Load grain measurement batches (raw.json or uploaded JSON)"""

    def __init__(self, raw_data_file):
        self.raw_data_file = raw_data_file

    def load_raw_data(self, path=None):
        """
        Load the default batch from disk

        Args:
            path: Optional override of the configured raw data file

        Returns:
            Batch

        Raises:
            DataLoadError: File missing or not decodable
        """
        path = path or self.raw_data_file
        if not os.path.exists(path):
            raise DataLoadError(f"Raw data file not found: {path}")

        data = load_json(path)
        if data is None:
            raise DataLoadError(f"Failed to load raw data from {path}")

        try:
            batch = Batch.from_dict(data)
        except InvalidInputError as e:
            raise DataLoadError(f"Malformed raw data in {path}: {e.message}") from e

        logger.info(f"Loaded raw data {batch.request_id or '(no request id)'}: {len(batch.grains)} grains")
        return batch

    @staticmethod
    def parse_raw_data(payload):
        """
        Decode an uploaded batch

        Args:
            payload: Dict with 'grains' and optional 'imageURL' / 'requestID'

        Returns:
            Batch

        Raises:
            InvalidInputError: Payload is not a batch
        """
        batch = Batch.from_dict(payload)
        logger.info(f"Parsed uploaded raw data: {len(batch.grains)} grains")
        return batch
