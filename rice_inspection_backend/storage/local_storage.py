# storage/local_storage.py
"""
Local file storage operations
Handles saving/loading JSON and Excel files in local directories
"""

import os
import json
import logging
import pandas as pd

logger = logging.getLogger(__name__)


def ensure_directories(folders):
    """
    Create storage directories

    Args:
        folders: Iterable of folder paths

    Returns:
        bool: True if successful, False otherwise
    """
    try:
        for folder in folders:
            os.makedirs(folder, exist_ok=True)

        logger.info("All storage directories created successfully")
        return True
    except OSError as e:
        logger.error(f"Error creating directories: {e}")
        return False


def save_json(data, filepath):
    """
    Save dictionary or list as JSON file

    Args:
        data: Data to save
        filepath: Destination file path

    Returns:
        bool: True if successful, False otherwise
    """
    try:
        os.makedirs(os.path.dirname(filepath), exist_ok=True)

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        logger.debug(f"JSON saved: {filepath}")
        return True
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Error saving JSON to {filepath}: {e}")
        return False


def load_json(filepath):
    """
    Load JSON file

    Args:
        filepath: Path to JSON file

    Returns:
        dict | list: Loaded data or None if error
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        logger.debug(f"JSON loaded: {filepath}")
        return data
    except (OSError, ValueError) as e:
        logger.error(f"Error loading JSON from {filepath}: {e}")
        return None


def save_excel(sheets, filepath):
    """
    Save pandas DataFrames as sheets of one Excel workbook

    Args:
        sheets: Dict of sheet name -> DataFrame, in sheet order
        filepath: Destination file path

    Returns:
        bool: True if successful, False otherwise
    """
    try:
        os.makedirs(os.path.dirname(filepath), exist_ok=True)

        with pd.ExcelWriter(filepath, engine='openpyxl') as writer:
            for sheet_name, dataframe in sheets.items():
                dataframe.to_excel(writer, sheet_name=sheet_name, index=False)

        logger.debug(f"Excel saved: {filepath}")
        return True
    except (OSError, ValueError) as e:
        logger.error(f"Error saving Excel to {filepath}: {e}")
        return False


def delete_file(filepath):
    """
    Delete a file

    Returns:
        bool: True if the file was removed, False otherwise
    """
    try:
        if os.path.exists(filepath):
            os.remove(filepath)
            logger.info(f"Deleted file: {filepath}")
            return True
        logger.warning(f"File not found: {filepath}")
        return False
    except OSError as e:
        logger.error(f"Error deleting file {filepath}: {e}")
        return False


def list_files(folder, extension=None):
    """
    List files in a storage folder

    Args:
        folder: Folder path
        extension: Optional file extension filter (e.g., '.json')

    Returns:
        list: Sorted list of filenames
    """
    if not folder or not os.path.exists(folder):
        return []

    files = [f for f in os.listdir(folder) if os.path.isfile(os.path.join(folder, f))]

    if extension:
        files = [f for f in files if f.endswith(extension)]

    return sorted(files)
