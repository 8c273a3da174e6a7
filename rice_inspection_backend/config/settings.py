# config/settings.py
"""
Application settings and configuration
Environment-specific settings, paths and data files
"""

import os
import sys
import json
import shutil


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration"""

    # ========================================================================
    # SERVER CONFIGURATION
    # ========================================================================
    HOST = os.environ.get("RICE_HOST", "0.0.0.0")
    PORT = int(os.environ.get("RICE_PORT", 5000))
    DEBUG = _env_flag("RICE_DEBUG", True)

    # ========================================================================
    # STORAGE CONFIGURATION
    # ========================================================================
    # For packaged apps, use a writable user data directory
    if getattr(sys, 'frozen', False):
        if sys.platform == 'win32':
            DEFAULT_BASE_DIR = os.path.join(
                os.environ.get('APPDATA', os.path.expanduser('~')),
                'RiceInspection'
            )
        elif sys.platform == 'darwin':
            DEFAULT_BASE_DIR = os.path.join(
                os.path.expanduser('~'),
                'Library',
                'Application Support',
                'RiceInspection'
            )
        else:
            DEFAULT_BASE_DIR = os.path.join(os.path.expanduser('~'), '.rice_inspection')
    else:
        # Running in development
        DEFAULT_BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    BASE_DIR = os.environ.get("RICE_DATA_DIR", DEFAULT_BASE_DIR)
    STATIC_ROOT = os.path.join(BASE_DIR, 'static')

    # Storage folders
    HISTORY_FOLDER = os.path.join(STATIC_ROOT, 'history')
    LOG_FOLDER = os.path.join(STATIC_ROOT, 'logs')
    EXCEL_FOLDER = os.path.join(STATIC_ROOT, 'excels')

    # Data files, seeded from SAMPLES_FOLDER when missing
    SAMPLES_FOLDER = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'samples')
    STANDARDS_FILE = os.environ.get(
        "RICE_STANDARDS_FILE", os.path.join(STATIC_ROOT, 'standards.json')
    )
    RAW_DATA_FILE = os.environ.get(
        "RICE_RAW_DATA_FILE", os.path.join(STATIC_ROOT, 'raw.json')
    )

    # ========================================================================
    # CORS CONFIGURATION
    # ========================================================================
    CORS_ORIGINS = ["*"]

    # ========================================================================
    # INSPECTION CONFIGURATION
    # ========================================================================
    # Reject negative weights, inverted bounds and unknown tags before calculating
    STRICT_VALIDATION = _env_flag("RICE_STRICT_VALIDATION", False)
    TIMEZONE = os.environ.get("RICE_TIMEZONE", "Asia/Bangkok")

    # ========================================================================
    # HELPER METHODS
    # ========================================================================

    @classmethod
    def get_all_folders(cls):
        """
        Get list of all storage folders

        Returns:
            list: List of folder paths
        """
        return [
            cls.HISTORY_FOLDER,
            cls.LOG_FOLDER,
            cls.EXCEL_FOLDER
        ]

    @classmethod
    def create_directories(cls):
        """
        Create all necessary directories
        Also seeds standards.json and raw.json if they don't exist
        """
        os.makedirs(cls.BASE_DIR, exist_ok=True)
        os.makedirs(cls.STATIC_ROOT, exist_ok=True)

        for folder in cls.get_all_folders():
            os.makedirs(folder, exist_ok=True)

        cls.initialize_standards_file()
        cls.initialize_raw_data_file()

    @classmethod
    def _seed_file(cls, target, sample_name):
        """
        Copy a bundled sample to target if target doesn't exist

        Returns:
            bool: True if target exists afterwards
        """
        if os.path.exists(target):
            return True

        sample = os.path.join(cls.SAMPLES_FOLDER, sample_name)
        if not os.path.exists(sample):
            return False

        try:
            os.makedirs(os.path.dirname(target), exist_ok=True)
            shutil.copy(sample, target)
            print(f"Seeded {target} from {sample}")
            return True
        except OSError as e:
            print(f"Error seeding {target}: {e}")
            return False

    @classmethod
    def initialize_standards_file(cls):
        """Create standards.json from the bundled sample, or empty if there is none"""
        if cls._seed_file(cls.STANDARDS_FILE, 'standards.json'):
            return
        try:
            os.makedirs(os.path.dirname(cls.STANDARDS_FILE), exist_ok=True)
            with open(cls.STANDARDS_FILE, 'w', encoding='utf-8') as f:
                json.dump([], f, indent=2, ensure_ascii=False)
            print(f"Initialized standards file at: {cls.STANDARDS_FILE}")
        except OSError as e:
            print(f"Error initializing standards file: {e}")

    @classmethod
    def initialize_raw_data_file(cls):
        """Create raw.json from the bundled sample if it doesn't exist"""
        cls._seed_file(cls.RAW_DATA_FILE, 'raw.json')
