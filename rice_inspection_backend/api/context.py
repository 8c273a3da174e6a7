# api/context.py
"""
Per-application service wiring
Services live on app.extensions so every app (and every test) gets its own
"""

from flask import current_app

from services import StandardService, RawDataService, InspectionService, ReportService
from storage.repository import JsonInspectionRepository

EXTENSION_KEY = 'rice_inspection'


class ServiceContainer:
    """Services built from one configuration"""

    def __init__(self, config):
        self.repository = JsonInspectionRepository(config['HISTORY_FOLDER'])
        self.standards = StandardService(config['STANDARDS_FILE'])
        self.raw_data = RawDataService(config['RAW_DATA_FILE'])
        self.inspections = InspectionService(
            self.repository,
            self.standards,
            self.raw_data,
            strict_validation=config['STRICT_VALIDATION'],
            timezone=config['TIMEZONE']
        )
        self.reports = ReportService(config['EXCEL_FOLDER'])


def init_services(app):
    app.extensions[EXTENSION_KEY] = ServiceContainer(app.config)
    return app.extensions[EXTENSION_KEY]


def get_services():
    return current_app.extensions[EXTENSION_KEY]
