# inspection/exceptions.py
"""
Exceptions raised around the inspection workflow
The calculator itself never raises for structurally valid input
"""


class InspectionError(Exception):
    """Base class for inspection errors"""


class InvalidInputError(InspectionError):
    """
    Input rejected at the service boundary

    Attributes:
        problems: List of human readable problems, or a dict of field -> message
    """

    def __init__(self, message, problems=None):
        super().__init__(message)
        self.message = message
        self.problems = problems if problems is not None else []


class StandardNotFoundError(InspectionError):
    """Requested standard id is not in the catalogue"""

    def __init__(self, standard_id):
        super().__init__(f"Standard not found: {standard_id}")
        self.standard_id = standard_id


class InspectionNotFoundError(InspectionError):
    """Requested inspection id is not stored"""

    def __init__(self, inspection_id):
        super().__init__(f"Inspection not found: {inspection_id}")
        self.inspection_id = inspection_id


class DataLoadError(InspectionError):
    """A data file could not be read or decoded"""
