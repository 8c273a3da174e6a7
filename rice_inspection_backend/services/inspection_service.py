# services/inspection_service.py
import time
import random
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation

import pytz

from config.constants import (
    SAMPLING_POINTS,
    MIN_PRICE,
    MAX_PRICE,
    INSPECTION_ID_PREFIX,
)
from inspection.calculator import calculate_inspection_results
from inspection.exceptions import InvalidInputError, InspectionNotFoundError
from inspection.models import InspectionResult
from inspection.validation import ensure_valid

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('note', 'price', 'samplingPoint', 'samplingPoints', 'dateTimeOfSampling')


def generate_inspection_id():
    """
    Build an inspection id: prefix + last 6 digits of the ms clock + 3 random digits

    Example:
        >>> generate_inspection_id()
        'INS512345042'
    """
    timestamp = str(int(time.time() * 1000))
    suffix = f"{random.randint(0, 999):03d}"
    return f"{INSPECTION_ID_PREFIX}{timestamp[-6:]}{suffix}"


def _validate_price(price, errors):
    if price is None or price == "":
        return None
    if isinstance(price, bool) or not isinstance(price, (int, float, str)):
        errors['price'] = "Price must be a number"
        return None
    try:
        value = Decimal(str(price))
    except InvalidOperation:
        errors['price'] = "Price must be a number"
        return None
    if not value.is_finite():
        errors['price'] = "Price must be a number"
        return None
    if value < MIN_PRICE:
        errors['price'] = f"Price must be at least {MIN_PRICE}"
    elif value > MAX_PRICE:
        errors['price'] = f"Price must not exceed {MAX_PRICE:,}"
    elif value != value.quantize(Decimal('0.01')):
        errors['price'] = "Price can have at most 2 decimal places"
    else:
        return float(value)
    return None


def _validate_sampling_points(points, errors):
    if points is None:
        return []
    if isinstance(points, str):
        points = [p.strip() for p in points.split(',') if p.strip()]
    if not isinstance(points, list):
        errors['samplingPoints'] = "Sampling points must be a list"
        return []
    unknown = [p for p in points if p not in SAMPLING_POINTS]
    if unknown:
        errors['samplingPoints'] = (
            f"Unknown sampling point(s): {', '.join(map(str, unknown))}. "
            f"Allowed: {', '.join(SAMPLING_POINTS)}"
        )
        return []
    return points


def _validate_datetime(value, errors):
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        errors['dateTimeOfSampling'] = "Date/time of sampling must be an ISO-8601 string"
        return None
    try:
        # Python < 3.11 does not accept the trailing Z
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        errors['dateTimeOfSampling'] = f"Invalid date/time of sampling: {value}"
        return None
    return parsed.isoformat()


class InspectionService:
    """Run inspections and manage their history"""

    def __init__(self, repository, standard_service, raw_data_service,
                 strict_validation=False, timezone="UTC"):
        self.repository = repository
        self.standard_service = standard_service
        self.raw_data_service = raw_data_service
        self.strict_validation = strict_validation
        self.timezone = pytz.timezone(timezone)

    def _now(self):
        return datetime.now(self.timezone).isoformat()

    def _new_id(self):
        inspection_id = generate_inspection_id()
        while self.repository.get(inspection_id) is not None:
            inspection_id = generate_inspection_id()
        return inspection_id

    @staticmethod
    def validate_form(form):
        """
        Check the inspection form

        Args:
            form: Dict with name, standard, note, price, samplingPoints, dateTimeOfSampling

        Returns:
            dict: Normalized form values

        Raises:
            InvalidInputError: problems is a dict of field -> message
        """
        if not isinstance(form, dict):
            raise InvalidInputError("Inspection form must be a JSON object",
                                    {'form': "Expected a JSON object"})

        errors = {}

        name = form.get('name')
        if not isinstance(name, str) or len(name) < 1:
            errors['name'] = "Name is required"

        standard_id = form.get('standard')
        if standard_id is None or str(standard_id) == "":
            errors['standard'] = "Standard is required"

        note = form.get('note') or ""
        if not isinstance(note, str):
            errors['note'] = "Note must be text"

        price = _validate_price(form.get('price'), errors)
        sampling_points = _validate_sampling_points(form.get('samplingPoints'), errors)
        date_time = _validate_datetime(form.get('dateTimeOfSampling'), errors)

        if errors:
            raise InvalidInputError("Invalid inspection form", errors)

        return {
            'name': name,
            'standard': str(standard_id),
            'note': note,
            'price': price,
            'samplingPoints': sampling_points,
            'dateTimeOfSampling': date_time,
        }

    def create_inspection(self, form, raw_data=None):
        """
        Calculate and store a new inspection

        Args:
            form: Inspection form dict (see validate_form)
            raw_data: Optional uploaded batch dict; defaults to the raw data file

        Returns:
            Tuple of (inspection_id, CalculationResult)
        """
        values = self.validate_form(form)
        standard = self.standard_service.get_standard(values['standard'])

        if raw_data is not None:
            batch = self.raw_data_service.parse_raw_data(raw_data)
        else:
            batch = self.raw_data_service.load_raw_data()

        if self.strict_validation:
            ensure_valid(batch, standard)

        calculation = calculate_inspection_results(batch, standard)

        now = self._now()
        inspection_id = self._new_id()
        result = InspectionResult(
            id=inspection_id,
            name=values['name'],
            created_at=now,
            updated_at=now,
            standard_id=standard.id,
            standard_name=standard.name,
            total_sample=calculation.total_sample,
            composition=list(calculation.composition),
            defect_rice=list(calculation.defects),
            note=values['note'],
            price=values['price'],
            date_time_of_sampling=values['dateTimeOfSampling'],
            sampling_point=', '.join(values['samplingPoints']) or None,
            image_url=calculation.image_url,
        )
        self.repository.save(result)

        logger.info(
            f"Inspection {inspection_id} created: standard={standard.name}, "
            f"grains={calculation.total_sample}"
        )
        return inspection_id, calculation

    def get_history(self):
        """History rows, newest first"""
        return [result.to_history_item() for result in self.repository.list()]

    def search_history(self, search_term):
        """History rows whose id contains search_term (case-insensitive)"""
        term = (search_term or "").lower()
        return [
            result.to_history_item()
            for result in self.repository.list()
            if term in result.id.lower()
        ]

    def get_inspection_result(self, inspection_id):
        """
        Raises:
            InspectionNotFoundError
        """
        result = self.repository.get(inspection_id)
        if result is None:
            raise InspectionNotFoundError(inspection_id)
        return result

    def update_inspection(self, inspection_id, changes):
        """
        Edit the form metadata of a stored inspection

        Only note, price, sampling point and sampling date/time can change;
        calculated rows are kept as they are.

        Returns:
            InspectionResult: Updated record
        """
        result = self.get_inspection_result(inspection_id)

        if not isinstance(changes, dict):
            raise InvalidInputError("Update must be a JSON object", {'form': "Expected a JSON object"})

        errors = {}
        unknown = [key for key in changes if key not in EDITABLE_FIELDS]
        if unknown:
            errors['fields'] = f"Fields cannot be edited: {', '.join(sorted(unknown))}"

        if 'note' in changes:
            note = changes['note'] or ""
            if isinstance(note, str):
                result.note = note
            else:
                errors['note'] = "Note must be text"

        if 'price' in changes:
            price = _validate_price(changes['price'], errors)
            if 'price' not in errors:
                result.price = price

        if 'samplingPoints' in changes or 'samplingPoint' in changes:
            points = changes.get('samplingPoints', changes.get('samplingPoint'))
            points = _validate_sampling_points(points, errors)
            if 'samplingPoints' not in errors:
                result.sampling_point = ', '.join(points) or None

        if 'dateTimeOfSampling' in changes:
            date_time = _validate_datetime(changes['dateTimeOfSampling'], errors)
            if 'dateTimeOfSampling' not in errors:
                result.date_time_of_sampling = date_time

        if errors:
            raise InvalidInputError("Invalid inspection update", errors)

        result.updated_at = self._now()
        self.repository.save(result)
        logger.info(f"Inspection {inspection_id} updated")
        return result

    def delete_history(self, inspection_ids):
        """
        Delete inspections

        Returns:
            list: Ids that existed and were removed
        """
        deleted = []
        for inspection_id in inspection_ids:
            if self.repository.delete(inspection_id):
                deleted.append(inspection_id)
                logger.info(f"Deleted inspection: {inspection_id}")
        return deleted
