# inspection/models.py
"""
Data model for rice inspection
Grains, batches, standards and calculation results

Wire format uses the camelCase keys of the JSON files
(raw.json, standards.json) and of the HTTP API.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from config.constants import LENGTH_UNIT
from .exceptions import InvalidInputError


class MinCondition(Enum):
    """Comparison applied to the lower length bound"""
    GT = "GT"
    GE = "GE"
    UNCONSTRAINED = ""

    @classmethod
    def parse(cls, tag):
        """
        Map a raw tag to a condition

        Anything other than GT/GE (None, "", "LT", ...) means no lower bound.

        Example:
            >>> MinCondition.parse("GE")
            <MinCondition.GE: 'GE'>
            >>> MinCondition.parse("foo")
            <MinCondition.UNCONSTRAINED: ''>
        """
        if isinstance(tag, cls):
            return tag
        if tag == cls.GT.value:
            return cls.GT
        if tag == cls.GE.value:
            return cls.GE
        return cls.UNCONSTRAINED

    def check(self, length, bound):
        if self is MinCondition.GT:
            return length > bound
        if self is MinCondition.GE:
            return length >= bound
        return True


class MaxCondition(Enum):
    """Comparison applied to the upper length bound"""
    LT = "LT"
    LE = "LE"
    UNCONSTRAINED = ""

    @classmethod
    def parse(cls, tag):
        """Map a raw tag to a condition, LT/LE or no upper bound"""
        if isinstance(tag, cls):
            return tag
        if tag == cls.LT.value:
            return cls.LT
        if tag == cls.LE.value:
            return cls.LE
        return cls.UNCONSTRAINED

    def check(self, length, bound):
        if self is MaxCondition.LT:
            return length < bound
        if self is MaxCondition.LE:
            return length <= bound
        return True


def _require(data, key, kind):
    try:
        return data[key]
    except (KeyError, TypeError):
        raise InvalidInputError(f"{kind} is missing '{key}'", [f"missing field: {key}"]) from None


@dataclass(frozen=True)
class RiceGrain:
    """One measured kernel"""
    length: float
    weight: float
    shape: str
    type: str

    @classmethod
    def from_dict(cls, data):
        return cls(
            length=_require(data, 'length', 'Grain'),
            weight=_require(data, 'weight', 'Grain'),
            shape=_require(data, 'shape', 'Grain'),
            type=_require(data, 'type', 'Grain'),
        )

    def to_dict(self):
        return {
            'length': self.length,
            'weight': self.weight,
            'shape': self.shape,
            'type': self.type,
        }


@dataclass(frozen=True)
class Batch:
    """Grains under inspection plus opaque request metadata"""
    grains: Tuple[RiceGrain, ...]
    image_url: str = ""
    request_id: str = ""

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise InvalidInputError("Raw data must be a JSON object", ["raw data is not an object"])

        grains = _require(data, 'grains', 'Raw data')
        if not isinstance(grains, list):
            raise InvalidInputError("Raw data 'grains' must be a list", ["grains is not a list"])

        return cls(
            grains=tuple(RiceGrain.from_dict(g) for g in grains),
            image_url=data.get('imageURL', ''),
            request_id=data.get('requestID', ''),
        )

    def to_dict(self):
        return {
            'requestID': self.request_id,
            'imageURL': self.image_url,
            'grains': [g.to_dict() for g in self.grains],
        }


@dataclass(frozen=True)
class StandardCategory:
    """One row of an inspection standard"""
    name: str
    min_length: float
    max_length: float
    condition_min: MinCondition = MinCondition.UNCONSTRAINED
    condition_max: MaxCondition = MaxCondition.UNCONSTRAINED
    shape: Tuple[str, ...] = ()
    key: str = ""
    # Tags as they appeared on the wire, kept for validation and round trips
    raw_condition_min: Optional[str] = None
    raw_condition_max: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        condition_min = data.get('conditionMin') if isinstance(data, dict) else None
        condition_max = data.get('conditionMax') if isinstance(data, dict) else None
        shape = data.get('shape') if isinstance(data, dict) else None
        if isinstance(shape, str):
            shape = [shape]
        return cls(
            name=_require(data, 'name', 'Standard category'),
            min_length=_require(data, 'minLength', 'Standard category'),
            max_length=_require(data, 'maxLength', 'Standard category'),
            condition_min=MinCondition.parse(condition_min),
            condition_max=MaxCondition.parse(condition_max),
            shape=tuple(shape or ()),
            key=data.get('key', ''),
            raw_condition_min=condition_min,
            raw_condition_max=condition_max,
        )

    def to_dict(self):
        return {
            'key': self.key,
            'name': self.name,
            'minLength': self.min_length,
            'maxLength': self.max_length,
            'conditionMin': (
                self.raw_condition_min
                if self.raw_condition_min is not None
                else self.condition_min.value
            ),
            'conditionMax': (
                self.raw_condition_max
                if self.raw_condition_max is not None
                else self.condition_max.value
            ),
            'shape': list(self.shape),
        }


@dataclass(frozen=True)
class Standard:
    """Named, ordered set of composition categories"""
    id: str
    name: str
    categories: Tuple[StandardCategory, ...] = ()
    create_date: str = ""

    @classmethod
    def from_dict(cls, data):
        rows = _require(data, 'standardData', 'Standard')
        if not isinstance(rows, list):
            raise InvalidInputError("Standard 'standardData' must be a list",
                                    ["standardData is not a list"])
        return cls(
            id=str(_require(data, 'id', 'Standard')),
            name=_require(data, 'name', 'Standard'),
            categories=tuple(StandardCategory.from_dict(row) for row in rows),
            create_date=data.get('createDate', ''),
        )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'createDate': self.create_date,
            'standardData': [c.to_dict() for c in self.categories],
        }


@dataclass(frozen=True)
class CompositionResult:
    name: str
    length: str
    actual: str

    def to_dict(self):
        return {'name': self.name, 'length': self.length, 'actual': self.actual}

    @classmethod
    def from_dict(cls, data):
        return cls(name=data['name'], length=data['length'], actual=data['actual'])


@dataclass(frozen=True)
class DefectResult:
    name: str
    actual: str

    def to_dict(self):
        return {'name': self.name, 'actual': self.actual}

    @classmethod
    def from_dict(cls, data):
        return cls(name=data['name'], actual=data['actual'])


@dataclass(frozen=True)
class CalculationResult:
    """Calculator output bundled for the caller"""
    composition: List[CompositionResult] = field(default_factory=list)
    defects: List[DefectResult] = field(default_factory=list)
    total_sample: int = 0
    image_url: str = ""

    def to_dict(self):
        return {
            'composition': [c.to_dict() for c in self.composition],
            'defects': [d.to_dict() for d in self.defects],
            'totalSample': self.total_sample,
            'imageURL': self.image_url,
        }


@dataclass
class InspectionResult:
    """Persisted inspection: calculator output plus form metadata"""
    id: str
    name: str
    created_at: str
    updated_at: str
    standard_id: str
    standard_name: str
    total_sample: int
    composition: List[CompositionResult] = field(default_factory=list)
    defect_rice: List[DefectResult] = field(default_factory=list)
    note: str = ""
    price: Optional[float] = None
    date_time_of_sampling: Optional[str] = None
    sampling_point: Optional[str] = None
    image_url: str = ""

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
            'standardId': self.standard_id,
            'standardName': self.standard_name,
            'totalSample': self.total_sample,
            'note': self.note,
            'price': self.price,
            'dateTimeOfSampling': self.date_time_of_sampling,
            'samplingPoint': self.sampling_point,
            'imageURL': self.image_url,
            'composition': [c.to_dict() for c in self.composition],
            'defectRice': [d.to_dict() for d in self.defect_rice],
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            name=data.get('name', ''),
            created_at=data.get('createdAt', ''),
            updated_at=data.get('updatedAt', ''),
            standard_id=data.get('standardId', ''),
            standard_name=data.get('standardName', ''),
            total_sample=data.get('totalSample', 0),
            composition=[CompositionResult.from_dict(c) for c in data.get('composition', [])],
            defect_rice=[DefectResult.from_dict(d) for d in data.get('defectRice', [])],
            note=data.get('note', ''),
            price=data.get('price'),
            date_time_of_sampling=data.get('dateTimeOfSampling'),
            sampling_point=data.get('samplingPoint'),
            image_url=data.get('imageURL', ''),
        )

    def to_history_item(self):
        """Summary row for the history list"""
        return {
            'id': self.id,
            'name': self.name,
            'createDate': self.created_at,
            'standard': self.standard_name,
            'note': self.note,
        }


def format_length_bound(value):
    """
    Render a length bound the way it appears in reports

    Example:
        >>> format_length_bound(5.0)
        '5'
        >>> format_length_bound(5.5)
        '5.5'
    """
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        if value != value:
            return "NaN"
        if value in (float('inf'), float('-inf')):
            return "Infinity" if value > 0 else "-Infinity"
        if float(value).is_integer():
            return str(int(value))
        return repr(float(value))
    return str(value)


def format_length_range(category):
    """Render "<min> - <max> mm" for a category"""
    return (
        f"{format_length_bound(category.min_length)} - "
        f"{format_length_bound(category.max_length)} {LENGTH_UNIT}"
    )
