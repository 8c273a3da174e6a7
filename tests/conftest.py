import json
import logging
from pathlib import Path

import pytest

from app import create_app
from config.settings import Config
from inspection.models import Batch, RiceGrain, Standard, StandardCategory, MinCondition, MaxCondition

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SAMPLES_DIR = PROJECT_ROOT / "rice_inspection_backend" / "config" / "samples"


STANDARDS = [
    {
        "id": "1",
        "name": "Standard 1",
        "createDate": "2023-08-01T10:00:00.000Z",
        "standardData": [
            {
                "key": "whole",
                "name": "Whole",
                "minLength": 5,
                "maxLength": 7,
                "conditionMin": "GE",
                "conditionMax": "LE",
                "shape": ["wholegrain"],
            },
            {
                "key": "broken",
                "name": "Broken",
                "minLength": 0,
                "maxLength": 5,
                "conditionMin": "GT",
                "conditionMax": "LT",
                "shape": ["broken"],
            },
        ],
    }
]

RAW_DATA = {
    "requestID": "REQ-1",
    "imageURL": "https://example.com/raw.jpg",
    "grains": [
        {"length": 5, "weight": 10, "shape": "wholegrain", "type": "white"},
        {"length": 1, "weight": 5, "shape": "broken", "type": "yellow"},
    ],
}


def grain(length=5.0, weight=1.0, shape="wholegrain", type="white"):
    return RiceGrain(length=length, weight=weight, shape=shape, type=type)


def category(name="Whole", min_length=5, max_length=7, condition_min="GE",
             condition_max="LE", shape=("wholegrain",)):
    return StandardCategory(
        name=name,
        min_length=min_length,
        max_length=max_length,
        condition_min=MinCondition.parse(condition_min),
        condition_max=MaxCondition.parse(condition_max),
        shape=tuple(shape),
        raw_condition_min=condition_min,
        raw_condition_max=condition_max,
    )


def standard(*categories):
    return Standard(id="S", name="Test Standard", categories=tuple(categories))


@pytest.fixture
def scenario_batch():
    return Batch.from_dict(RAW_DATA)


@pytest.fixture
def scenario_standard():
    return Standard.from_dict(STANDARDS[0])


@pytest.fixture
def test_config(tmp_path):
    static_root = tmp_path / "static"
    static_root.mkdir()
    standards_file = static_root / "standards.json"
    raw_data_file = static_root / "raw.json"
    standards_file.write_text(json.dumps(STANDARDS), encoding="utf-8")
    raw_data_file.write_text(json.dumps(RAW_DATA), encoding="utf-8")

    class TestConfig(Config):
        TESTING = True
        BASE_DIR = str(tmp_path)
        STATIC_ROOT = str(static_root)
        HISTORY_FOLDER = str(static_root / "history")
        LOG_FOLDER = str(static_root / "logs")
        EXCEL_FOLDER = str(static_root / "excels")
        STANDARDS_FILE = str(standards_file)
        RAW_DATA_FILE = str(raw_data_file)
        STRICT_VALIDATION = False
        TIMEZONE = "UTC"

    return TestConfig


@pytest.fixture
def app(test_config, tmp_path):
    flask_app = create_app(test_config)
    yield flask_app

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if str(getattr(handler, "baseFilename", "")).startswith(str(tmp_path)):
            root_logger.removeHandler(handler)
            handler.close()


@pytest.fixture
def client(app):
    return app.test_client()
