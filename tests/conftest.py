import json
from datetime import date
from pathlib import Path

import pytest

from zwds.birth import BirthInput
from zwds.chart import compute_chart
from zwds.config import get_settings


FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def golden():
    with open(FIXTURES / "golden_1990_01_01_zi_m.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def golden_chart(golden):
    given = golden["input"]
    birth = BirthInput(given["year"], given["month"], given["day"], given["hour"], given["gender"], given["name"])
    return compute_chart(birth, as_of=date.fromisoformat(golden["as_of"]))


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Each test sees settings built from a clean environment."""
    for var in ("ZWDS_ACTIVATION_BASE_YEAR", "ZWDS_COMPASS_START_AGE", "ZWDS_COMPASS_END_AGE",
                "ZWDS_CHART_DIR", "ZWDS_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
