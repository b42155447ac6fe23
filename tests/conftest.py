from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from calastro.config import get_settings
from calastro.position import GeodeticPosition


@pytest.fixture
def missoula() -> GeodeticPosition:
    return GeodeticPosition.from_east_longitude(
        -114.00730, 46.85714, -6.0, location_name="Missoula, MT", zone_name="MDT"
    )


@pytest.fixture
def greenwich() -> GeodeticPosition:
    return GeodeticPosition(0.0, 51.4769, 0.0, location_name="Greenwich")


@pytest.fixture
def svalbard() -> GeodeticPosition:
    return GeodeticPosition.from_east_longitude(15.6469, 78.2232, 1.0, location_name="Longyearbyen")


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
