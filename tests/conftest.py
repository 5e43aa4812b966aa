"""
Pytest configuration for the status aggregation engine tests.
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

SAMPLE_DATA = Path(__file__).resolve().parents[1] / "StatusPage" / "data" / "sample_status.json"


@pytest.fixture
def sample_data_path():
    return SAMPLE_DATA


@pytest.fixture
def fixed_now():
    return datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
