import json
from datetime import date, timedelta
from pathlib import Path

import pytest

from src.config import configure_logging
from src.models.aggregate import DimensionStats
from src.models.booking import TransactionRecord


configure_logging()

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def booking_dicts():
    """Load raw bookings, as stored in the bookings collection."""
    with open(FIXTURES_DIR / "bookings" / "sample_bookings.json") as f:
        return json.load(f)


@pytest.fixture
def bookings(booking_dicts):
    """Sample bookings parsed into TransactionRecords."""
    return [TransactionRecord.model_validate(item) for item in booking_dicts]


@pytest.fixture
def scenario_a_records():
    """Two properties, one cancelled booking."""
    return [
        TransactionRecord(id="R1", property="A", status="confirmed", amount=1000,
                          created_at="2025-01-10T10:00:00"),
        TransactionRecord(id="R2", property="A", status="cancelled", amount=500,
                          created_at="2025-01-10T11:00:00"),
        TransactionRecord(id="R3", property="B", status="confirmed", amount=2000,
                          created_at="2025-01-11T09:00:00"),
    ]


@pytest.fixture
def fourteen_days():
    """by_day map for Sun 2025-01-05 .. Sat 2025-01-18, one booking of 100 per day."""
    start = date(2025, 1, 5)
    return {
        (start + timedelta(days=offset)).isoformat(): DimensionStats(revenue=100.0, count=1)
        for offset in range(14)
    }
