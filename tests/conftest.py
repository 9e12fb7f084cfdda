"""Shared pytest fixtures for Tether tests.

Fixtures:
    - now: Fixed current instant used by every time-dependent test
    - make_contact: Factory building a Contact relative to now
    - sample_contacts: A small mixed address book
    - mock_config: Test configuration rooted in tmp_path
"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Optional

import pytest

from src.core.config import Config, reset_config
from src.db.models import Contact, Event, OOOPeriod

NOW = datetime(2026, 3, 15, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    """Fixed instant: 2026-03-15 12:00."""
    return NOW


@pytest.fixture
def make_contact(now: datetime) -> Callable[..., Contact]:
    """Build a contact from day offsets relative to now.

    Negative offsets are in the past, positive in the future.
    """

    def _make(
        name: str = "Ada",
        cadence_days: Optional[int] = 30,
        event_offsets: tuple[int, ...] = (),
        ooo_offsets: tuple[tuple[int, int], ...] = (),
        snoozed_for: Optional[int] = None,
    ) -> Contact:
        return Contact(
            name=name,
            id=name.lower(),
            cadence_days=cadence_days,
            snoozed_until=now + timedelta(days=snoozed_for) if snoozed_for is not None else None,
            events=[Event(date=now + timedelta(days=offset)) for offset in event_offsets],
            ooo_periods=[
                OOOPeriod(now + timedelta(days=start), now + timedelta(days=end))
                for start, end in ooo_offsets
            ],
        )

    return _make


@pytest.fixture
def sample_contacts(make_contact: Callable[..., Contact]) -> list[Contact]:
    """One contact per interesting state."""
    return [
        make_contact("Overdue", cadence_days=14, event_offsets=(-20,)),
        make_contact("Due", cadence_days=30, event_offsets=(-27,)),
        make_contact("Soon", cadence_days=30, event_offsets=(-21,)),
        make_contact("OnTrack", cadence_days=30, event_offsets=(-2,)),
        make_contact("Never", cadence_days=30),
        make_contact("NoCadence", cadence_days=None, event_offsets=(-100,)),
        make_contact("Planned", cadence_days=14, event_offsets=(-40, 3)),
        make_contact("Away", cadence_days=14, event_offsets=(-40,), ooo_offsets=((-2, 3),)),
        make_contact("Snoozed", cadence_days=14, event_offsets=(-30,), snoozed_for=5),
    ]


@pytest.fixture
def mock_config(tmp_path: Path) -> Config:
    """Test configuration with all paths under tmp_path."""
    reset_config()
    return Config(
        data_path=tmp_path / "contacts.json",
        log_path=tmp_path / "logs",
    )
