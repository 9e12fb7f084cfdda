"""Data models for Tether.

Dataclasses use frozen=False for mutability during processing,
except OOOPeriod, which is a value object.

This module defines:
    - Dataclasses for contact records (Contact, Event, OOOPeriod)
    - Event partitioning around the current instant
    - Data-entry validation (the cadence engine never validates)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from src.core.exceptions import ValidationError

MAX_OOO_LABEL_LENGTH = 100


# =============================================================================
# VALIDATION
# =============================================================================


def validate_cadence(days: Optional[int]) -> None:
    """Check a cadence value before it is stored.

    Args:
        days: Cadence in days, or None for no tracking

    Raises:
        ValidationError: If days is not a positive integer
    """
    if days is None:
        return
    if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
        raise ValidationError(f"Cadence must be a positive number of days, got {days!r}")


def validate_ooo_period(start_date: datetime, end_date: datetime, label: Optional[str]) -> None:
    """Check an out-of-office period before it is stored.

    Args:
        start_date: First day away (inclusive)
        end_date: Last day away (inclusive)
        label: Optional free text

    Raises:
        ValidationError: If the range is inverted or the label is too long
    """
    if end_date < start_date:
        raise ValidationError("End date must be on or after start date")
    if label is not None and not isinstance(label, str):
        raise ValidationError("OOO label must be text")
    if label is not None and len(label) > MAX_OOO_LABEL_LENGTH:
        raise ValidationError(f"OOO label must be at most {MAX_OOO_LABEL_LENGTH} characters")


# =============================================================================
# DATACLASSES
# =============================================================================


@dataclass(frozen=True)
class OOOPeriod:
    """A window during which a contact cannot be reached.

    Both bounds are inclusive. Periods may overlap each other.

    Attributes:
        start_date: First instant away
        end_date: Last instant away
        label: Free text, e.g. "Cruise"
    """

    start_date: datetime
    end_date: datetime
    label: Optional[str] = None

    @classmethod
    def create(
        cls, start_date: datetime, end_date: datetime, label: Optional[str] = None
    ) -> "OOOPeriod":
        """Validate and build a period."""
        validate_ooo_period(start_date, end_date, label)
        return cls(start_date=start_date, end_date=end_date, label=label)

    def contains(self, moment: datetime) -> bool:
        return self.start_date <= moment <= self.end_date


@dataclass
class Event:
    """A logged or planned interaction.

    Attributes:
        date: When it happened (or will happen)
        title: Short description
        notes: Free-form notes
    """

    date: datetime
    title: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class Contact:
    """A person being kept in touch with.

    Attributes:
        name: Display name
        id: Stable identifier, if the source has one
        cadence_days: Desired days between interactions (None = no tracking)
        snoozed_until: Due/overdue signalling suppressed until this instant
        events: Past and future interactions, any order
        ooo_periods: Out-of-office windows, any order
    """

    name: str
    id: Optional[str] = None
    cadence_days: Optional[int] = None
    snoozed_until: Optional[datetime] = None
    events: list[Event] = field(default_factory=list)
    ooo_periods: list[OOOPeriod] = field(default_factory=list)


def partition_events(
    events: list[Event], now: datetime
) -> tuple[Optional[Event], Optional[Event]]:
    """Split events at the current instant.

    An event dated exactly at now counts as past.

    Args:
        events: Events in any order
        now: Current instant

    Returns:
        (most recent past event, earliest future event), either may be None
    """
    last_past: Optional[Event] = None
    next_future: Optional[Event] = None

    for event in events:
        if event.date <= now:
            if last_past is None or event.date > last_past.date:
                last_past = event
        elif next_future is None or event.date < next_future.date:
            next_future = event

    return last_past, next_future
