"""Data package - Contact records, validation and intake.

Storage itself lives outside Tether; this package holds the records the
engine reads and the checks applied at data entry.

Modules:
    - models: Contact, Event and OOOPeriod records, validation
    - intake: Load contacts from a JSON data file
"""

from src.db.models import (
    Contact,
    Event,
    OOOPeriod,
    partition_events,
    validate_cadence,
    validate_ooo_period,
)

__all__ = [
    # Dataclasses
    "Contact",
    "Event",
    "OOOPeriod",
    # Helpers
    "partition_events",
    "validate_cadence",
    "validate_ooo_period",
]
