"""Contact intake from a JSON data file.

Expected layout:
    {
      "contacts": [
        {
          "name": "Ada Lovelace",
          "id": "ada",
          "cadence_days": 30,
          "snoozed_until": "2026-03-01",
          "events": [{"date": "2026-01-15", "title": "Coffee"}],
          "ooo_periods": [
            {"start_date": "2026-02-01", "end_date": "2026-02-10", "label": "Cruise"}
          ]
        }
      ]
    }

Dates are ISO 8601. A date without a time is stored at 12:00 that day,
so it lands on the same calendar day in every timezone from UTC-12 to
UTC+12. Datetimes carrying a UTC offset are converted to local time and
stored naive, so every date the engine compares shares one convention.

Usage:
    from src.db.intake import load_contacts, save_contacts

    contacts = load_contacts(Path("contacts.json"))
    save_contacts(contacts, Path("contacts.json"))
"""

import json
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Optional

from src.core.exceptions import DataFileError, ValidationError
from src.core.logging import get_logger
from src.db.models import Contact, Event, OOOPeriod, validate_cadence

logger = get_logger(__name__)

DATE_ONLY_TIME = time(12, 0)


def parse_date(value: str) -> datetime:
    """Parse an ISO 8601 date or datetime.

    Args:
        value: "YYYY-MM-DD" or a full ISO datetime, with or without offset

    Returns:
        Naive local datetime; date-only values are pinned to noon

    Raises:
        ValidationError: If the value is not a valid ISO date
    """
    if not isinstance(value, str):
        raise ValidationError(f"Expected an ISO date string, got {value!r}")
    try:
        if len(value) == 10:
            return datetime.combine(date.fromisoformat(value), DATE_ONLY_TIME)
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value!r}") from e

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _optional_date(record: dict[str, Any], key: str) -> Optional[datetime]:
    value = record.get(key)
    if value is None or value == "":
        return None
    return parse_date(value)


def _entries(record: dict[str, Any], key: str, name: str) -> list[dict[str, Any]]:
    """Return a list of JSON objects stored under key, checking their shape."""
    entries = record.get(key) or []
    if not isinstance(entries, list):
        raise ValidationError(f"'{key}' for {name} must be a list")
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValidationError(f"Each entry in '{key}' for {name} must be an object")
    return entries


def parse_contact(record: dict[str, Any]) -> Contact:
    """Build a Contact from one JSON record.

    Args:
        record: Decoded JSON object

    Returns:
        Validated Contact

    Raises:
        ValidationError: If a field is missing or invalid
    """
    if not isinstance(record, dict):
        raise ValidationError("Contact record must be an object")

    name = record.get("name")
    if not name or not isinstance(name, str):
        raise ValidationError("Contact record is missing a name")

    cadence_days = record.get("cadence_days")
    validate_cadence(cadence_days)

    events = []
    for raw in _entries(record, "events", name):
        if "date" not in raw:
            raise ValidationError(f"Event for {name} is missing a date")
        events.append(
            Event(date=parse_date(raw["date"]), title=raw.get("title"), notes=raw.get("notes"))
        )

    periods = []
    for raw in _entries(record, "ooo_periods", name):
        if "start_date" not in raw or "end_date" not in raw:
            raise ValidationError(f"OOO period for {name} needs start_date and end_date")
        periods.append(
            OOOPeriod.create(
                parse_date(raw["start_date"]),
                parse_date(raw["end_date"]),
                raw.get("label"),
            )
        )

    contact_id = record.get("id")
    return Contact(
        name=name,
        id=str(contact_id) if contact_id is not None else None,
        cadence_days=cadence_days,
        snoozed_until=_optional_date(record, "snoozed_until"),
        events=events,
        ooo_periods=periods,
    )


def load_contacts(path: Path) -> list[Contact]:
    """Load all contacts from a JSON data file.

    Args:
        path: Data file location

    Returns:
        Contacts in file order

    Raises:
        DataFileError: If the file is missing, unreadable or badly laid out
        ValidationError: If a record is invalid (message names its index)
    """
    if not path.exists():
        raise DataFileError(f"Data file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise DataFileError(f"Data file is not valid JSON: {path}: {e}") from e

    if not isinstance(document, dict) or not isinstance(document.get("contacts"), list):
        raise DataFileError(f"Data file must contain a 'contacts' list: {path}")

    contacts: list[Contact] = []
    for index, record in enumerate(document["contacts"]):
        try:
            contacts.append(parse_contact(record))
        except ValidationError as e:
            raise ValidationError(f"Contact #{index}: {e}") from e

    logger.info(
        f"Loaded {len(contacts)} contacts",
        extra={"context": {"path": str(path)}},
    )
    return contacts


def _format_date(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def contact_to_record(contact: Contact) -> dict[str, Any]:
    """Convert a Contact back into the JSON record layout."""
    record: dict[str, Any] = {"name": contact.name}
    if contact.id is not None:
        record["id"] = contact.id
    record["cadence_days"] = contact.cadence_days
    record["snoozed_until"] = _format_date(contact.snoozed_until)
    record["events"] = [
        {"date": _format_date(event.date), "title": event.title, "notes": event.notes}
        for event in contact.events
    ]
    record["ooo_periods"] = [
        {
            "start_date": _format_date(period.start_date),
            "end_date": _format_date(period.end_date),
            "label": period.label,
        }
        for period in contact.ooo_periods
    ]
    return record


def save_contacts(contacts: list[Contact], path: Path) -> None:
    """Write contacts to a JSON data file.

    The document is written beside the target first and then moved into
    place, so a failed write leaves the old file intact.

    Args:
        contacts: Contacts to write, in order
        path: Data file location

    Raises:
        DataFileError: If the file cannot be written
    """
    document = {"contacts": [contact_to_record(contact) for contact in contacts]}
    temp_path = path.with_name(path.name + ".tmp")
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2)
            f.write("\n")
        temp_path.replace(path)
    except OSError as e:
        raise DataFileError(f"Cannot write data file {path}: {e}") from e

    logger.info(
        f"Saved {len(contacts)} contacts",
        extra={"context": {"path": str(path)}},
    )
