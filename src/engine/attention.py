"""Needs-attention list, dashboard counts and snoozing.

Snoozing is separate from OOO periods: it is a per-contact
snoozed_until instant that hides a contact from the needs-attention
list without changing its computed status.

Usage:
    from src.engine.attention import build_needs_attention, bulk_snooze

    items = build_needs_attention(contacts, now)
    count = bulk_snooze(contacts, range_start, range_end, snooze_days=14, now=now)
"""

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional

from src.core.exceptions import ValidationError
from src.core.logging import get_logger
from src.db.models import Contact, partition_events
from src.engine.cadence import (
    ContactStatus,
    calculate_contact_status,
    project_due_date,
    resolve_now,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class SnoozeOption:
    """One entry of the snooze menu."""

    label: str
    days: int


SNOOZE_OPTIONS = (
    SnoozeOption("1 week", 7),
    SnoozeOption("2 weeks", 14),
    SnoozeOption("1 month", 30),
)


@dataclass
class AttentionItem:
    """A contact that needs outreach.

    Attributes:
        contact: The contact record
        status: Status computed at list-building time
        last_event_date: Date of the most recent past interaction
    """

    contact: Contact
    status: ContactStatus
    last_event_date: Optional[datetime]


@dataclass
class DashboardStats:
    """Headline counts for the dashboard.

    Attributes:
        total_contacts: Every contact, snoozed or not
        overdue_contacts: Overdue and not snoozed
        due_contacts: Due within a week and not snoozed
    """

    total_contacts: int = 0
    overdue_contacts: int = 0
    due_contacts: int = 0


# =============================================================================
# STATUS
# =============================================================================


def get_contact_status(contact: Contact, now: datetime) -> ContactStatus:
    """Partition a contact's events at now and compute its status."""
    last_event, next_event = partition_events(contact.events, now)
    return calculate_contact_status(
        last_event.date if last_event else None,
        contact.cadence_days,
        next_event.date if next_event else None,
        contact.ooo_periods,
        now=now,
    )


def get_contact_due_date(contact: Contact, now: datetime) -> Optional[datetime]:
    """Project a contact's next due date (None without cadence)."""
    last_event, next_event = partition_events(contact.events, now)
    return project_due_date(
        last_event.date if last_event else None,
        contact.cadence_days,
        next_event.date if next_event else None,
        contact.ooo_periods,
        now=now,
    )


# =============================================================================
# SNOOZE
# =============================================================================


def is_snoozed(contact: Contact, now: datetime) -> bool:
    """True while the contact's snooze has not yet expired."""
    return contact.snoozed_until is not None and contact.snoozed_until > now


def snooze_until(days: Optional[int], now: datetime) -> Optional[datetime]:
    """Compute when a snooze of the given length ends.

    Args:
        days: Snooze length in days, or None to clear
        now: Current instant

    Returns:
        End of the snooze, or None when clearing

    Raises:
        ValidationError: If days is not a positive integer
    """
    if days is None:
        return None
    if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
        raise ValidationError(f"Snooze length must be a positive number of days, got {days!r}")
    return now + timedelta(days=days)


def snooze_contact(contact: Contact, days: Optional[int], now: datetime) -> Contact:
    """Set or clear a contact's snooze.

    Args:
        contact: Contact to update in place
        days: Snooze length in days, or None to clear
        now: Current instant

    Returns:
        The same contact, for chaining
    """
    contact.snoozed_until = snooze_until(days, now)
    logger.info(
        "Snooze cleared" if days is None else "Contact snoozed",
        extra={
            "context": {
                "contact": contact.id or contact.name,
                "snoozed_until": str(contact.snoozed_until),
            }
        },
    )
    return contact


def select_contacts_due_in_range(
    contacts: list[Contact],
    range_start: datetime,
    range_end: datetime,
    now: Optional[datetime] = None,
) -> list[Contact]:
    """Find contacts whose projected due date falls inside a date range.

    The range covers whole days: from the start of range_start's day to
    the end of range_end's day. Contacts without a cadence, or already
    snoozed, are skipped.

    Args:
        contacts: Candidates
        range_start: First day of the range
        range_end: Last day of the range
        now: Current instant

    Returns:
        Contacts due within the range, in input order
    """
    now = resolve_now(now, range_start)
    window_start = datetime.combine(range_start.date(), time.min, tzinfo=range_start.tzinfo)
    window_end = datetime.combine(range_end.date(), time.max, tzinfo=range_end.tzinfo)

    selected: list[Contact] = []
    for contact in contacts:
        if contact.cadence_days is None or is_snoozed(contact, now):
            continue
        due_date = get_contact_due_date(contact, now)
        if due_date is not None and window_start <= due_date <= window_end:
            selected.append(contact)
    return selected


def bulk_snooze(
    contacts: list[Contact],
    range_start: datetime,
    range_end: datetime,
    snooze_days: int,
    now: Optional[datetime] = None,
) -> int:
    """Snooze every contact due within a date range.

    Args:
        contacts: Candidates, updated in place
        range_start: First day of the range
        range_end: Last day of the range
        snooze_days: Snooze length in days
        now: Current instant

    Returns:
        Number of contacts snoozed

    Raises:
        ValidationError: If snooze_days is not a positive integer
    """
    now = resolve_now(now, range_start)
    # Fail before touching any contact
    snooze_until(snooze_days, now)

    selected = select_contacts_due_in_range(contacts, range_start, range_end, now)
    for contact in selected:
        snooze_contact(contact, snooze_days, now)

    logger.info(
        f"Snoozed {len(selected)} contacts",
        extra={
            "context": {
                "range_start": range_start.date().isoformat(),
                "range_end": range_end.date().isoformat(),
                "snooze_days": snooze_days,
            }
        },
    )
    return len(selected)


# =============================================================================
# NEEDS ATTENTION
# =============================================================================


def build_needs_attention(contacts: list[Contact], now: datetime) -> list[AttentionItem]:
    """Build the needs-attention list.

    Includes due and overdue contacts that are not snoozed.

    Ordered by:
        1. Overdue before due
        2. Fewest days until due (most overdue first)

    Args:
        contacts: All contacts
        now: Current instant

    Returns:
        Ordered attention items
    """
    items: list[AttentionItem] = []
    for contact in contacts:
        if is_snoozed(contact, now):
            continue
        status = get_contact_status(contact, now)
        if not (status.is_due or status.is_overdue):
            continue
        last_event, _ = partition_events(contact.events, now)
        items.append(
            AttentionItem(
                contact=contact,
                status=status,
                last_event_date=last_event.date if last_event else None,
            )
        )

    items.sort(
        key=lambda item: (
            0 if item.status.is_overdue else 1,
            item.status.days_until_due if item.status.days_until_due is not None else 0,
        )
    )
    return items


def summarize(contacts: list[Contact], now: datetime) -> DashboardStats:
    """Count contacts for the dashboard; snoozed contacts only count toward the total."""
    stats = DashboardStats(total_contacts=len(contacts))
    for contact in contacts:
        if is_snoozed(contact, now):
            continue
        status = get_contact_status(contact, now)
        if status.is_overdue:
            stats.overdue_contacts += 1
        elif status.is_due:
            stats.due_contacts += 1
    return stats
