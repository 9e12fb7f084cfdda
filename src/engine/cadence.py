"""Cadence engine: due dates and contact status.

Given the temporal facts about one contact (last interaction, desired
cadence, next planned interaction, out-of-office periods) compute whether
the contact is due, due soon, overdue, away, or already planned.

Everything here is a pure function of its arguments. The current instant
is captured once per top-level call and threaded through every helper,
so a single call never straddles a day boundary. Inputs are not validated;
see src.db.models for data-entry checks.

Usage:
    from src.engine.cadence import calculate_contact_status, get_status_text

    status = calculate_contact_status(last_event_date, 30, None, periods)
    print(get_status_text(status))
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional, Union

from src.db.models import OOOPeriod

ONE_DAY = timedelta(days=1)

# Urgency bands over days_until_due
DUE_WINDOW_DAYS = 7
DUE_SOON_WINDOW_DAYS = 14

DAYS_PER_YEAR = 365


# =============================================================================
# CADENCE OPTIONS
# =============================================================================


@dataclass(frozen=True)
class CadenceOption:
    """One entry of the cadence picker.

    Attributes:
        label: Display label
        value: Days, "custom" for free entry, or None for no target
    """

    label: str
    value: Union[int, str, None]


CADENCE_OPTIONS = (
    CadenceOption("Weekly", 7),
    CadenceOption("Biweekly", 14),
    CadenceOption("Monthly", 30),
    CadenceOption("Quarterly", 90),
    CadenceOption("Custom", "custom"),
    CadenceOption("No target", None),
)

PRESET_CADENCES = frozenset(
    option.value for option in CADENCE_OPTIONS if isinstance(option.value, int)
)


def is_preset_cadence(days: Optional[int]) -> bool:
    """Check whether a cadence matches one of the preset choices.

    Args:
        days: Cadence in days, or None

    Returns:
        True for None or a preset value, False for a custom cadence
    """
    if days is None:
        return True
    return days in PRESET_CADENCES


# =============================================================================
# STATUS
# =============================================================================


@dataclass
class ContactStatus:
    """Derived status of one contact at one instant.

    Computed fresh on every query and never stored.

    Attributes:
        days_since_last_event: Whole days since the last interaction
        days_until_due: Signed days until due; zero or negative means overdue
        is_due: Due within the next week
        is_due_soon: Due in 8 to 14 days
        is_overdue: Due date reached or passed
        has_cadence: A cadence was supplied
        has_upcoming_event: An interaction is already planned
        days_until_next_event: Whole days until the planned interaction
        is_away: Now falls inside an OOO period
        days_until_back: Whole days until the active OOO period ends
        current_ooo_period: The active OOO period, if any
        upcoming_ooo_count: Periods that start after now
    """

    days_since_last_event: Optional[int]
    days_until_due: Optional[int]
    is_due: bool
    is_due_soon: bool
    is_overdue: bool
    has_cadence: bool
    has_upcoming_event: bool
    days_until_next_event: Optional[int]
    is_away: bool
    days_until_back: Optional[int]
    current_ooo_period: Optional[OOOPeriod] = None
    upcoming_ooo_count: int = 0


def days_between(start: datetime, end: datetime) -> int:
    """Whole days from start to end, floored, sign preserved.

    Args:
        start: Earlier instant (or later, for a negative result)
        end: Instant to measure to

    Returns:
        floor((end - start) / 1 day)
    """
    # timedelta normalises so that .days is already the floor
    return (end - start).days


def resolve_now(now: Optional[datetime], *dates: Optional[datetime]) -> datetime:
    """Capture the current instant once, matching the inputs' awareness.

    Args:
        now: Explicit instant; returned unchanged when given
        dates: Input dates used to pick a timezone when now is omitted

    Returns:
        The instant the whole computation is measured against
    """
    if now is not None:
        return now
    for value in dates:
        if value is not None:
            return datetime.now(value.tzinfo)
    return datetime.now()


def find_current_ooo_period(
    ooo_periods: Iterable[OOOPeriod], now: datetime
) -> Optional[OOOPeriod]:
    """Return the first period containing now, or None."""
    for period in ooo_periods:
        if period.contains(now):
            return period
    return None


def find_next_available_date(candidate: datetime, ooo_periods: Iterable[OOOPeriod]) -> datetime:
    """Move a date past every OOO period it lands in.

    Whenever the candidate falls inside a period it jumps to the day after
    that period ends, and all periods are scanned again, since the new
    date may sit inside another (overlapping or back-to-back) period.
    Each jump strictly increases the candidate and the set of periods is
    finite, so the loop reaches a date outside every period.

    Args:
        candidate: Proposed due date
        ooo_periods: Periods in any order

    Returns:
        First date at or after candidate that is outside every period
    """
    periods = list(ooo_periods)
    while True:
        blocking = find_current_ooo_period(periods, candidate)
        if blocking is None:
            return candidate
        candidate = blocking.end_date + ONE_DAY


def calculate_contact_status(
    last_event_date: Optional[datetime],
    cadence_days: Optional[int],
    next_event_date: Optional[datetime] = None,
    ooo_periods: Iterable[OOOPeriod] = (),
    now: Optional[datetime] = None,
) -> ContactStatus:
    """Compute a contact's status.

    An active OOO period or an already planned interaction suppresses all
    due/overdue flags. A contact with a cadence who has never been seen is
    due now, unless away or planned.

    Args:
        last_event_date: Most recent past interaction, or None
        cadence_days: Desired days between interactions, or None
        next_event_date: Nearest future planned interaction, or None
        ooo_periods: All of the contact's OOO periods, unfiltered
        now: Current instant; captured once here when omitted

    Returns:
        ContactStatus for this instant
    """
    periods = list(ooo_periods)
    now = resolve_now(now, last_event_date, next_event_date)

    current_period = find_current_ooo_period(periods, now)
    is_away = current_period is not None
    days_until_back = days_between(now, current_period.end_date) if current_period else None
    upcoming_ooo_count = sum(1 for period in periods if period.start_date > now)

    has_cadence = cadence_days is not None
    has_upcoming_event = next_event_date is not None
    days_since = days_between(last_event_date, now) if last_event_date is not None else None
    days_until_next = (
        days_between(now, next_event_date) if next_event_date is not None else None
    )

    if last_event_date is None or cadence_days is None:
        return ContactStatus(
            days_since_last_event=days_since,
            days_until_due=None,
            is_due=(
                not is_away
                and last_event_date is None
                and has_cadence
                and not has_upcoming_event
            ),
            is_due_soon=False,
            is_overdue=False,
            has_cadence=has_cadence,
            has_upcoming_event=has_upcoming_event,
            days_until_next_event=days_until_next,
            is_away=is_away,
            days_until_back=days_until_back,
            current_ooo_period=current_period,
            upcoming_ooo_count=upcoming_ooo_count,
        )

    base_due_date = last_event_date + timedelta(days=cadence_days)
    due_date = find_next_available_date(base_due_date, periods)
    days_until_due = days_between(now, due_date)

    can_flag = not is_away and not has_upcoming_event

    return ContactStatus(
        days_since_last_event=days_since,
        days_until_due=days_until_due,
        is_due=can_flag and 0 < days_until_due <= DUE_WINDOW_DAYS,
        is_due_soon=can_flag and DUE_WINDOW_DAYS < days_until_due <= DUE_SOON_WINDOW_DAYS,
        is_overdue=can_flag and days_until_due <= 0,
        has_cadence=has_cadence,
        has_upcoming_event=has_upcoming_event,
        days_until_next_event=days_until_next,
        is_away=is_away,
        days_until_back=days_until_back,
        current_ooo_period=current_period,
        upcoming_ooo_count=upcoming_ooo_count,
    )


def project_due_date(
    last_event_date: Optional[datetime],
    cadence_days: Optional[int],
    next_event_date: Optional[datetime] = None,
    ooo_periods: Iterable[OOOPeriod] = (),
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    """Project when a contact will next be due.

    A planned interaction resets the clock, so the projection is anchored
    on it when present, otherwise on the last interaction. A contact never
    seen is due now. The result is moved past any OOO period.

    Args:
        last_event_date: Most recent past interaction, or None
        cadence_days: Desired days between interactions, or None
        next_event_date: Nearest future planned interaction, or None
        ooo_periods: All of the contact's OOO periods
        now: Current instant; captured once here when omitted

    Returns:
        Projected due date, or None when there is no cadence
    """
    if cadence_days is None:
        return None

    anchor = next_event_date if next_event_date is not None else last_event_date
    if anchor is None:
        candidate = resolve_now(now)
    else:
        candidate = anchor + timedelta(days=cadence_days)

    return find_next_available_date(candidate, ooo_periods)


# =============================================================================
# PRESENTATION HELPERS
# =============================================================================


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def get_status_text(status: ContactStatus) -> str:
    """Render a status as a short badge text.

    Branches are checked in priority order; the first match wins.

    Args:
        status: Computed status

    Returns:
        Text such as "Away for 3 days" or "6 days overdue"
    """
    if status.is_away:
        if status.days_until_back == 0:
            return "Back today"
        if status.days_until_back == 1:
            return "Back tomorrow"
        return f"Away for {status.days_until_back} days"
    if status.has_upcoming_event:
        if status.days_until_next_event == 0:
            return "Planned for today"
        if status.days_until_next_event == 1:
            return "Planned for tomorrow"
        return f"Planned in {status.days_until_next_event} days"
    if not status.has_cadence:
        return "No cadence set"
    if status.days_until_due is None:
        return "Never seen"
    if status.is_overdue:
        return f"{_plural(abs(status.days_until_due), 'day')} overdue"
    if status.is_due:
        return f"Due in {_plural(status.days_until_due, 'day')}"
    return f"{status.days_until_due} days until due"


def get_status_color(status: ContactStatus) -> str:
    """Badge variant for a status."""
    if status.is_overdue:
        return "destructive"
    if status.is_due:
        return "warning"
    return "success"


def get_annual_frequency(cadence_days: Optional[int]) -> Optional[int]:
    """How many interactions per year a cadence works out to.

    Rounds half up, so 730-day cadences give 1 rather than 0.

    Args:
        cadence_days: Cadence in days, or None

    Returns:
        Rounded interactions per year, or None without a cadence
    """
    if not cadence_days:
        return None
    return math.floor(DAYS_PER_YEAR / cadence_days + 0.5)


def get_annual_frequency_text(cadence_days: Optional[int]) -> str:
    """Format the annual frequency, e.g. "~52x per year"; empty without cadence."""
    frequency = get_annual_frequency(cadence_days)
    if frequency is None:
        return ""
    return f"~{frequency}x per year"
