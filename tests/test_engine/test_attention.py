"""Tests for needs-attention list, dashboard counts and snoozing."""

from datetime import datetime, timedelta

import pytest

from src.core.exceptions import ValidationError
from src.engine.attention import (
    SNOOZE_OPTIONS,
    build_needs_attention,
    bulk_snooze,
    get_contact_due_date,
    get_contact_status,
    is_snoozed,
    select_contacts_due_in_range,
    snooze_contact,
    snooze_until,
    summarize,
)


class TestContactStatus:
    """Test status computed from a contact record."""

    def test_partitions_events(self, make_contact, now):
        """Past events set the last date, future events the planned one."""
        contact = make_contact(cadence_days=14, event_offsets=(-40, -20, 5, 9))
        status = get_contact_status(contact, now)
        assert status.days_since_last_event == 20
        assert status.has_upcoming_event is True
        assert status.days_until_next_event == 5

    def test_only_past_events(self, make_contact, now):
        contact = make_contact(cadence_days=14, event_offsets=(-20,))
        status = get_contact_status(contact, now)
        assert status.is_overdue is True
        assert status.days_until_due == -6

    def test_due_date_projection(self, make_contact, now):
        contact = make_contact(cadence_days=14, event_offsets=(-20, 5))
        assert get_contact_due_date(contact, now) == now + timedelta(days=19)


class TestSnooze:
    """Test single-contact snoozing."""

    def test_options(self):
        assert [o.days for o in SNOOZE_OPTIONS] == [7, 14, 30]

    def test_snooze_until(self, now):
        assert snooze_until(14, now) == now + timedelta(days=14)

    def test_snooze_until_none_clears(self, now):
        assert snooze_until(None, now) is None

    @pytest.mark.parametrize("days", [0, -3, 1.5, True, "7"])
    def test_snooze_until_rejects_bad_lengths(self, now, days):
        with pytest.raises(ValidationError):
            snooze_until(days, now)

    def test_snooze_and_clear(self, make_contact, now):
        contact = make_contact()
        snooze_contact(contact, 7, now)
        assert is_snoozed(contact, now) is True
        assert is_snoozed(contact, now + timedelta(days=7)) is False

        snooze_contact(contact, None, now)
        assert contact.snoozed_until is None
        assert is_snoozed(contact, now) is False

    def test_expired_snooze(self, make_contact, now):
        contact = make_contact(snoozed_for=-1)
        assert is_snoozed(contact, now) is False


class TestNeedsAttention:
    """Test the needs-attention list."""

    def test_membership_and_order(self, sample_contacts, now):
        """Overdue first, then due by days until due; snoozed excluded."""
        items = build_needs_attention(sample_contacts, now)
        assert [item.contact.name for item in items] == ["Overdue", "Never", "Due"]

    def test_most_overdue_first(self, make_contact, now):
        contacts = [
            make_contact("A", cadence_days=14, event_offsets=(-16,)),
            make_contact("B", cadence_days=14, event_offsets=(-30,)),
            make_contact("C", cadence_days=14, event_offsets=(-10,)),
        ]
        items = build_needs_attention(contacts, now)
        assert [item.contact.name for item in items] == ["B", "A", "C"]
        assert items[0].status.days_until_due == -16

    def test_item_carries_last_event_date(self, make_contact, now):
        contact = make_contact(cadence_days=14, event_offsets=(-30, -20))
        (item,) = build_needs_attention([contact], now)
        assert item.last_event_date == now - timedelta(days=20)

    def test_empty(self, now):
        assert build_needs_attention([], now) == []


class TestSummarize:
    """Test dashboard counts."""

    def test_counts(self, sample_contacts, now):
        stats = summarize(sample_contacts, now)
        assert stats.total_contacts == 9
        assert stats.overdue_contacts == 1
        assert stats.due_contacts == 2

    def test_snoozed_counted_after_expiry(self, sample_contacts, now):
        """Once the snooze ends the contact counts as overdue again."""
        later = now + timedelta(days=6)
        stats = summarize(sample_contacts, later)
        snoozed = next(c for c in sample_contacts if c.name == "Snoozed")
        assert is_snoozed(snoozed, later) is False
        assert get_contact_status(snoozed, later).is_overdue is True
        assert stats.overdue_contacts >= 2


class TestBulkSnooze:
    """Test bulk snooze selection and application."""

    def test_selects_due_in_range(self, make_contact, now):
        """Only contacts with a projected due date in the range are picked."""
        contacts = [
            make_contact("InRange", cadence_days=14, event_offsets=(-10,)),  # due +4
            make_contact("Before", cadence_days=14, event_offsets=(-20,)),  # due -6
            make_contact("After", cadence_days=30, event_offsets=(-1,)),  # due +29
            make_contact("NoCadence", cadence_days=None, event_offsets=(-10,)),
            make_contact("Snoozed", cadence_days=14, event_offsets=(-10,), snoozed_for=3),
        ]
        selected = select_contacts_due_in_range(
            contacts, now + timedelta(days=1), now + timedelta(days=7), now
        )
        assert [c.name for c in selected] == ["InRange"]

    def test_range_covers_whole_days(self, make_contact, now):
        """Due dates anywhere on the first or last day are included."""
        contacts = [
            make_contact("FirstDay", cadence_days=14, event_offsets=(-10,)),
            make_contact("LastDay", cadence_days=14, event_offsets=(-7,)),
        ]
        # Range boundaries at midnight, due dates at noon
        start = datetime(2026, 3, 19)
        end = datetime(2026, 3, 22)
        selected = select_contacts_due_in_range(contacts, start, end, now)
        assert [c.name for c in selected] == ["FirstDay", "LastDay"]

    def test_planned_event_moves_due_date(self, make_contact, now):
        """A planned interaction pushes the due date out of the range."""
        contact = make_contact("Planned", cadence_days=14, event_offsets=(-10, 2))
        selected = select_contacts_due_in_range(
            [contact], now + timedelta(days=1), now + timedelta(days=7), now
        )
        assert selected == []

    def test_never_seen_due_today(self, make_contact, now):
        contact = make_contact("Never", cadence_days=30)
        assert select_contacts_due_in_range([contact], now, now, now) == [contact]

    def test_bulk_snooze_applies(self, make_contact, now):
        contacts = [
            make_contact("A", cadence_days=14, event_offsets=(-10,)),
            make_contact("B", cadence_days=14, event_offsets=(-11,)),
            make_contact("C", cadence_days=90, event_offsets=(-1,)),
        ]
        count = bulk_snooze(
            contacts, now + timedelta(days=1), now + timedelta(days=7), 14, now
        )
        assert count == 2
        assert contacts[0].snoozed_until == now + timedelta(days=14)
        assert contacts[1].snoozed_until == now + timedelta(days=14)
        assert contacts[2].snoozed_until is None

    def test_bulk_snooze_none_in_range(self, make_contact, now):
        contacts = [make_contact("C", cadence_days=90, event_offsets=(-1,))]
        assert bulk_snooze(contacts, now, now + timedelta(days=2), 7, now) == 0

    def test_bulk_snooze_rejects_bad_length_before_changes(self, make_contact, now):
        contact = make_contact("A", cadence_days=14, event_offsets=(-10,))
        with pytest.raises(ValidationError):
            bulk_snooze([contact], now, now + timedelta(days=7), 0, now)
        assert contact.snoozed_until is None
