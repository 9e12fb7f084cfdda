"""Engine package - Business logic layer.

This package contains all business logic:
    - Contact status and due-date calculation
    - Status text and cadence metadata for display
    - Needs-attention list, dashboard counts and snoozing

Modules:
    - cadence: Cadence engine (pure functions)
    - attention: Needs-attention list and snooze handling
"""

from src.engine.attention import (
    SNOOZE_OPTIONS,
    AttentionItem,
    DashboardStats,
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
from src.engine.cadence import (
    CADENCE_OPTIONS,
    PRESET_CADENCES,
    CadenceOption,
    ContactStatus,
    calculate_contact_status,
    days_between,
    find_next_available_date,
    get_annual_frequency,
    get_annual_frequency_text,
    get_status_color,
    get_status_text,
    is_preset_cadence,
    project_due_date,
)

__all__ = [
    # Cadence
    "CADENCE_OPTIONS",
    "PRESET_CADENCES",
    "CadenceOption",
    "ContactStatus",
    "calculate_contact_status",
    "days_between",
    "find_next_available_date",
    "get_annual_frequency",
    "get_annual_frequency_text",
    "get_status_color",
    "get_status_text",
    "is_preset_cadence",
    "project_due_date",
    # Attention
    "SNOOZE_OPTIONS",
    "AttentionItem",
    "DashboardStats",
    "build_needs_attention",
    "bulk_snooze",
    "get_contact_due_date",
    "get_contact_status",
    "is_snoozed",
    "select_contacts_due_in_range",
    "snooze_contact",
    "snooze_until",
    "summarize",
]
