"""Tether Source Package.

Personal relationship manager: contacts, interactions, and when
each contact is due for outreach.

Layers:
    - core: Configuration, logging, exceptions
    - db: Contact records, validation, intake
    - engine: Cadence engine, needs-attention and snoozing
"""

__version__ = "0.1.0"
