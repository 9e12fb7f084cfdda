"""Tether Test Suite.

Test organization mirrors src/ structure:
    tests/
    ├── conftest.py          # Shared fixtures (fixed now, contact factory)
    ├── test_cli.py          # tether.py entry point
    ├── test_core/           # Config, logging, exceptions
    ├── test_db/             # Records, validation, intake
    └── test_engine/         # Cadence engine, attention and snoozing
"""
