"""Tests for exception hierarchy."""

import pytest

from src.core.exceptions import (
    ConfigurationError,
    DataFileError,
    TetherError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test exception inheritance."""

    def test_all_exceptions_inherit_from_tethererror(self):
        """All custom exceptions should inherit from TetherError."""
        for exc_class in [ConfigurationError, ValidationError, DataFileError]:
            assert issubclass(exc_class, TetherError)

    def test_validation_error_does_not_shadow_builtins(self):
        """ValidationError is not a ValueError; callers catch it explicitly."""
        assert not issubclass(ValidationError, ValueError)


class TestExceptionMessages:
    """Test exceptions can be raised with messages."""

    def test_raise_with_message(self):
        with pytest.raises(DataFileError, match="not found"):
            raise DataFileError("Data file not found: x.json")

    def test_catch_as_base(self):
        """Errors from any layer can be caught as TetherError."""
        with pytest.raises(TetherError):
            raise ValidationError("End date must be on or after start date")
