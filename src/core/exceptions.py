"""Tether Exception Hierarchy.

All custom exceptions inherit from TetherError.
The cadence engine itself raises nothing; these cover the layers
around it (configuration, data entry, intake).

Exception Hierarchy:
    TetherError (base)
    ├── ConfigurationError
    ├── ValidationError
    └── DataFileError
"""


class TetherError(Exception):
    """Base exception for all Tether errors.

    All custom exceptions in Tether inherit from this class,
    allowing for broad exception handling at the CLI boundary.
    """

    pass


class ConfigurationError(TetherError):
    """Configuration is invalid or missing.

    Raised when:
        - A numeric setting cannot be parsed
        - Path is not writable
    """

    pass


class ValidationError(TetherError):
    """Data validation failed.

    Raised when:
        - OOO period ends before it starts
        - OOO label is too long
        - Cadence or snooze length is not a positive integer
        - Contact record is missing a required field
    """

    pass


class DataFileError(TetherError):
    """Contact data file could not be read.

    Raised when:
        - File does not exist
        - File is not valid JSON
        - Top-level layout is wrong
    """

    pass
