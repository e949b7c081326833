"""
Exception classes for tracklink.

This module defines all custom exceptions used throughout the package.
The matching engine itself never raises for malformed-but-present text;
these exceptions cover configuration, input payloads that cannot be
turned into records at all, and invalid matcher arguments.

Exception Hierarchy:
    TrackLinkError (base)
        ConfigError - Configuration file issues
        RecordError - Input payload cannot be parsed into a record
        MatchingError - Invalid matcher arguments (threshold, strategy)
"""


class TrackLinkError(Exception):
    """
    Base exception for all tracklink errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch all tracklink errors with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., record ids, paths).

    Example:
        try:
            matches = find_best_matches(catalog, videos, threshold=150)
        except TrackLinkError as e:
            logger.error(f"Matching failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'file_path': Config or input file involved in the error
                     - 'field': The offending configuration field or payload key
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(TrackLinkError):
    """
    Raised when there's an issue with the configuration file.

    Common causes:
        - An explicitly given config file does not exist
        - The file has invalid YAML syntax
        - A field has the wrong type (e.g., threshold given as a string)
        - A value is out of range (e.g., threshold above 100)

    Example:
        raise ConfigError(
            "'matching.threshold' must be a number between 0 and 100",
            details={'field': 'matching.threshold', 'value': 140}
        )
    """
    pass


class RecordError(TrackLinkError):
    """
    Raised when an upstream payload cannot be turned into a record.

    Only structural problems raise this error: a payload that is not a
    mapping, or one without any identifier. Empty titles or artist names
    are NOT errors; they simply produce low similarity scores.

    Example:
        raise RecordError(
            "Video payload has no identifier",
            details={'keys': ['title', 'channel']}
        )
    """
    pass


class MatchingError(TrackLinkError):
    """
    Raised when the matcher is called with invalid arguments.

    Common causes:
        - Threshold outside the 0-100 confidence range
        - Unknown assignment strategy name
    """
    pass
