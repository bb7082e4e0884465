"""
Custom exceptions for the league with user-friendly error messages.
"""


class LeagueException(Exception):
    """Base exception for league errors."""

    status_code = 500

    def __init__(self, message, user_message=None, details=None):
        super().__init__(message)
        self.user_message = user_message or message
        self.details = details or []

    def to_dict(self):
        payload = {"error": self.user_message}
        if self.details:
            payload["details"] = self.details
        return payload


class ScoreValidationError(LeagueException):
    """Raised when a score or prediction in a batch is out of range.

    ``details`` holds one entry per invalid value, naming the field and the
    bowler/game it belongs to. Nothing from the batch is saved.
    """

    status_code = 400

    def __init__(self, details):
        super().__init__(
            f"{len(details)} invalid value(s) in batch",
            "Some values are invalid. Nothing was saved.",
            details,
        )


class MissingDataError(LeagueException):
    """Raised when a bowler or week looked up by id does not exist."""

    status_code = 404

    def __init__(self, kind, identifier):
        super().__init__(
            f"{kind} {identifier} not found", f"{kind.capitalize()} not found"
        )
        self.kind = kind
        self.identifier = identifier


class WeekLockedError(LeagueException):
    """Raised when writing to a week that no longer accepts that write."""

    status_code = 409

    def __init__(self, week_number, reason):
        super().__init__(
            f"Week {week_number} rejected write: {reason}",
            f"Week {week_number} is {reason}",
        )
        self.week_number = week_number


class StorageError(LeagueException):
    """Raised when a database operation fails."""

    status_code = 503

    def __init__(self, operation, details=None):
        super().__init__(
            f"Database error during {operation}: {details}",
            "Could not save changes. Please try again later.",
        )
        self.operation = operation
