"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class InvalidTicketError(AppError):
    """Raised when a ticket is unknown, expired, revoked, or for another competition."""

    def __init__(self, message="Invalid or expired ticket."):
        """Initialize the error."""
        super().__init__(message, 401)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class BracketNotFoundError(NotFoundError):
    """Raised when a competition has no bracket document."""

    def __init__(self, competition_id):
        """Initialize the error."""
        super().__init__(f"Bracket not found for competition {competition_id}.")
        self.competition_id = competition_id


class CompetitionNotFoundError(NotFoundError):
    """Raised when a competition document does not exist."""

    def __init__(self, competition_id):
        """Initialize the error."""
        super().__init__(f"Competition {competition_id} not found.")
        self.competition_id = competition_id


class MatchNotFoundError(NotFoundError):
    """Raised when a match id does not exist in the bracket."""

    def __init__(self, match_id):
        """Initialize the error."""
        super().__init__(f"Match {match_id} not found.")
        self.match_id = match_id


class ReportNotFoundError(NotFoundError):
    """Raised when no wrap report has been generated for a competition."""

    def __init__(self, competition_id):
        """Initialize the error."""
        super().__init__(f"Wrap report not found for competition {competition_id}.")
        self.competition_id = competition_id


class DataCorruptError(AppError):
    """Raised when a stored document lacks its expected structure."""

    def __init__(self, message="Stored data is corrupt."):
        """Initialize the error."""
        super().__init__(message, 422)


class BracketDataCorruptError(DataCorruptError):
    """Raised when a bracket document exists but has no parsable rounds."""

    def __init__(self, competition_id, detail="no parsable rounds"):
        """Initialize the error."""
        super().__init__(f"Bracket data for {competition_id} is corrupt: {detail}.")
        self.competition_id = competition_id


class ConcurrentUpdateError(AppError):
    """Raised when a bracket write is based on a stale version."""

    def __init__(self, message="The bracket was modified by another request."):
        """Initialize the error."""
        super().__init__(message, 409)


class AggregationError(AppError):
    """Raised when folding a report into the leaderboards fails."""

    def __init__(self, message="Leaderboard aggregation failed."):
        """Initialize the error."""
        super().__init__(message, 500)
