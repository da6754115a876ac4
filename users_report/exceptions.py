class UsersReportError(Exception):
    """Base exception for users report errors."""
    pass

class ConfigurationError(UsersReportError):
    """Raised when the run configuration is missing or invalid."""
    pass

class DirectorySourceError(UsersReportError):
    """Raised when the list of eligible users cannot be retrieved."""
    pass

class LookupFailure(UsersReportError):
    """Raised when a per-user lookup fails or times out."""

    def __init__(self, lookup: str, user_id, message: str = ""):
        self.lookup = lookup
        self.user_id = user_id
        super().__init__(message or f"{lookup} lookup failed for user {user_id}")

class StorageError(UsersReportError):
    """Raised when the report artifact cannot be persisted."""
    pass

class NotificationError(UsersReportError):
    """Raised when the report email cannot be sent."""
    pass
