"""Error taxonomy for zone timing operations."""


class ZoneTimingsError(Exception):
    """Base exception for the application."""


class StoreError(ZoneTimingsError):
    """Raised when the backing store cannot be reached or rejects a request."""


class PermissionDeniedError(ZoneTimingsError):
    """Raised when the store accepts a write but no rows are affected."""


class ValidationError(ZoneTimingsError):
    """Raised when inputs fail validation before any store call."""


class AuthenticationError(ZoneTimingsError):
    """Raised when sign-in fails or no session is active."""
