"""Exceptions raised by the Alfen Eve client."""


class AlfenError(Exception):
    """Base exception for Alfen Eve failures."""


class AuthError(AlfenError):
    """Raised when logging in to the charger fails."""


class RequestError(AlfenError):
    """Raised when a property request or logout fails."""


class CapabilityWriteError(AlfenError):
    """Raised when a capability cannot be registered or written."""

    def __init__(self, capability_id: str, message: str) -> None:
        super().__init__(message)
        self.capability_id = capability_id
