"""Exceptions raised by the authentication and registration services."""

from __future__ import annotations


class AuthError(Exception):
    """Base class for every authentication outcome other than success."""

    message = "Authentication failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class LockedOut(AuthError):
    """The source address is temporarily refused after repeated failures."""

    def __init__(self, retry_after_minutes: int, message: str | None = None) -> None:
        self.retry_after_minutes = retry_after_minutes
        super().__init__(
            message
            or "Too many failed login attempts. "
            f"Please try again in {retry_after_minutes} minutes."
        )


class InvalidCredentials(AuthError):
    """Username or password did not match."""

    message = "Invalid credentials."

    def __init__(self, remaining_attempts: int) -> None:
        self.remaining_attempts = remaining_attempts
        super().__init__()


class IncompleteLogin(AuthError):
    """Username or password was not supplied."""

    message = "Username and password are required."


class MissingCredential(AuthError):
    """No credential was presented."""

    message = "Authentication required."


class ExpiredCredential(AuthError):
    """The credential is unknown, revoked, or past its expiry."""

    message = "Session expired. Please login again."


class MalformedCredential(AuthError):
    """A token failed signature, format, or kind verification."""

    message = "Invalid or expired token."


class RegistrationError(Exception):
    """Base class for rejected registrations."""

    message = "Registration rejected."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class MissingFields(RegistrationError):
    message = "Missing required fields."


class UploadTooLarge(RegistrationError):
    message = "File size too large."


class DuplicateRegistration(RegistrationError):
    message = "Duplicate registration."


class RegistrationNotFound(RegistrationError):
    message = "Registration not found."


class UnknownImageKind(RegistrationError):
    message = 'Invalid image type. Use "cnic" or "payment".'
