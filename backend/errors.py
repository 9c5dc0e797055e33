"""Exceptions raised by the backend modules."""

from __future__ import annotations


class EmptySessionError(ValueError):
    """Raised when finishing a session that has no logged sets.

    The active session is left untouched so the user can keep logging.
    """


class StoreUnavailableError(OSError):
    """Raised when the persistent store cannot be read or written."""


class InvalidImportError(ValueError):
    """Raised when an import payload does not look like exported state."""


class SessionInProgressError(RuntimeError):
    """Raised when starting a session while another one is still open."""


class TemplateNotFoundError(LookupError):
    """Raised when a program, workout or history record cannot be found."""


class TemplateValidationError(ValueError):
    """Raised when a program, workout or exercise fails builder validation."""


class NoActiveSessionError(RuntimeError):
    """Raised when a logging operation runs without an open session."""
