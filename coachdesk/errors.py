from __future__ import annotations


class CoachDeskError(RuntimeError):
    """Base for every failure the data layer surfaces to a view."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CoachDeskError):
    """Malformed or out-of-range input. The user must correct and resubmit."""


class NotFoundError(CoachDeskError):
    pass


class TransportError(CoachDeskError):
    """Backend unreachable, timed out, or answered non-2xx without an error body."""


class UnhandledError(CoachDeskError):
    pass
