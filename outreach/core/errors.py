from __future__ import annotations

from typing import Iterable


class FormsError(Exception):
    """Base class for user-facing domain errors raised by the services layer.

    The API layer renders every subclass as ``{"error": message}`` with the
    class ``status_code``; none of them indicates a server fault.
    """

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def payload(self) -> dict:
        return {"error": self.message}


class NotFoundError(FormsError):
    status_code = 404


class DisabledFormError(FormsError):
    status_code = 403

    def __init__(self, message: str = "This form is currently disabled"):
        super().__init__(message)


class RegistrationClosedError(FormsError):
    status_code = 400

    def __init__(self, message: str = "This event does not accept online registrations"):
        super().__init__(message)


class CapacityExceededError(FormsError):
    status_code = 409

    def __init__(self, message: str = "This event has reached maximum capacity"):
        super().__init__(message)


class ValidationFailed(FormsError):
    status_code = 400

    def __init__(self, errors: Iterable):
        self.errors = list(errors)
        first = self.errors[0].message if self.errors else "Invalid submission"
        super().__init__(first)

    def payload(self) -> dict:
        return {
            "error": self.message,
            "field_errors": {err.field_id: err.message for err in self.errors},
        }
