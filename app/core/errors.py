# app/core/errors.py
"""
Error taxonomy shared by the coaching core and the HTTP layer.

Every error carries the status code it is surfaced with; the handlers in
main.py render them as {"error": message}.
"""


class CoachError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        return self.message


class ValidationError(CoachError):
    """Caller input missing or empty."""

    status_code = 400


class PreconditionError(CoachError):
    """Operation invoked on an empty conversation."""

    status_code = 400


class AuthorizationError(CoachError):
    status_code = 401


class MalformedResponseError(CoachError):
    """
    Model output could not be coerced into the required JSON.
    The raw text is kept for logs and never shown to the end user.
    """

    status_code = 500

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw

    @property
    def public_message(self) -> str:
        return "The coach returned an analysis that could not be read. Please try again."


class CollaboratorError(CoachError):
    """Model provider or storage call failed."""

    status_code = 500
