"""Domain error taxonomy shared by repositories, use-cases and routers."""

from typing import Optional


class FinApiError(Exception):
    """Base class for errors the HTTP layer knows how to translate."""

    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(FinApiError):
    default_message = "Your requested Item is not found"


class Conflict(FinApiError):
    default_message = "Your Item already exist"


class WrongPassword(FinApiError):
    default_message = "Wrong password"


class BadParamInput(FinApiError, ValueError):
    default_message = "Given Param is not valid"


class InternalServerError(FinApiError):
    pass


class TokenError(Exception):
    """Raised when a bearer token cannot be verified."""
