"""Errors raised by destination actions."""

from __future__ import annotations

import httpx


class PayloadValidationError(ValueError):
    """Raised when a payload cannot be sent as given; retrying will not help."""


class CustomerNotFoundError(LookupError):
    """Raised when an action needs an existing customer and none matches."""


class UnexpectedStatusError(httpx.HTTPStatusError):
    """Raised when a destination answers with a success status other than the one expected."""

    def __init__(self, message: str, *, expected: int, response: httpx.Response) -> None:
        super().__init__(message, request=response.request, response=response)
        self.expected = expected
