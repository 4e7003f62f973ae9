"""
Application error types and their HTTP rendering.

Every failure raised while serving a palette is a ``PaletteError``. All of
them render the same way: a plain-text body of the form
``"Something went wrong: <message>"``. By default every error maps to
500. With status classification enabled, invalid caller input maps to 400
and provider failures stay at 500.
"""

from fastapi import status
from fastapi.responses import PlainTextResponse

ERROR_BODY_PREFIX = "Something went wrong: "


class PaletteError(Exception):
    """Base error for anything that fails while handling a request."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    classified_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def response_status(self, classify: bool = False) -> int:
        """Status code to answer with, honoring the classification toggle."""
        return self.classified_status_code if classify else self.status_code


class InvalidInputError(PaletteError):
    """The caller supplied something that cannot be parsed."""

    classified_status_code = status.HTTP_400_BAD_REQUEST


class InvalidColorError(InvalidInputError):
    """A color string is not 6 (RGB) or 8 (ARGB) hex digits."""


class InvalidThemeTypeError(InvalidInputError):
    """``theme_type`` is not one of the recognized literals."""


class ProviderError(PaletteError):
    """The color theme provider failed while building a theme."""


def error_response(message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> PlainTextResponse:
    """Render an error message as the uniform plain-text error response."""
    return PlainTextResponse(f"{ERROR_BODY_PREFIX}{message}", status_code=status_code)
