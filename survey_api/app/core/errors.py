"""
Error hierarchy for the Survey API.

Every failure a handler can produce is a ``SurveyAPIError`` carrying
the HTTP status it maps to.  The handlers registered in
``api.error_handlers`` turn these into ``{"message": ...}`` bodies, so
route code only ever raises; it never builds error responses itself.
"""

from fastapi import status


UNKNOWN_SERVER_ERROR = "Unknown server error"


class SurveyAPIError(Exception):
    """Base exception for all Survey API errors."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"message": self.message}


class ValidationError(SurveyAPIError):
    """A write violated a schema or store constraint."""

    http_status = status.HTTP_400_BAD_REQUEST


class UnknownServerError(SurveyAPIError):
    """A store failure with no structured detail."""

    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = UNKNOWN_SERVER_ERROR):
        super().__init__(message)


class NotFoundError(SurveyAPIError):
    """A lookup by identifier yielded no record."""

    http_status = status.HTTP_404_NOT_FOUND


class AuthenticationError(SurveyAPIError):
    """The route requires a logged-in caller and there is none."""

    http_status = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "User is not logged in"):
        super().__init__(message)


class AuthorizationError(SurveyAPIError):
    """The caller lacks the required role or ownership."""

    http_status = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "User is not authorized"):
        super().__init__(message)
