"""
Error handling utilities
"""

from typing import Optional
from taskboard.models.response import ErrorResponse
from taskboard.utils.logger import logger


class TaskBoardError(Exception):
    """Base exception for task board errors"""
    pass


class APIError(TaskBoardError):
    """API error exception"""
    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class NotFoundError(APIError):
    """Remote resource does not exist (HTTP 404)"""
    def __init__(self, message: str):
        super().__init__(message, error_code="404")


class ValidationError(TaskBoardError):
    """Validation error exception (caller broke an operation's contract)"""
    pass


def handle_error(error: Exception) -> ErrorResponse:
    """
    Handle error and return user-friendly message

    Args:
        error: Exception to handle

    Returns:
        ErrorResponse with user-friendly message
    """
    logger.error(f"Error occurred: {error}", exc_info=True)

    if isinstance(error, NotFoundError):
        return ErrorResponse(
            message=error.message,
            error_code=error.error_code,
        )

    if isinstance(error, APIError):
        return ErrorResponse(
            message=f"API error: {error.message}",
            error_code=error.error_code,
        )

    if isinstance(error, ValidationError):
        return ErrorResponse(
            message=f"Validation error: {str(error)}",
        )

    # Generic error message
    return ErrorResponse(
        message="Something went wrong. Please try again later.",
    )


def format_error_message(error: Exception) -> str:
    """
    Format error message for user

    Args:
        error: Exception to format

    Returns:
        User-friendly error message
    """
    error_response = handle_error(error)
    return error_response.message


def describe_failure(error: BaseException) -> str:
    """Short message for an exception raised by a persistence call"""
    if isinstance(error, APIError):
        return error.message
    text = str(error)
    return text or error.__class__.__name__
