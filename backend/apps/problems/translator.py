"""
Exception-to-problem-detail translation.

Classifies any error raised while handling a request into a closed set of
kinds, builds the client-safe ProblemDetail payload, writes one structured
log record with the full error and renders the application/problem+json
response.
"""

from enum import StrEnum
from functools import lru_cache
from http import HTTPStatus
from typing import Any, cast

from django.http import HttpResponse

from apps.core.clock import Clock, get_clock
from apps.core.logging import get_logger
from apps.problems.exceptions import (
    ApiError,
    DataNotFoundError,
    TokenExpiredError,
    ValidationParamsError,
)
from apps.problems.schemas import PROBLEM_CONTENT_TYPE, InvalidParamSchema, ProblemDetail

APPLICATION_ERROR_TITLE = "Application Error"
VALIDATION_ERROR_TITLE = "Validation Error"
TOKEN_ERROR_TITLE = "Token Error"
NOT_FOUND_TITLE = "Not Found"
INTERNAL_ERROR_TITLE = "Internal Server Error"

VALIDATION_ERROR_DETAIL = "Validation errors were found in the request."
INTERNAL_ERROR_DETAIL = "A technical problem occurred. Please try again later."


class ErrorKind(StrEnum):
    """Closed classification of request failures."""

    GENERAL_APPLICATION = "general_application_error"
    VALIDATION = "validation_error"
    AUTH_TOKEN_EXPIRED = "auth_token_expired"
    DATA_NOT_FOUND = "data_not_found"
    UNCLASSIFIED = "unclassified"


LOG_LEVELS: dict[ErrorKind, str] = {
    ErrorKind.GENERAL_APPLICATION: "info",
    ErrorKind.VALIDATION: "info",
    ErrorKind.AUTH_TOKEN_EXPIRED: "warning",
    ErrorKind.DATA_NOT_FOUND: "info",
    ErrorKind.UNCLASSIFIED: "error",
}


def classify(exc: BaseException) -> ErrorKind:
    """Map an error to its kind by concrete type, in precedence order."""
    match exc:
        case ApiError():
            return ErrorKind.GENERAL_APPLICATION
        case ValidationParamsError():
            return ErrorKind.VALIDATION
        case TokenExpiredError():
            return ErrorKind.AUTH_TOKEN_EXPIRED
        case DataNotFoundError():
            return ErrorKind.DATA_NOT_FOUND
        case _:
            return ErrorKind.UNCLASSIFIED


def status_phrase(status: int) -> str:
    """Standard reason phrase for a status code, or a generic fallback."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Error"


def render_problem(problem: ProblemDetail) -> HttpResponse:
    """Serialize a ProblemDetail into an application/problem+json response."""
    return HttpResponse(
        problem.to_json(),
        status=problem.status,
        content_type=PROBLEM_CONTENT_TYPE,
    )


class ErrorTranslator:
    """
    Turns unhandled request errors into problem detail responses.

    Args:
        clock: Source of the problem timestamp. Defaults to the process clock.
        logger: structlog logger. Defaults to this module's logger.
    """

    def __init__(self, clock: Clock | None = None, logger: Any = None) -> None:
        self.clock = clock or get_clock()
        self.logger = logger or get_logger(__name__)

    def translate(self, exc: BaseException, path: str) -> ProblemDetail:
        """Build the client-facing ProblemDetail for an error."""
        kind = classify(exc)
        invalid_params: list[InvalidParamSchema] | None = None

        match kind:
            case ErrorKind.GENERAL_APPLICATION:
                api_error = cast(ApiError, exc)
                status = api_error.status_code
                title = api_error.title or APPLICATION_ERROR_TITLE
                detail = api_error.message
            case ErrorKind.VALIDATION:
                status = HTTPStatus.BAD_REQUEST
                title = VALIDATION_ERROR_TITLE
                detail = VALIDATION_ERROR_DETAIL
                invalid_params = [
                    InvalidParamSchema(name=error.name, reason=error.reason)
                    for error in cast(ValidationParamsError, exc).errors
                ]
            case ErrorKind.AUTH_TOKEN_EXPIRED:
                status = HTTPStatus.UNAUTHORIZED
                title = TOKEN_ERROR_TITLE
                detail = cast(TokenExpiredError, exc).message
            case ErrorKind.DATA_NOT_FOUND:
                status = HTTPStatus.NOT_FOUND
                title = NOT_FOUND_TITLE
                detail = cast(DataNotFoundError, exc).message
            case ErrorKind.UNCLASSIFIED:
                status = HTTPStatus.INTERNAL_SERVER_ERROR
                title = INTERNAL_ERROR_TITLE
                detail = INTERNAL_ERROR_DETAIL

        return ProblemDetail(
            status=int(status),
            title=title or status_phrase(status),
            detail=detail,
            timestamp=self.clock.now(),
            instance=path,
            invalid_params=invalid_params,
        )

    def log(self, exc: BaseException, problem: ProblemDetail) -> None:
        """Write one structured record with the full error at the kind's level."""
        kind = classify(exc)
        log_method = getattr(self.logger, LOG_LEVELS[kind])
        log_method(
            "request_failed",
            error_kind=kind.value,
            error_type=type(exc).__name__,
            error_message=str(exc),
            status_code=problem.status,
            instance=problem.instance,
            exc_info=exc,
        )

    def handle(self, exc: BaseException, path: str) -> HttpResponse:
        """Translate, log and render an error. Never re-raises the error."""
        problem = self.translate(exc, path)
        self.log(exc, problem)
        return render_problem(problem)


@lru_cache(maxsize=1)
def get_error_translator() -> ErrorTranslator:
    """Process-wide translator used by the middleware and ninja handlers."""
    return ErrorTranslator()
