"""
django-ninja integration for problem detail responses.

Framework exceptions are first mapped into the application's own exception
types so that every failure goes through the same classification.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from django.core.exceptions import PermissionDenied
from django.http import Http404, HttpRequest, HttpResponse
from ninja import NinjaAPI
from ninja.errors import AuthenticationError, HttpError
from ninja.errors import ValidationError as NinjaValidationError

from apps.problems.exceptions import ApiError, DataNotFoundError, InvalidParam, ValidationParamsError
from apps.problems.translator import ErrorTranslator, get_error_translator

HANDLED_EXCEPTIONS = (
    Exception,
    Http404,
    PermissionDenied,
    HttpError,
    AuthenticationError,
    NinjaValidationError,
)


def invalid_params_from_pydantic(errors: Iterable[Mapping[str, Any]]) -> list[InvalidParam]:
    """
    Convert pydantic/ninja error dicts into InvalidParam entries.

    The first ``loc`` segment names the request source (body, query, path...)
    and is dropped: ``("body", "payload", "email")`` -> ``"payload.email"``.
    """
    params = []
    for error in errors:
        loc = tuple(str(part) for part in error.get("loc", ()))
        name = ".".join(loc[1:]) or ".".join(loc) or "request"
        params.append(InvalidParam(name=name, reason=str(error.get("msg", "Invalid value"))))
    return params


def to_application_error(exc: Exception) -> Exception:
    """Map Django/ninja exceptions onto the application's exception types."""
    match exc:
        case NinjaValidationError():
            return ValidationParamsError(invalid_params_from_pydantic(exc.errors))
        case HttpError():
            return ApiError(exc.status_code, str(exc.message))
        case Http404():
            return DataNotFoundError(str(exc) or "The requested resource was not found.")
        case PermissionDenied():
            return ApiError(403, str(exc) or "You do not have permission to perform this action.")
        case _:
            return exc


def register_problem_handlers(api: NinjaAPI, translator: ErrorTranslator | None = None) -> None:
    """
    Route every exception raised inside ``api`` through the ErrorTranslator.

    Args:
        api: The NinjaAPI instance.
        translator: Translator to use. Defaults to the process-wide one.
    """

    def handle_exception(request: HttpRequest, exc: Exception) -> HttpResponse:
        active = translator or get_error_translator()
        return active.handle(to_application_error(exc), request.path)

    # ninja resolves handlers by walking the MRO, so its built-in handlers for
    # these subclasses must be replaced individually
    for exc_class in HANDLED_EXCEPTIONS:
        api.add_exception_handler(exc_class, handle_exception)
