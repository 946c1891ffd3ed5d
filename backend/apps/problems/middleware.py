"""
Problem detail middleware for plain Django views.

django-ninja routes are covered by register_problem_handlers; this middleware
handles everything else that reaches Django's exception processing.
"""

from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from apps.problems.handlers import to_application_error
from apps.problems.translator import get_error_translator


class ProblemDetailMiddleware:
    """Converts exceptions raised by views into problem detail responses."""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        return self.get_response(request)

    def process_exception(self, request: HttpRequest, exception: Exception) -> HttpResponse:
        return get_error_translator().handle(to_application_error(exception), request.path)
