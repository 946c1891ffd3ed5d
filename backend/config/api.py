"""
NinjaAPI instance and router registration.

Every exception raised by an operation, including ninja's own validation and
authentication errors, is rendered as application/problem+json.
"""

from django.http import HttpRequest
from ninja import NinjaAPI

from apps.problems.handlers import register_problem_handlers
from apps.security.api import router as auth_router

api = NinjaAPI(
    title="API Commons",
    version="1.0.0",
    description="Problem detail errors and JWT token lifecycle for Django Ninja services.",
)

register_problem_handlers(api)

api.add_router("/auth", auth_router)


@api.get("/health", tags=["health"], operation_id="healthCheck", summary="Health check")
def health_check(request: HttpRequest) -> dict:
    return {"status": "ok"}
