"""
Problem detail response schema (RFC 7807 style).
"""

from datetime import datetime
from typing import Any

from ninja import Schema
from pydantic import ConfigDict, Field

PROBLEM_CONTENT_TYPE = "application/problem+json"


class InvalidParamSchema(Schema):
    """A parameter that failed validation."""

    name: str = Field(description="Name of the invalid parameter")
    reason: str = Field(description="Why the parameter is invalid")


class ProblemDetail(Schema):
    """Error payload returned for every failed request."""

    model_config = ConfigDict(populate_by_name=True)

    status: int = Field(ge=100, le=599, description="HTTP status code")
    title: str = Field(min_length=1, description="Short category of the problem")
    detail: str = Field(description="Human-readable explanation")
    timestamp: datetime = Field(description="When the problem occurred")
    instance: str = Field(description="Request path that produced the problem")
    invalid_params: list[InvalidParamSchema] | None = Field(
        default=None,
        serialization_alias="invalidParams",
        validation_alias="invalidParams",
        description="Present only for validation failures",
    )

    def to_json(self) -> str:
        """Serialize with public field names, omitting absent invalidParams."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


def problem_responses(success_status: int = 200, success_schema: Any = None) -> dict[int, Any]:
    """
    Build a django-ninja ``response=`` mapping that documents problem details.

    Usage:
        @router.get("/items/{item_id}", response=problem_responses(200, ItemOut))
    """
    responses: dict[int, Any] = {success_status: success_schema}
    for status in (400, 401, 403, 404, 422, 500):
        responses[status] = ProblemDetail
    return responses
