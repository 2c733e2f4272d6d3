"""
JSON request/response helpers shared by the API views.
"""

import json
from typing import Any, Literal, TypeVar

from django.conf import settings
from django.http import HttpRequest, JsonResponse

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

_M = TypeVar("_M", bound=BaseModel)


class ValidationErrorDetail(BaseModel):
    """A single validation error."""

    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Response for validation errors."""

    error: Literal["validation_error"]
    details: list[ValidationErrorDetail]


class InvalidRequestBody(Exception):
    """Request body could not be parsed; carries the 400 response to return."""

    def __init__(self, response: JsonResponse) -> None:
        super().__init__("Invalid request body")
        self.response = response


def json_response(data: dict[str, Any], status: int = 200) -> JsonResponse:
    """Create a JSON response."""
    return JsonResponse(data, status=status)


def error_response(error: str, status: int, **extra: Any) -> JsonResponse:
    """Create a JSON error response: {"error": ..., **extra}."""
    return JsonResponse({"error": error, **extra}, status=status)


def validation_error_response(details: list[ValidationErrorDetail]) -> JsonResponse:
    """400 response listing field-level errors."""
    response = ValidationErrorResponse(error="validation_error", details=details)
    return JsonResponse(response.model_dump(), status=400)


def parse_json_body(request: HttpRequest, schema: type[_M]) -> _M:
    """
    Parse and validate a JSON request body.

    Raises:
        InvalidRequestBody: On malformed JSON or schema validation failure
    """
    try:
        body = json.loads(request.body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidRequestBody(
            error_response("Invalid JSON in request body", status=400)
        ) from e

    try:
        return schema.model_validate(body)
    except PydanticValidationError as e:
        details = [
            ValidationErrorDetail(
                field=".".join(str(loc) for loc in err["loc"]) or "body",
                message=err["msg"],
            )
            for err in e.errors()
        ]
        raise InvalidRequestBody(validation_error_response(details)) from e


def client_ip(request: HttpRequest) -> str:
    """
    Client IP for rate limiting and source checks.

    X-Forwarded-For is client-controlled unless a proxy we run appends to
    it, so it is only read when TRUSTED_PROXY_COUNT is set. The entry that
    many hops from the right is the address our outermost proxy saw.
    """
    remote_addr = str(request.META.get("REMOTE_ADDR", ""))
    trusted_hops = getattr(settings, "TRUSTED_PROXY_COUNT", 0)
    if trusted_hops <= 0:
        return remote_addr

    hops = [
        hop.strip()
        for hop in request.headers.get("X-Forwarded-For", "").split(",")
        if hop.strip()
    ]
    if len(hops) < trusted_hops:
        return remote_addr
    return hops[-trusted_hops]
