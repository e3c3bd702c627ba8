"""Request validation as FastAPI dependencies.

Each route declares which region of the request (body, path parameters or
query string) must satisfy which pydantic model. The dependency parses the
raw region and either hands the typed model to the route or raises an
``AppError`` with one ``{field, message}`` entry per violated constraint.

Example:
    @router.post("")
    async def create(
        body: Annotated[CreateGadgetRequest, Depends(validated(CreateGadgetRequest))],
    ): ...
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from shared_kernel.errors import AppError

ModelT = TypeVar("ModelT", bound=BaseModel)

MAX_BODY_BYTES = 10 * 1024


class RequestRegion(StrEnum):
    """Part of the request a schema applies to."""

    BODY = "body"
    PATH = "path"
    QUERY = "query"


def field_errors(
    error: ValidationError, region: RequestRegion | str
) -> list[dict[str, str]]:
    """Flatten a pydantic ValidationError into field/message pairs.

    Nested locations are joined with dots. Errors without a location (for
    example a body that is not an object) are reported against the region.
    """
    errors: list[dict[str, str]] = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item.get("loc", ()))
        errors.append({"field": loc or str(region), "message": item["msg"]})
    return errors


def _body_too_large(limit: int) -> AppError:
    return AppError.payload_too_large(
        f"Request body exceeds the limit of {limit} bytes"
    )


async def _read_body(request: Request, limit: int) -> bytes:
    """Read the body, giving up as soon as it grows past ``limit`` bytes."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise _body_too_large(limit)

    received = bytearray()
    async for chunk in request.stream():
        received.extend(chunk)
        if len(received) > limit:
            raise _body_too_large(limit)
    return bytes(received)


async def _read_region(
    request: Request, region: RequestRegion, max_body_bytes: int = MAX_BODY_BYTES
) -> Any:
    if region is RequestRegion.PATH:
        return dict(request.path_params)
    if region is RequestRegion.QUERY:
        return dict(request.query_params)

    raw = await _read_body(request, max_body_bytes)
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise AppError.validation_failed(
            [{"field": RequestRegion.BODY.value, "message": f"Malformed JSON: {e}"}]
        ) from e


def validate_payload(
    schema: type[ModelT], data: Any, region: RequestRegion = RequestRegion.BODY
) -> ModelT:
    """Validate already-extracted data against a schema.

    Raises:
        AppError: VALIDATION_FAILED with the list of field errors.
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise AppError.validation_failed(field_errors(e, region)) from e


def validated(
    schema: type[ModelT],
    region: RequestRegion = RequestRegion.BODY,
    max_body_bytes: int = MAX_BODY_BYTES,
) -> Callable[[Request], Awaitable[ModelT]]:
    """Build a dependency validating one request region against ``schema``.

    Bodies larger than ``max_body_bytes`` are rejected with
    PAYLOAD_TOO_LARGE before any parsing.
    """

    async def dependency(request: Request) -> ModelT:
        data = await _read_region(request, region, max_body_bytes)
        return validate_payload(schema, data, region)

    dependency.__name__ = f"validate_{region.value}_{schema.__name__}"
    return dependency
