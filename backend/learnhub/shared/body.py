"""Request body parsing.

Bodies are decoded by hand rather than through FastAPI's body parameters so
that an empty body reads as ``{}`` and each failure maps onto a domain
error: undecodable JSON is a ``MalformedInputError``, anything that does
not fit the target schema is a ``ValidationError``.
"""

import json
from typing import Annotated, Any, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from learnhub.exceptions import MalformedInputError, ValidationError


ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_json_body(request: Request) -> dict[str, Any]:
    """Read the request body as a JSON object."""
    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedInputError from e

    if not isinstance(payload, dict):
        msg = "Request body must be a JSON object"
        raise ValidationError(msg)
    return payload


JsonBody = Annotated[dict[str, Any], Depends(read_json_body)]


def describe_validation_error(exc: PydanticValidationError) -> str:
    """Summarise the first pydantic error as "field: message"."""
    error = exc.errors()[0]
    field = ".".join(str(loc) for loc in error["loc"])
    return f"{field}: {error['msg']}" if field else error["msg"]


def parse_model(model: type[ModelT], payload: dict[str, Any]) -> ModelT:
    """Validate a decoded body against a schema."""
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(describe_validation_error(e)) from e
