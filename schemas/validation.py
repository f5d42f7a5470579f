from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

# Largest value a 32-bit INTEGER column holds
MAX_RECORD_ID = 2**31 - 1

RecordId = Annotated[int, Field(strict=True, ge=1, le=MAX_RECORD_ID)]


class RequestModel(BaseModel):
    """Base for request bodies: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


def _describe(error):
    location = ".".join(str(part) for part in error["loc"])
    message = error["msg"]
    return f"{location}: {message}" if location else message


def validate_payload(schema, payload):
    """Parse ``payload`` into ``schema``.

    Returns ``(dto, None)`` on success or ``(None, message)`` when the body is
    missing or malformed, so routes can answer 400 without exception plumbing.
    """
    if payload is None:
        return None, "Request body must be a JSON object"
    try:
        return schema.model_validate(payload), None
    except ValidationError as exc:
        return None, "; ".join(_describe(error) for error in exc.errors())
