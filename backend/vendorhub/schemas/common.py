"""
VendorHub Backend — Shared Pydantic Schemas
=============================================

What:  Base model and response shapes shared by every resource.
Why:   The public API speaks camelCase (`userName`, `firmName`, `vendorId`);
       Python code stays snake_case. `CamelModel` bridges the two with an
       alias generator, and FastAPI serializes responses by alias.
"""

from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from vendorhub.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase on input, emits camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    Standardized error body for every non-2xx response.

    Example:
        {
            "error": "duplicate_email",
            "message": "Email already taken",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


def validate_form(model: Type[ModelT], **fields: Any) -> ModelT:
    """
    Build `model` from multipart form fields.

    JSON bodies are validated by FastAPI before the handler runs; form fields
    are assembled inside the handler, so their failures are converted here
    into the same 400 `validation_error` body.
    """
    try:
        return model(**fields)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False, include_input=False)
        first = errors[0]
        field = str(first["loc"][0]) if first.get("loc") else None
        raise ValidationError(
            message=f"Invalid value for '{field}': {first['msg']}" if field else first["msg"],
            field=field,
            context={"errors": [
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in errors
            ]},
        )
