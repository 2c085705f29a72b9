"""Common Pydantic schemas and base classes."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema: reads ORM attributes, speaks camelCase JSON."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ErrorResponse(BaseSchema):
    """Body returned for ledger errors."""

    detail: str
    error: str


# OpenAPI declaration of the ledger error bodies, shared by the routers
LEDGER_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Insufficient balance"},
    404: {"model": ErrorResponse, "description": "User or event not found"},
    409: {"model": ErrorResponse, "description": "Event not in the required state"},
}
