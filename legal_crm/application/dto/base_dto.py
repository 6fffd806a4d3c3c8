"""
Base DTOs for the application layer.
Provides common patterns for request data transfer objects.
"""

from typing import Any, Dict, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from legal_crm.domain.models.base import ValidationError


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Accept both snake_case names and the stored camelCase aliases
        alias_generator=to_camel,
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        # Validate assignment
        validate_assignment=True,
        # Reject unknown keys so typos do not silently drop data
        extra="forbid",
        # Trim surrounding whitespace on strings
        str_strip_whitespace=True,
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""
    pass


class CreateRequestDTO(RequestDTO):
    """Base class for creation request DTOs."""
    pass


def blank_to_none(value: Any) -> Any:
    """Treat empty form values as missing."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


D = TypeVar("D", bound=BaseDTO)


def parse_request(dto_class: Type[D], data: Union[D, Dict[str, Any]]) -> D:
    """
    Validate raw input against a DTO class.
    Pydantic errors are converted into a domain ValidationError naming the
    first offending field.
    """
    if isinstance(data, dto_class):
        return data

    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True, exclude_unset=True)

    try:
        return dto_class.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ValidationError(f"Invalid {field or 'input'}: {first.get('msg')}", field)
