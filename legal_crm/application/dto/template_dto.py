"""
Document template DTOs.
"""

from pydantic import Field

from .base_dto import CreateRequestDTO


class CreateTemplateRequestDTO(CreateRequestDTO):
    """DTO for template creation requests."""

    title: str = Field(min_length=1, max_length=255)
    content: str = Field(default="", description="Text with {{cliente.*}} and {{caso.*}} placeholders")
