"""
Document template domain model.
Template content carries {{dotted.path}} placeholder tokens.
"""

from dataclasses import dataclass

from legal_crm.domain.models.base import BaseEntity, ValidationError


@dataclass(eq=False)
class DocumentTemplate(BaseEntity):
    """Reusable document text with placeholders."""

    title: str = ""
    content: str = ""

    def validate(self) -> None:
        """Validate template state."""
        if not self.title or not self.title.strip():
            raise ValidationError("Template title is required", "title")

        if len(self.title) > 255:
            raise ValidationError("Template title too long (max 255 characters)", "title")
