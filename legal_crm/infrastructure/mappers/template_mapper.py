"""
Document template mapper.
"""

from typing import Any, Dict

from legal_crm.domain.models.template import DocumentTemplate
from .serialization import format_datetime, parse_datetime


class TemplateMapper:
    """Maps between DocumentTemplate domain entity and its snapshot record."""

    def domain_to_dict(self, template: DocumentTemplate) -> Dict[str, Any]:
        return {
            "id": template.id,
            "title": template.title,
            "content": template.content,
            "createdAt": format_datetime(template.created_at),
        }

    def dict_to_domain(self, data: Dict[str, Any]) -> DocumentTemplate:
        template = DocumentTemplate(
            title=data.get("title") or "",
            content=data.get("content") or ""
        )
        template.id = data.get("id")
        template.created_at = parse_datetime(data.get("createdAt")) or template.created_at
        return template
