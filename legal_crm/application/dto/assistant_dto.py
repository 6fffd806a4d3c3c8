"""
DTOs for results returned by the case analysis service.
Model output is loosely structured, so these models ignore unknown keys and
tolerate missing or malformed optional values.
"""

import json
import re
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from legal_crm.domain.models.base import ExternalServiceError


ANALYSIS_SERVICE = "case-analysis"

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class AnalysisResultDTO(BaseModel):
    """Base model for parsed analysis output."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


def _lenient_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


class SuggestedTask(AnalysisResultDTO):
    """A follow-up task proposed from the case notes."""

    description: str = Field(min_length=1)
    due_date: Optional[date] = None
    reasoning: str = ""

    @field_validator('due_date', mode='before')
    @classmethod
    def validate_due_date(cls, v):
        return _lenient_date(v)


class ExtractedClientInfo(AnalysisResultDTO):
    """Identification fields read from a scanned document."""

    name: Optional[str] = None
    cpf: Optional[str] = None
    rg: Optional[str] = None
    rg_issuer: Optional[str] = None
    rg_issuer_uf: Optional[str] = Field(default=None, alias="rgIssuerUF")
    issue_date: Optional[date] = Field(default=None, alias="dataEmissao")
    mother_name: Optional[str] = None
    father_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    nationality: Optional[str] = Field(default=None, alias="nacionalidade")
    birthplace: Optional[str] = Field(default=None, alias="naturalidade")
    civil_status: Optional[str] = Field(default=None, alias="estadoCivil")
    profession: Optional[str] = Field(default=None, alias="profissao")

    @field_validator('issue_date', 'date_of_birth', mode='before')
    @classmethod
    def validate_dates(cls, v):
        return _lenient_date(v)

    def to_form_fields(self) -> Dict[str, Any]:
        """
        Get the extracted values keyed like a client record, skipping blanks.
        Suitable for merging into client or representative input.
        """
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    @property
    def is_empty(self) -> bool:
        return not self.to_form_fields()


def _load_json(raw: str) -> Any:
    text = _CODE_FENCE.sub("", (raw or "").strip())
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ExternalServiceError(ANALYSIS_SERVICE, f"Response is not valid JSON: {e.msg}")


def parse_suggested_tasks(raw: str) -> List[SuggestedTask]:
    """Parse the JSON array returned by suggest_tasks."""
    payload = _load_json(raw)

    # Some models wrap the array in an object
    if isinstance(payload, dict):
        payload = payload.get("tasks", payload.get("tarefas"))

    if not isinstance(payload, list):
        raise ExternalServiceError(ANALYSIS_SERVICE, "Expected a JSON array of tasks")

    try:
        return [SuggestedTask.model_validate(item) for item in payload]
    except PydanticValidationError as e:
        raise ExternalServiceError(ANALYSIS_SERVICE, f"Malformed task suggestion: {e.errors()[0]['msg']}")


def parse_extracted_client_info(raw: str) -> ExtractedClientInfo:
    """Parse the JSON object returned by extract_client_info."""
    payload = _load_json(raw)
    if not isinstance(payload, dict):
        raise ExternalServiceError(ANALYSIS_SERVICE, "Expected a JSON object of client fields")

    try:
        return ExtractedClientInfo.model_validate(payload)
    except PydanticValidationError as e:
        raise ExternalServiceError(ANALYSIS_SERVICE, f"Malformed client data: {e.errors()[0]['msg']}")
