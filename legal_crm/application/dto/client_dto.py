"""
Client DTOs for the application layer.
Field aliases match the keys of the stored client records.
"""

from typing import Optional
from datetime import date

from pydantic import Field, field_validator

from .base_dto import RequestDTO, CreateRequestDTO, blank_to_none


class PersonRequestDTO(RequestDTO):
    """Identification and civil data shared by clients and representatives."""

    name: str = Field(min_length=1, max_length=255, description="Full name")
    mother_name: str = Field(default="", max_length=255)
    father_name: str = Field(default="", max_length=255)
    cpf: str = Field(default="", max_length=14, description="CPF, formatted or digits only")
    rg: str = Field(default="", max_length=20)
    rg_issuer: str = Field(default="", max_length=20)
    rg_issuer_uf: str = Field(default="", max_length=2, alias="rgIssuerUF")
    issue_date: Optional[date] = Field(default=None, alias="dataEmissao")
    date_of_birth: Optional[date] = None
    nationality: str = Field(default="", max_length=100, alias="nacionalidade")
    birthplace: str = Field(default="", max_length=100, alias="naturalidade")
    civil_status: str = Field(default="", max_length=50, alias="estadoCivil")
    profession: str = Field(default="", max_length=100, alias="profissao")

    @field_validator('issue_date', 'date_of_birth', mode='before')
    @classmethod
    def validate_optional_dates(cls, v):
        return blank_to_none(v)


class LegalRepresentativeRequestDTO(PersonRequestDTO):
    """DTO for a legal representative nested in a client request."""
    pass


class CreateClientRequestDTO(PersonRequestDTO, CreateRequestDTO):
    """DTO for client creation requests."""

    legal_representative: Optional[LegalRepresentativeRequestDTO] = None

    # Contact information
    email: str = Field(default="", max_length=255)
    phone: str = Field(default="", max_length=20)

    # Address, flat like the stored record
    cep: str = Field(default="", max_length=9)
    street: str = Field(default="", max_length=255)
    number: str = Field(default="", max_length=20)
    complement: str = Field(default="", max_length=255)
    neighborhood: str = Field(default="", max_length=100)
    city: str = Field(default="", max_length=100)
    state: str = Field(default="", max_length=2)

    @field_validator('email', mode='before')
    @classmethod
    def validate_email(cls, v):
        if v and "@" not in v:
            raise ValueError("invalid email address")
        return v or ""

    @field_validator('state', 'rg_issuer_uf', mode='before')
    @classmethod
    def validate_uf(cls, v):
        return v.upper() if isinstance(v, str) else v
