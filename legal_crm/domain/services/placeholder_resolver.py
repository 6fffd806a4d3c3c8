"""
Template placeholder resolver.
Replaces {{dotted.path}} tokens with client/case data through an explicit
path table. Anything not in the table is left exactly as written.
"""

import re
from datetime import date, datetime
from enum import Enum
from operator import attrgetter
from typing import Any, Callable, Dict, Optional

from legal_crm.domain.models.case import Case
from legal_crm.domain.models.client import Client


PLACEHOLDER_PATTERN = re.compile(r"{{(.*?)}}")

Accessor = Callable[[Any], Any]

PERSON_FIELDS: Dict[str, Accessor] = {
    "name": attrgetter("name"),
    "motherName": attrgetter("mother_name"),
    "fatherName": attrgetter("father_name"),
    "cpf": attrgetter("cpf"),
    "rg": attrgetter("rg"),
    "rgIssuer": attrgetter("rg_issuer"),
    "rgIssuerUF": attrgetter("rg_issuer_uf"),
    "dataEmissao": attrgetter("issue_date"),
    "dateOfBirth": attrgetter("date_of_birth"),
    "nacionalidade": attrgetter("nationality"),
    "naturalidade": attrgetter("birthplace"),
    "estadoCivil": attrgetter("civil_status"),
    "profissao": attrgetter("profession"),
}

CLIENT_FIELDS: Dict[str, Accessor] = {
    **PERSON_FIELDS,
    "id": attrgetter("id"),
    "email": attrgetter("email"),
    "phone": attrgetter("phone"),
    "cep": attrgetter("address.cep"),
    "street": attrgetter("address.street"),
    "number": attrgetter("address.number"),
    "complement": attrgetter("address.complement"),
    "neighborhood": attrgetter("address.neighborhood"),
    "city": attrgetter("address.city"),
    "state": attrgetter("address.state"),
    "createdAt": attrgetter("created_at"),
}

CASE_FIELDS: Dict[str, Accessor] = {
    "id": attrgetter("id"),
    "caseNumber": attrgetter("case_number"),
    "clientId": attrgetter("client_id"),
    "benefitType": attrgetter("benefit_type"),
    "status": attrgetter("status"),
    "startDate": attrgetter("start_date"),
    "notes": attrgetter("notes"),
    "lastUpdate": attrgetter("last_update"),
    "aiSummary": attrgetter("ai_summary"),
}

REPRESENTATIVE_SEGMENT = "legalRepresentative"


def _build_path_table() -> Dict[str, Callable[[Client, Optional[Case]], Any]]:
    table: Dict[str, Callable[[Client, Optional[Case]], Any]] = {}

    for name, getter in CLIENT_FIELDS.items():
        table[f"cliente.{name}"] = lambda client, case, getter=getter: getter(client)

    for name, getter in PERSON_FIELDS.items():
        table[f"cliente.{REPRESENTATIVE_SEGMENT}.{name}"] = (
            lambda client, case, getter=getter: _from_optional(client.legal_representative, getter)
        )

    for name, getter in CASE_FIELDS.items():
        table[f"caso.{name}"] = lambda client, case, getter=getter: _from_optional(case, getter)

    return table


class _Unresolved(Exception):
    """Raised internally when a path points into a missing object."""


def _from_optional(target: Any, getter: Accessor) -> Any:
    if target is None:
        raise _Unresolved()
    return getter(target)


PATH_TABLE = _build_path_table()


def render_value(value: Any) -> str:
    """Render a resolved value as template text."""
    if not value:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def resolve_placeholders(content: str, client: Client, case: Optional[Case] = None) -> str:
    """
    Materialize template text for a client and, optionally, one of their cases.
    """
    def replace(match: re.Match) -> str:
        path = match.group(1).strip()
        accessor = PATH_TABLE.get(path)
        if accessor is None:
            return match.group(0)
        try:
            return render_value(accessor(client, case))
        except _Unresolved:
            return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, content)


def unresolved_placeholders(content: str) -> list:
    """List the tokens the resolver does not know, in order of appearance."""
    return [
        match.group(0)
        for match in PLACEHOLDER_PATTERN.finditer(content)
        if match.group(1).strip() not in PATH_TABLE
    ]
