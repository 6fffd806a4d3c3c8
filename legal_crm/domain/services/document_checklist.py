"""
Document checklist per benefit type.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List

from legal_crm.domain.models.case import BenefitType, Case


_ID = "Documento de Identificação (RG/CNH)"
_CTPS = "Carteira de Trabalho (CTPS)"
_RESIDENCE = "Comprovante de Residência"
_MEDICAL = "Laudos e Exames Médicos"

REQUIRED_DOCUMENTS_BY_BENEFIT: Dict[BenefitType, List[str]] = {
    BenefitType.APOSENTADORIA_IDADE: [_ID, "CPF", _RESIDENCE, _CTPS, "Extrato CNIS"],
    BenefitType.APOSENTADORIA_CONTRIBUICAO: [
        _ID, "CPF", _RESIDENCE, _CTPS, "Extrato CNIS", "Carnês de contribuição (GPS)",
    ],
    BenefitType.APOSENTADORIA_ESPECIAL: [
        _ID, "CPF", _CTPS, "Perfil Profissiográfico Previdenciário (PPP)", "LTCAT",
    ],
    BenefitType.APOSENTADORIA_INVALIDEZ: [_ID, "CPF", _RESIDENCE, _MEDICAL, _CTPS],
    BenefitType.AUXILIO_DOENCA: [_ID, "CPF", _RESIDENCE, _MEDICAL, "Atestado Médico com CID"],
    BenefitType.AUXILIO_ACIDENTE: [
        _ID, "CPF", "Comunicação de Acidente de Trabalho (CAT)", _MEDICAL,
    ],
    BenefitType.BPC_LOAS: [
        "Documento de Identificação (RG/CNH) de todos do grupo familiar",
        "CPF de todos do grupo familiar",
        _RESIDENCE,
        "Cadastro Único (CadÚnico) atualizado",
    ],
    BenefitType.PENSAO_MORTE: [
        "Documento de Identificação (RG/CNH) do requerente",
        "CPF do requerente",
        "Certidão de Óbito",
        "Documentos do falecido",
        "Certidão de Casamento/Nascimento",
    ],
    BenefitType.SALARIO_MATERNIDADE: [_ID, "CPF", "Certidão de Nascimento da criança", _CTPS],
}


@dataclass(frozen=True)
class ChecklistItem:
    name: str
    uploaded: bool


def simplify_document_name(name: str) -> str:
    """Lower-case a required name and drop any parenthesized suffix."""
    return name.lower().split("(")[0].strip()


def is_document_uploaded(required_name: str, uploaded_names: Iterable[str]) -> bool:
    """Check if any uploaded file name covers a required document."""
    simplified = simplify_document_name(required_name)
    return any(simplified in uploaded.lower() for uploaded in uploaded_names)


def required_documents(benefit_type: BenefitType) -> List[str]:
    return list(REQUIRED_DOCUMENTS_BY_BENEFIT.get(BenefitType(benefit_type), []))


def build_checklist(case: Case) -> List[ChecklistItem]:
    """
    Build the suggested-documents checklist for a case.
    Matching is by substring on file names, so one upload may satisfy
    several entries.
    """
    uploaded_names = [document.name for document in case.documents]
    return [
        ChecklistItem(name=name, uploaded=is_document_uploaded(name, uploaded_names))
        for name in required_documents(case.benefit_type)
    ]


def checklist_completion(case: Case) -> float:
    """Get the fraction of required documents already uploaded."""
    items = build_checklist(case)
    if not items:
        return 1.0
    return sum(1 for item in items if item.uploaded) / len(items)


def upload_file_name(required_name: str, original_file_name: str) -> str:
    """Name an upload after the checklist entry it satisfies, keeping the extension."""
    extension = original_file_name.rsplit(".", 1)[-1] if "." in original_file_name else ""
    return f"{required_name}.{extension}" if extension else required_name
