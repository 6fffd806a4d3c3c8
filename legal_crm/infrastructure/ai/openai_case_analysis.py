"""
OpenAI-backed case analysis service.
Prompts are written in Portuguese because every output is shown to the
office staff as-is.
"""

import base64
import logging
from typing import List, Optional

import openai
from openai import AsyncOpenAI

from legal_crm.config import Settings
from legal_crm.domain.models.base import ExternalServiceError
from legal_crm.domain.models.case import Case
from legal_crm.domain.services.case_analysis_service import CaseAnalysisService


logger = logging.getLogger(__name__)

SERVICE_NAME = "openai"

SYSTEM_PROMPT = (
    "Você é um assistente jurídico de um escritório de advocacia previdenciária "
    "brasileiro. Responda sempre em português do Brasil, de forma objetiva."
)

SUMMARY_PROMPT = """Resuma o caso abaixo em até três parágrafos, destacando a situação atual,
os próximos passos e os riscos.

Cliente: {client_name}
Número do processo: {case_number}
Benefício: {benefit_type}
Status: {status}
Início: {start_date}
Tarefas pendentes:
{tasks}
Documentos anexados:
{documents}
Anotações:
{notes}"""

SUGGEST_TASKS_PROMPT = """Com base nas anotações abaixo, sugira tarefas de acompanhamento.
Responda apenas com um array JSON de objetos com as chaves "description",
"dueDate" (opcional, formato YYYY-MM-DD) e "reasoning".

Anotações:
{notes}"""

EXTRACT_CLIENT_PROMPT = """Extraia os dados de identificação da pessoa presente no documento.
Responda apenas com um objeto JSON usando as chaves: name, cpf, rg, rgIssuer,
rgIssuerUF, dataEmissao, motherName, fatherName, dateOfBirth, nacionalidade,
naturalidade, estadoCivil, profissao. Datas no formato YYYY-MM-DD. Omita as
chaves que não aparecem no documento."""


class OpenAICaseAnalysisService(CaseAnalysisService):
    """Case analysis through the OpenAI chat completions API."""

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self.model = settings.openai_model
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """Build the API client on first use so a missing key only fails the call."""
        if self._client is None:
            try:
                self._client = AsyncOpenAI(
                    api_key=self.settings.openai_api_key,
                    timeout=self.settings.http_timeout_seconds
                )
            except openai.OpenAIError as e:
                logger.error(f"OpenAI client could not be created: {str(e)}")
                raise ExternalServiceError(SERVICE_NAME, str(e))
        return self._client

    async def generate_case_summary(self, case: Case, client_name: str) -> str:
        prompt = SUMMARY_PROMPT.format(
            client_name=client_name,
            case_number=case.case_number or "-",
            benefit_type=case.benefit_type.value,
            status=case.status.value,
            start_date=case.start_date.isoformat(),
            tasks=self._format_lines(
                f"{task.due_date.isoformat()} - {task.description}" for task in case.pending_tasks
            ),
            documents=self._format_lines(document.name for document in case.documents),
            notes=case.notes or "-"
        )
        return await self._complete([{"role": "user", "content": prompt}], operation="summary")

    async def suggest_tasks(self, notes: str) -> str:
        prompt = SUGGEST_TASKS_PROMPT.format(notes=notes or "-")
        return await self._complete([{"role": "user", "content": prompt}], operation="suggest_tasks")

    async def extract_client_info(self, data: bytes, mime_type: str) -> str:
        encoded = base64.b64encode(data).decode("ascii")
        content = [
            {"type": "text", "text": EXTRACT_CLIENT_PROMPT},
            {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{encoded}"}},
        ]
        return await self._complete(
            [{"role": "user", "content": content}],
            operation="extract_client_info",
            json_object=True
        )

    async def extract_client_info_from_text(self, text: str) -> str:
        prompt = f"{EXTRACT_CLIENT_PROMPT}\n\nDocumento:\n{text}"
        return await self._complete(
            [{"role": "user", "content": prompt}],
            operation="extract_client_info",
            json_object=True
        )

    async def _complete(self, messages: List[dict], operation: str, json_object: bool = False) -> str:
        request = {
            "model": self.model,
            "messages": [{"role": "system", "content": SYSTEM_PROMPT}] + messages,
            "temperature": 0.3,
        }
        if json_object:
            request["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**request)
        except openai.APIError as e:
            logger.error(f"OpenAI API error during {operation}: {str(e)}")
            raise ExternalServiceError(SERVICE_NAME, str(e))

        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.warning(f"OpenAI returned an empty response for {operation}")
            raise ExternalServiceError(SERVICE_NAME, f"Empty response for {operation}")

        logger.info(f"OpenAI {operation} completed with model {self.model}")
        return content.strip()

    @staticmethod
    def _format_lines(lines) -> str:
        items = [f"- {line}" for line in lines]
        return "\n".join(items) if items else "-"
