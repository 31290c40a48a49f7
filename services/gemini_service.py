from __future__ import annotations

import logging
import os

from google import genai

from config import obter_api_key

DEFAULT_MODEL = "gemini-2.5-pro"

logger = logging.getLogger(__name__)


# Define um tipo de erro específico para falhas de integração com o Gemini.
class GeminiServiceError(RuntimeError):
    """Raised when Gemini generation fails."""

    def __init__(self, mensagem: str, detalhe: str | None = None):
        super().__init__(mensagem)
        self.detalhe = detalhe if detalhe is not None else mensagem


class GeminiConfigError(GeminiServiceError):
    """Raised when no Gemini API key is configured."""


class GeminiCotaError(GeminiServiceError):
    """Raised when the Gemini quota is exhausted (HTTP 429)."""


# Envia o prompt ao Gemini e retorna o texto gerado, com tratamento de erros de cota e autenticação.
def gerar_peticao(prompt: str, model: str | None = None, api_key: str | None = None) -> str:
    """
    Gera texto usando Gemini.
    Requer GEMINI_API_KEY, GOOGLE_API_KEY ou API_KEY no ambiente.
    O cliente é criado a cada chamada, depois de validar a chave.
    """
    key = (api_key or obter_api_key()).strip()
    if not key:
        raise GeminiConfigError(
            "Chave da API Gemini não configurada no servidor.",
            "Configure GEMINI_API_KEY (ou GOOGLE_API_KEY / API_KEY) no ambiente.",
        )

    chosen_model = (model or os.getenv("GEMINI_MODEL") or DEFAULT_MODEL).strip()
    logger.info("Enviando prompt ao Gemini (%s, %d caracteres)", chosen_model, len(prompt))

    try:
        client = genai.Client(api_key=key)
        response = client.models.generate_content(
            model=chosen_model,
            contents=[{"parts": [{"text": prompt}]}],
        )
        text = response.text
    except Exception as exc:
        raw_msg = str(exc)
        msg_lower = raw_msg.lower()
        if "resource_exhausted" in msg_lower or "quota" in msg_lower or "429" in msg_lower:
            raise GeminiCotaError(
                "Cota da API Gemini esgotada (HTTP 429 RESOURCE_EXHAUSTED). "
                "Habilite faturamento no projeto da chave ou use outra chave com cota disponivel.",
                raw_msg,
            ) from exc
        raise GeminiServiceError(f"Falha ao chamar Gemini ({chosen_model}): {raw_msg}", raw_msg) from exc

    if not text or not text.strip():
        raise GeminiServiceError("Gemini nao retornou texto.")
    return text
