from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware

from config import Config, obter_api_key
from services.formulario import FormularioInvalidoError, validar_formulario
from services.gemini_service import GeminiConfigError, GeminiCotaError, GeminiServiceError, gerar_peticao
from services.prompt_builder import montar_prompt

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


class PeticaoResponse(BaseModel):
    text: str


class ErroResponse(BaseModel):
    error: str
    details: str | None = None


def _erro(status_code: int, mensagem: str, detalhe: str | None = None) -> JSONResponse:
    corpo = ErroResponse(error=mensagem, details=detalhe)
    return JSONResponse(status_code=status_code, content=corpo.model_dump(exclude_none=True))


# Recusa requisições de origens fora da lista antes de chegar às rotas.
class OrigemPermitidaMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, origens: list[str]):
        super().__init__(app)
        self.origens = set(origens)

    async def dispatch(self, request: Request, call_next):
        origem = request.headers.get("origin")
        if origem and origem not in self.origens:
            logger.warning("Origem recusada pelo CORS: %s", origem)
            return _erro(status.HTTP_403_FORBIDDEN, "Origem não permitida pelo CORS.")
        return await call_next(request)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not obter_api_key():
        logger.error("ERRO CRÍTICO: a variável de ambiente GEMINI_API_KEY (ou API_KEY) não foi definida.")
    yield


app = FastAPI(title="Gerador de Petição Inicial - JEC", lifespan=lifespan)

# O CORSMiddleware fica por fora e responde aos preflights; a recusa das demais vem logo depois.
app.add_middleware(OrigemPermitidaMiddleware, origens=Config.ORIGENS_PERMITIDAS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.ORIGENS_PERMITIDAS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def corpo_invalido(request: Request, exc: RequestValidationError):
    logger.warning("Corpo da requisição inválido: %s", exc.errors())
    return _erro(status.HTTP_400_BAD_REQUEST, "Corpo da requisição inválido. Envie um objeto JSON.")


@app.exception_handler(Exception)
async def erro_inesperado(request: Request, exc: Exception):
    logger.exception("Erro inesperado em %s", request.url.path)
    return _erro(status.HTTP_500_INTERNAL_SERVER_ERROR, "Erro interno no servidor.", str(exc))


# Endpoint de "saúde" para verificar se o servidor está no ar
@app.get("/", response_class=PlainTextResponse)
def saude() -> str:
    return "Servidor de Petições está no ar!"


@app.post(
    "/api/generate-petition",
    response_model=PeticaoResponse,
    responses={400: {"model": ErroResponse}, 500: {"model": ErroResponse}},
)
def gerar(dados: Any = Body(default=None)):
    try:
        formulario = validar_formulario(dados)
    except FormularioInvalidoError as exc:
        logger.warning("Formulário recusado: %s", exc)
        return _erro(status.HTTP_400_BAD_REQUEST, str(exc))

    prompt = montar_prompt(formulario)

    try:
        texto = gerar_peticao(prompt)
    except GeminiConfigError as exc:
        logger.error("Configuração ausente: %s", exc.detalhe)
        return _erro(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), exc.detalhe)
    except GeminiCotaError as exc:
        logger.error("Cota do Gemini esgotada: %s", exc.detalhe)
        return _erro(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), exc.detalhe)
    except GeminiServiceError as exc:
        logger.exception("Erro detalhado ao chamar a API Gemini")
        return _erro(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Falha ao comunicar com a IA no servidor.",
            exc.detalhe,
        )

    logger.info("Petição gerada para %s (%d caracteres)", formulario.problem_type, len(texto))
    return PeticaoResponse(text=texto)


if __name__ == "__main__":
    import uvicorn

    logger.info("Servidor rodando na porta %s", Config.PORT)
    uvicorn.run(app, host=Config.HOST, port=Config.PORT)
