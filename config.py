from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# Origens do front-end publicado (Netlify) e do ambiente local.
ORIGENS_PADRAO = (
    "https://inspiring-pika-02f0fd.netlify.app",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
)

CHAVES_API_KEY = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


class Config:
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT") or 10000)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    ORIGENS_PERMITIDAS = list(ORIGENS_PADRAO)


# Lida a cada chamada para que corrigir o ambiente valha para as próximas requisições.
def obter_api_key() -> str:
    for nome in CHAVES_API_KEY:
        valor = (os.getenv(nome) or "").strip()
        if valor:
            return valor
    return ""
