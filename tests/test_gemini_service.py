import pytest

from services import gemini_service
from services.gemini_service import GeminiConfigError, GeminiCotaError, GeminiServiceError, gerar_peticao


class FakeModels:
    def __init__(self, resposta=None, erro=None):
        self.resposta = resposta
        self.erro = erro
        self.chamadas = []

    def generate_content(self, model, contents):
        self.chamadas.append({"model": model, "contents": contents})
        if self.erro is not None:
            raise self.erro
        return self.resposta


class FakeResponse:
    def __init__(self, text):
        self.text = text


def _instalar_cliente(monkeypatch, models):
    clientes = []

    class FakeClient:
        def __init__(self, api_key):
            clientes.append(api_key)
            self.models = models

    monkeypatch.setattr(gemini_service.genai, "Client", FakeClient)
    return clientes


def test_missing_key_fails_before_client_is_built(monkeypatch, sem_api_key):
    clientes = _instalar_cliente(monkeypatch, FakeModels())

    with pytest.raises(GeminiConfigError) as exc_info:
        gerar_peticao("prompt")

    assert "GEMINI_API_KEY" in exc_info.value.detalhe
    assert clientes == []


def test_returns_text_unmodified(monkeypatch, com_api_key):
    models = FakeModels(resposta=FakeResponse("  EXCELENTÍSSIMO...\n"))
    clientes = _instalar_cliente(monkeypatch, models)
    monkeypatch.delenv("GEMINI_MODEL", raising=False)

    texto = gerar_peticao("meu prompt")

    assert texto == "  EXCELENTÍSSIMO...\n"
    assert clientes == ["chave-de-teste"]
    assert models.chamadas == [
        {"model": "gemini-2.5-pro", "contents": [{"parts": [{"text": "meu prompt"}]}]}
    ]


def test_fallback_key_names_and_model_override(monkeypatch, sem_api_key):
    models = FakeModels(resposta=FakeResponse("ok"))
    clientes = _instalar_cliente(monkeypatch, models)
    monkeypatch.setenv("API_KEY", "chave-render")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-flash")

    gerar_peticao("prompt")

    assert clientes == ["chave-render"]
    assert models.chamadas[0]["model"] == "gemini-2.5-flash"


def test_upstream_error_carries_message(monkeypatch, com_api_key):
    _instalar_cliente(monkeypatch, FakeModels(erro=ConnectionError("conexão recusada")))

    with pytest.raises(GeminiServiceError) as exc_info:
        gerar_peticao("prompt")

    assert not isinstance(exc_info.value, GeminiConfigError)
    assert exc_info.value.detalhe == "conexão recusada"
    assert "conexão recusada" in str(exc_info.value)


def test_quota_error_gets_friendly_message(monkeypatch, com_api_key):
    _instalar_cliente(monkeypatch, FakeModels(erro=RuntimeError("429 RESOURCE_EXHAUSTED")))

    with pytest.raises(GeminiServiceError, match="Cota da API Gemini esgotada") as exc_info:
        gerar_peticao("prompt")

    assert isinstance(exc_info.value, GeminiCotaError)
    assert exc_info.value.detalhe == "429 RESOURCE_EXHAUSTED"


@pytest.mark.parametrize("texto", [None, "", "   "])
def test_empty_response_is_a_failure(monkeypatch, com_api_key, texto):
    _instalar_cliente(monkeypatch, FakeModels(resposta=FakeResponse(texto)))

    with pytest.raises(GeminiServiceError, match="nao retornou texto"):
        gerar_peticao("prompt")
