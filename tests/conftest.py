import pytest
from fastapi.testclient import TestClient

from app import app
from config import CHAVES_API_KEY


@pytest.fixture
def formulario_completo():
    return {
        "problem-type": "Corte indevido de energia",
        "author-name": "Maria da Silva",
        "author-cpf": "123.456.789-00",
        "author-address": "Rua das Flores, 10, Recife/PE, CEP 50000-000",
        "author-email": "maria@example.com",
        "author-phone": "(81) 99999-0000",
        "action-city-state": "Recife/PE",
        "company-name": "Energia Nordeste S.A.",
        "company-details": "00.000.000/0001-00, Av. Central, 100",
        "dano-moral-pergunta": "sim",
        "moral-value": "R$ 8.000,00",
        "material-value": "R$ 350,00",
        "urgent-decision": "sim",
    }


@pytest.fixture
def formulario_minimo():
    return {"problem-type": "Cobrança indevida", "author-name": "João Souza"}


@pytest.fixture
def sem_api_key(monkeypatch):
    for nome in CHAVES_API_KEY:
        monkeypatch.delenv(nome, raising=False)


@pytest.fixture
def com_api_key(monkeypatch, sem_api_key):
    monkeypatch.setenv("GEMINI_API_KEY", "chave-de-teste")


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
