from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

CAMPOS_OBRIGATORIOS = ("problem-type", "author-name")


# Erro de validação do formulário, convertido em HTTP 400 pela API.
class FormularioInvalidoError(ValueError):
    """Raised when the submitted form is empty or incomplete."""


class FormularioPeticao(BaseModel):
    """
    Dados do formulário de intake, com os nomes de campo do front-end como alias.

    Valores ausentes, nulos ou em branco ficam como None. Valores que nao sao
    texto sao guardados na forma serializada em JSON, sem gerar erro.
    """

    model_config = ConfigDict(extra="allow")

    problem_type: str | None = Field(default=None, alias="problem-type")
    author_name: str | None = Field(default=None, alias="author-name")
    author_cpf: str | None = Field(default=None, alias="author-cpf")
    author_address: str | None = Field(default=None, alias="author-address")
    author_email: str | None = Field(default=None, alias="author-email")
    author_phone: str | None = Field(default=None, alias="author-phone")
    action_city_state: str | None = Field(default=None, alias="action-city-state")
    company_name: str | None = Field(default=None, alias="company-name")
    company_details: str | None = Field(default=None, alias="company-details")
    dano_moral_pergunta: str | None = Field(default=None, alias="dano-moral-pergunta")
    moral_value: str | None = Field(default=None, alias="moral-value")
    material_value: str | None = Field(default=None, alias="material-value")
    urgent_decision: str | None = Field(default=None, alias="urgent-decision")

    _bruto: dict[str, Any] = PrivateAttr(default_factory=dict)

    @field_validator("*", mode="before")
    @classmethod
    def como_texto(cls, valor: Any) -> str | None:
        if valor is None:
            return None
        if not isinstance(valor, str):
            valor = json.dumps(valor, ensure_ascii=False, default=str)
        if not valor.strip():
            return None
        return valor

    @classmethod
    def do_payload(cls, dados: dict[str, Any]) -> "FormularioPeticao":
        formulario = cls.model_validate(dados)
        formulario._bruto = dict(dados)
        return formulario

    @property
    def dados_brutos(self) -> dict[str, Any]:
        return dict(self._bruto)

    @property
    def pede_tutela_urgencia(self) -> bool:
        return self.urgent_decision == "sim"

    @property
    def pede_dano_moral(self) -> bool:
        return self.dano_moral_pergunta == "sim"


def _campo_em_branco(valor: Any) -> bool:
    if valor is None:
        return True
    return isinstance(valor, str) and not valor.strip()


# Guarda mínima antes de montar o prompt: nao valida formato de CPF, e-mail ou valores.
def validar_formulario(dados: Any) -> FormularioPeticao:
    if not isinstance(dados, dict) or not dados:
        raise FormularioInvalidoError("Nenhum dado recebido do formulário.")

    faltando = [campo for campo in CAMPOS_OBRIGATORIOS if _campo_em_branco(dados.get(campo))]
    if faltando:
        raise FormularioInvalidoError(
            "Campos obrigatórios não preenchidos: " + ", ".join(faltando) + "."
        )

    return FormularioPeticao.do_payload(dados)
