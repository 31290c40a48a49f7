from __future__ import annotations

import json
import re
from string import ascii_lowercase

from services.formulario import FormularioPeticao

PROMPT_BASE = """
Você é um assistente jurídico especialista em criar petições iniciais para o Juizado Especial Cível (JEC) do Brasil, com foco em direito do consumidor contra concessionárias de energia elétrica. Sua linguagem deve ser formal, clara, objetiva e persuasiva.
Baseado nos dados do formulário abaixo, gere o texto completo de uma petição inicial.
""".strip()

SECAO_DIREITO = (
    '**Seção "DO DIREITO":** Fundamente juridicamente o pedido. Cite o Código de Defesa do '
    "Consumidor (CDC), especialmente a falha na prestação de serviço (Art. 14), a responsabilidade "
    "objetiva da empresa, e, se aplicável, a cobrança indevida e o direito à repetição de indébito "
    "(Art. 42), e o dano moral puro (in re ipsa) pela perda de tempo útil e pelo transtorno causado."
)

SECAO_TUTELA_URGENCIA = (
    '**Seção "DA TUTELA DE URGÊNCIA":** O autor pediu uma decisão urgente. Justifique a necessidade '
    'da medida liminar com base no "periculum in mora" (o perigo da demora, ex: o autor está sem '
    'energia) e no "fumus boni iuris" (a fumaça do bom direito, ex: as contas estão pagas), '
    "explicando por que o autor não pode esperar pela decisão final."
)

SECAO_FATOS = (
    '**Seção "DOS FATOS":** Narre os acontecimentos de forma cronológica e detalhada, usando as '
    "respostas do usuário. Seja claro, coeso e direto. Transforme os dados brutos em uma narrativa fluida."
)

# Textos fixos usados quando o campo não foi informado.
LOCAL_NAO_INFORMADO = "[Cidade e Estado não informados]"
LOCAL_FECHAMENTO = "[Local]"
NAO_INFORMADO = "não informado"
AUTOR_NAO_INFORMADO = "[Nome Completo do Autor]"
EMPRESA_NAO_INFORMADA = "[Nome da empresa a ser consultada]"
CNPJ_NAO_INFORMADO = "(a ser consultado)"
SEDE_NAO_INFORMADA = "(endereço a ser consultado)"
TIPO_PROBLEMA_NAO_INFORMADO = "[Tipo de problema não informado]"
DANO_MORAL_PADRAO = "R$ 5.000,00 (cinco mil reais)"
DANO_MORAL_PADRAO_SOMA = "5000"

NACIONALIDADE = "brasileiro(a)"
ESTADO_CIVIL = "estado civil desconhecido"
PROFISSAO = "profissão desconhecida"


def _ou(valor: str | None, fallback: str) -> str:
    return valor if valor is not None else fallback


def valor_zerado(valor: str | None) -> bool:
    """
    True para "R$ 0,00" e equivalentes ("0", "0,00", "R$0").

    Vai de propósito além da comparação exata com "R$ 0,00": qualquer zero
    escrito com ou sem "R$", ponto e vírgula é descartado. Os demais valores
    não vazios entram como vieram.
    """
    if valor is None:
        return True
    digitos = re.sub(r"R\$|[\s.,]", "", valor)
    return bool(digitos) and set(digitos) == {"0"}


def secao_enderecamento(formulario: FormularioPeticao) -> str:
    comarca = _ou(formulario.action_city_state, LOCAL_NAO_INFORMADO)
    return (
        '**Endereçamento:** "EXCELENTÍSSIMO(A) SENHOR(A) DOUTOR(A) JUIZ(A) DE DIREITO DO JUIZADO '
        f'ESPECIAL CÍVEL DA COMARCA DE {comarca}."'
    )


def secao_qualificacao_autor(formulario: FormularioPeticao) -> str:
    linhas = [
        "**Qualificação Completa do Autor:** Use exatamente os dados abaixo.",
        f"   - Nome completo: {_ou(formulario.author_name, AUTOR_NAO_INFORMADO)}",
        f"   - Nacionalidade: {NACIONALIDADE}",
        f"   - Estado civil: {ESTADO_CIVIL}",
        f"   - Profissão: {PROFISSAO}",
        f"   - CPF nº: {_ou(formulario.author_cpf, NAO_INFORMADO)}",
        f"   - Endereço completo com CEP: {_ou(formulario.author_address, NAO_INFORMADO)}",
        f"   - E-mail: {_ou(formulario.author_email, NAO_INFORMADO)}",
        f"   - Telefone: {_ou(formulario.author_phone, NAO_INFORMADO)}",
    ]
    return "\n".join(linhas)


def secao_qualificacao_re(formulario: FormularioPeticao) -> str:
    empresa = _ou(formulario.company_name, EMPRESA_NAO_INFORMADA)
    detalhes = formulario.company_details
    cnpj = f"(CNPJ: {detalhes})" if detalhes is not None else CNPJ_NAO_INFORMADO
    sede = f"({detalhes})" if detalhes is not None else SEDE_NAO_INFORMADA
    return (
        f"**Qualificação da Ré:** {empresa}, pessoa jurídica de direito privado, "
        f"inscrita no CNPJ sob o nº {cnpj}, com sede em {sede}."
    )


def secao_fatos(formulario: FormularioPeticao) -> str:
    return SECAO_FATOS


def secao_direito(formulario: FormularioPeticao) -> str:
    return SECAO_DIREITO


def secao_tutela_urgencia(formulario: FormularioPeticao) -> str:
    if not formulario.pede_tutela_urgencia:
        return ""
    return SECAO_TUTELA_URGENCIA


def pedidos_condenacao(formulario: FormularioPeticao) -> list[str]:
    itens: list[str] = []
    if not valor_zerado(formulario.material_value):
        itens.append(f"Pagar indenização por danos materiais no valor de {formulario.material_value};")
    if formulario.pede_dano_moral:
        valor = _ou(formulario.moral_value, DANO_MORAL_PADRAO)
        itens.append(
            f"Pagar indenização por danos morais em valor de {valor}, "
            "ou em valor superior a ser arbitrado por Vossa Excelência;"
        )
    return itens


def secao_pedidos(formulario: FormularioPeticao) -> str:
    pedidos = ["A citação da ré para responder à presente ação, sob pena de revelia;"]
    if formulario.pede_tutela_urgencia:
        pedidos.append(
            "A concessão da tutela de urgência, para determinar que a ré [descreva o pedido liminar "
            "com base nos fatos, ex: restabeleça o fornecimento de energia no endereço do autor em "
            "24h, sob pena de multa diária];"
        )
    pedidos.append("A inversão do ônus da prova, conforme o Art. 6º, VIII, do CDC;")

    procedencia = "A procedência total da ação"
    if formulario.pede_tutela_urgencia:
        procedencia += " para confirmar a tutela de urgência"
    condenacoes = pedidos_condenacao(formulario)
    if condenacoes:
        procedencia += " e condenar a ré a:\n" + "\n".join(f"       - {item}" for item in condenacoes)
    else:
        procedencia += ";"
    pedidos.append(procedencia)
    pedidos.append(
        "A condenação da ré ao pagamento das custas processuais e honorários advocatícios, se houver."
    )

    linhas = ['**Seção "DOS PEDIDOS":** Liste todos os pedidos de forma clara e numerada:']
    linhas.extend(f"   {letra}) {pedido}" for letra, pedido in zip(ascii_lowercase, pedidos))
    return "\n".join(linhas)


def secao_valor_causa(formulario: FormularioPeticao) -> str:
    parcelas: list[str] = []
    if not valor_zerado(formulario.material_value):
        parcelas.append(f"dano material ({formulario.material_value})")
    if formulario.pede_dano_moral:
        if formulario.moral_value is not None:
            parcelas.append(f"dano moral ({formulario.moral_value})")
        else:
            parcelas.append(f"dano moral (não informado, some {DANO_MORAL_PADRAO_SOMA})")

    # O valor padrão só entra quando o dano moral foi pedido sem valor.
    soma = " + ".join(parcelas) if parcelas else "nenhum valor de dano pedido"
    return (
        '**Seção "DO VALOR DA CAUSA":** Atribua à causa o valor de R$ [some os valores de dano '
        f"material e moral aqui: {soma}]."
    )


def secao_fechamento(formulario: FormularioPeticao) -> str:
    local = _ou(formulario.action_city_state, LOCAL_FECHAMENTO)
    autor = _ou(formulario.author_name, AUTOR_NAO_INFORMADO)
    return (
        '**Fechamento:** "Nestes termos, pede deferimento.\n\n'
        f"{local}, [Data].\n\n"
        "________________________________________\n"
        f'{autor}"'
    )


# Ordem fixa das seções; seções vazias (tutela sem pedido) saem da numeração.
SECOES = (
    secao_enderecamento,
    secao_qualificacao_autor,
    secao_qualificacao_re,
    secao_fatos,
    secao_direito,
    secao_tutela_urgencia,
    secao_pedidos,
    secao_valor_causa,
    secao_fechamento,
)


def montar_estrutura(formulario: FormularioPeticao) -> str:
    blocos = [secao(formulario) for secao in SECOES]
    blocos = [bloco for bloco in blocos if bloco]
    return "\n".join(f"{numero}. {bloco}" for numero, bloco in enumerate(blocos, start=1))


def montar_dados_caso(formulario: FormularioPeticao) -> str:
    # Chaves enviadas como null saem do resumo para que o prompt nunca traga o
    # marcador "null"; o restante do formulário vai inteiro.
    dados = {chave: valor for chave, valor in formulario.dados_brutos.items() if valor is not None}
    dados_json = json.dumps(dados, ensure_ascii=False, indent=2, default=str)
    tipo = _ou(formulario.problem_type, TIPO_PROBLEMA_NAO_INFORMADO)
    return f"""DADOS DETALHADOS DO CASO PARA USAR NA NARRAÇÃO DOS FATOS:
- **Tipo de Problema:** {tipo}
- **Resumo dos Dados Fornecidos:**
{dados_json}"""


def montar_prompt(formulario: FormularioPeticao) -> str:
    return f"""{PROMPT_BASE}

ESTRUTURA DA PETIÇÃO:
{montar_estrutura(formulario)}

{montar_dados_caso(formulario)}

Agora, redija a petição completa.
"""
