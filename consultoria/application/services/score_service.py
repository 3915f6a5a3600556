"""Calculo do score estimado a partir do perfil publico do CNPJ. Funcao pura, zero IO.

Tabela canonica (mantida em sincronia com DESIGN.md):
  situacao            contem "ativa" 30 | contem "suspensa" 15 | outra 0
  tempo_atividade     >=10 anos 25 | >=5 20 | >=2 15 | <2 5 | sem data 0
  capital_social      >=1M 20 | >=100k 15 | >=10k 10 | >0 5 | sem valor 0
  atividade_principal baixo risco 15 | medio risco 10 | outra 5 | sem atividade 0
  endereco            logradouro+CEP 10 | so logradouro 5 | nenhum 0
"""

from __future__ import annotations

import unicodedata
from datetime import date, datetime
from decimal import Decimal

from consultoria.domain.empresa.entities import PerfilEmpresa, ResultadoConsulta
from consultoria.domain.score.enums import Fator
from consultoria.domain.score.score import PontuacaoFator, ScoreEstimado

_CAPITAL_ELEVADO = Decimal("1000000")
_CAPITAL_ADEQUADO = Decimal("100000")
_CAPITAL_MODERADO = Decimal("10000")

# Palavras-chave sem acento; o texto da atividade e normalizado antes da busca.
ATIVIDADES_BAIXO_RISCO: tuple[str, ...] = (
    "consultoria", "tecnologia", "software", "educacao", "saude",
    "engenharia", "arquitetura", "advocacia", "contabilidade",
)
ATIVIDADES_MEDIO_RISCO: tuple[str, ...] = (
    "comercio", "varejo", "atacado", "industria", "construcao",
    "transporte", "logistica", "alimentacao",
)


def calcular_score_estimado(
    consulta: ResultadoConsulta | None,
    referencia: date,
) -> ScoreEstimado:
    """Funcao pura. Mesma entrada e mesma referencia = mesmo score."""
    if consulta is None or not consulta.success or consulta.perfil is None:
        return ScoreEstimado(pontuacoes=(), calculado_em=datetime.now(), disponivel=False)

    perfil = consulta.perfil
    pontuacoes = (
        _avaliar_situacao(perfil),
        _avaliar_tempo_atividade(perfil, referencia),
        _avaliar_capital_social(perfil),
        _avaliar_atividade_principal(perfil),
        _avaliar_endereco(perfil),
    )
    return ScoreEstimado(pontuacoes=pontuacoes, calculado_em=datetime.now())


def _sem_acento(texto: str) -> str:
    decomposto = unicodedata.normalize("NFKD", texto.lower())
    return "".join(c for c in decomposto if not unicodedata.combining(c))


def _avaliar_situacao(perfil: PerfilEmpresa) -> PontuacaoFator:
    """SITUACAO (peso 30): situacao contendo "ativa" pontua integralmente."""
    situacao = _sem_acento(perfil.situacao)
    if "ativa" in situacao:
        return PontuacaoFator(Fator.SITUACAO, 30, "Situação cadastral ativa")
    if "suspensa" in situacao:
        return PontuacaoFator(Fator.SITUACAO, 15, "Situação cadastral suspensa")
    if not situacao:
        return PontuacaoFator(Fator.SITUACAO, 0, "Situação cadastral não informada")
    return PontuacaoFator(Fator.SITUACAO, 0, "Situação cadastral irregular")


def _avaliar_tempo_atividade(perfil: PerfilEmpresa, referencia: date) -> PontuacaoFator:
    """TEMPO_ATIVIDADE (peso 25): diferenca em dias / 365."""
    if perfil.data_abertura is None:
        return PontuacaoFator(Fator.TEMPO_ATIVIDADE, 0, "Data de abertura não informada")

    anos = (referencia - perfil.data_abertura).days / 365
    if anos >= 10:
        return PontuacaoFator(Fator.TEMPO_ATIVIDADE, 25, "Empresa com 10 anos ou mais de atividade")
    if anos >= 5:
        return PontuacaoFator(Fator.TEMPO_ATIVIDADE, 20, "Empresa com 5 a 10 anos de atividade")
    if anos >= 2:
        return PontuacaoFator(Fator.TEMPO_ATIVIDADE, 15, "Empresa com 2 a 5 anos de atividade")
    return PontuacaoFator(Fator.TEMPO_ATIVIDADE, 5, "Empresa recente (menos de 2 anos)")


def _avaliar_capital_social(perfil: PerfilEmpresa) -> PontuacaoFator:
    """CAPITAL_SOCIAL (peso 20). Capital ausente ou zero nao pontua."""
    capital = perfil.capital_social
    if capital is None or capital <= 0:
        return PontuacaoFator(Fator.CAPITAL_SOCIAL, 0, "Capital social não informado")
    if capital >= _CAPITAL_ELEVADO:
        return PontuacaoFator(Fator.CAPITAL_SOCIAL, 20, "Capital social elevado (R$ 1M+)")
    if capital >= _CAPITAL_ADEQUADO:
        return PontuacaoFator(Fator.CAPITAL_SOCIAL, 15, "Capital social adequado (R$ 100K+)")
    if capital >= _CAPITAL_MODERADO:
        return PontuacaoFator(Fator.CAPITAL_SOCIAL, 10, "Capital social moderado (R$ 10K+)")
    return PontuacaoFator(Fator.CAPITAL_SOCIAL, 5, "Capital social baixo")


def _avaliar_atividade_principal(perfil: PerfilEmpresa) -> PontuacaoFator:
    """ATIVIDADE_PRINCIPAL (peso 15): atividade nao classificada vale 5, nao zero."""
    if not perfil.atividade_principal.strip():
        return PontuacaoFator(Fator.ATIVIDADE_PRINCIPAL, 0, "Atividade principal não informada")

    atividade = _sem_acento(perfil.atividade_principal)
    if any(palavra in atividade for palavra in ATIVIDADES_BAIXO_RISCO):
        return PontuacaoFator(Fator.ATIVIDADE_PRINCIPAL, 15, "Atividade de baixo risco")
    if any(palavra in atividade for palavra in ATIVIDADES_MEDIO_RISCO):
        return PontuacaoFator(Fator.ATIVIDADE_PRINCIPAL, 10, "Atividade de médio risco")
    return PontuacaoFator(Fator.ATIVIDADE_PRINCIPAL, 5, "Atividade requer análise específica")


def _avaliar_endereco(perfil: PerfilEmpresa) -> PontuacaoFator:
    """ENDERECO (peso 10): logradouro e CEP."""
    logradouro = perfil.endereco.logradouro.strip()
    cep = perfil.endereco.cep.strip()
    if logradouro and cep:
        return PontuacaoFator(Fator.ENDERECO, 10, "Endereço completo informado")
    if logradouro:
        return PontuacaoFator(Fator.ENDERECO, 5, "Endereço parcialmente informado")
    return PontuacaoFator(Fator.ENDERECO, 0, "Endereço incompleto")
