from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .enums import Classificacao, Fator

# ADR: Pesos como constante de modulo, nao hardcoded em funcoes.
PESOS: dict[Fator, int] = {
    Fator.SITUACAO: 30,
    Fator.TEMPO_ATIVIDADE: 25,
    Fator.CAPITAL_SOCIAL: 20,
    Fator.ATIVIDADE_PRINCIPAL: 15,
    Fator.ENDERECO: 10,
}
# Soma maxima: 30+25+20+15+10 = 100.

MENSAGEM_INDISPONIVEL = "Dados do CNPJ não disponíveis"

CORES: dict[Classificacao, str] = {
    Classificacao.EXCELENTE: "#28a745",
    Classificacao.BOM: "#17a2b8",
    Classificacao.REGULAR: "#ffc107",
    Classificacao.BAIXO: "#fd7e14",
    Classificacao.CRITICO: "#dc3545",
    Classificacao.INDISPONIVEL: "#6c757d",
}

RECOMENDACOES: dict[Classificacao, str] = {
    Classificacao.EXCELENTE: (
        "Cliente com excelente perfil. Recomendado para aprovação com condições preferenciais."
    ),
    Classificacao.BOM: (
        "Cliente com bom perfil. Recomendado para aprovação com condições padrão."
    ),
    Classificacao.REGULAR: (
        "Cliente com perfil regular. Recomenda-se análise adicional e condições restritivas."
    ),
    Classificacao.BAIXO: (
        "Cliente com perfil de risco. Recomenda-se análise criteriosa e garantias adicionais."
    ),
    Classificacao.CRITICO: (
        "Cliente com perfil crítico. Não recomendado para aprovação sem análise presencial detalhada."
    ),
    Classificacao.INDISPONIVEL: (
        "Dados do CNPJ indisponíveis. Score não calculado; realizar análise manual."
    ),
}


def classificar(valor: int) -> Classificacao:
    if valor >= 80:
        return Classificacao.EXCELENTE
    if valor >= 60:
        return Classificacao.BOM
    if valor >= 40:
        return Classificacao.REGULAR
    if valor >= 20:
        return Classificacao.BAIXO
    return Classificacao.CRITICO


@dataclass(frozen=True)
class PontuacaoFator:
    """Pontuacao de um fator individual. Nunca excede o peso da tabela PESOS."""

    fator: Fator
    pontos: int
    descricao: str

    def __post_init__(self) -> None:
        if not 0 <= self.pontos <= PESOS[self.fator]:
            raise ValueError(
                f"Pontuacao {self.pontos} fora do intervalo 0..{PESOS[self.fator]} para {self.fator.value}"
            )


@dataclass(frozen=True)
class ScoreEstimado:
    """Score calculado. Imutavel, derivado das pontuacoes por fator."""

    pontuacoes: tuple[PontuacaoFator, ...]
    calculado_em: datetime
    disponivel: bool = True

    @property
    def valor(self) -> int:
        """Soma das pontuacoes. Sempre igual a soma de detalhes."""
        return sum(p.pontos for p in self.pontuacoes)

    @property
    def detalhes(self) -> dict[str, int]:
        por_fator = {p.fator: p.pontos for p in self.pontuacoes}
        return {f.value: por_fator.get(f, 0) for f in Fator}

    @property
    def fatores(self) -> tuple[str, ...]:
        if not self.disponivel:
            return (MENSAGEM_INDISPONIVEL,)
        return tuple(p.descricao for p in self.pontuacoes)

    @property
    def classificacao(self) -> Classificacao:
        if not self.disponivel:
            return Classificacao.INDISPONIVEL
        return classificar(self.valor)

    @property
    def cor(self) -> str:
        return CORES[self.classificacao]

    @property
    def recomendacao(self) -> str:
        return RECOMENDACOES[self.classificacao]
