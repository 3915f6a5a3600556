from __future__ import annotations

from enum import Enum


class Fator(str, Enum):
    SITUACAO = "situacao"
    TEMPO_ATIVIDADE = "tempo_atividade"
    CAPITAL_SOCIAL = "capital_social"
    ATIVIDADE_PRINCIPAL = "atividade_principal"
    ENDERECO = "endereco"


class Classificacao(str, Enum):
    EXCELENTE = "Excellent"
    BOM = "Good"
    REGULAR = "Regular"
    BAIXO = "Low"
    CRITICO = "Critical"
    INDISPONIVEL = "unavailable"
