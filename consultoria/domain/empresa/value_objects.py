from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

_NAO_DIGITO = re.compile(r"\D")
_DECIMAL_COM_PONTO = re.compile(r"^\d+\.\d{1,2}$")


def limpar_cnpj(raw: str) -> str:
    """Remove pontuacao, barras, hifens e qualquer outro nao-digito."""
    return _NAO_DIGITO.sub("", raw or "")


@dataclass(frozen=True)
class CNPJ:
    """Value Object imutavel para CNPJ. Aceita qualquer formatacao com 14 digitos."""

    _valor: str  # sempre 14 digitos sem formatacao

    def __init__(self, raw: str) -> None:
        digitos = limpar_cnpj(raw)
        if len(digitos) != 14:
            raise ValueError(f"CNPJ invalido: comprimento {len(digitos)}, esperado 14")
        object.__setattr__(self, "_valor", digitos)

    @property
    def valor(self) -> str:
        """14 digitos sem formatacao."""
        return self._valor

    @property
    def formatado(self) -> str:
        """XX.XXX.XXX/XXXX-XX"""
        d = self._valor
        return f"{d[:2]}.{d[2:5]}.{d[5:8]}/{d[8:12]}-{d[12:]}"

    def __repr__(self) -> str:
        return f"CNPJ({self.formatado!r})"

    def __str__(self) -> str:
        return self.formatado


@dataclass(frozen=True)
class Endereco:
    logradouro: str = ""
    numero: str = ""
    complemento: str = ""
    bairro: str = ""
    municipio: str = ""
    uf: str = ""
    cep: str = ""


@dataclass(frozen=True)
class Socio:
    nome: str
    qualificacao: str = ""
    data_entrada: str = ""


def parse_capital_social(raw: object) -> Decimal | None:
    """Converte capital social em Decimal. Nunca float.

    Aceita numeros (BrasilAPI), "1000000.00" (ReceitaWS) e formatos locais
    como "R$ 1.500.000,50". Retorna None se vazio ou ilegivel.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float, Decimal)):
        valor = Decimal(str(raw))
        # json aceita NaN e Infinity
        if not valor.is_finite() or valor < 0:
            return None
        return valor

    texto = re.sub(r"[^\d,.]", "", str(raw))
    if not texto:
        return None
    if "," in texto:
        # formato brasileiro: ponto = milhar, virgula = decimal
        texto = texto.replace(".", "").replace(",", ".", 1).replace(",", "")
    elif not _DECIMAL_COM_PONTO.match(texto):
        texto = texto.replace(".", "")
    try:
        return Decimal(texto)
    except InvalidOperation:
        return None


def parse_data(raw: object) -> date | None:
    """Aceita YYYY-MM-DD (com ou sem horario) e DD/MM/YYYY."""
    if not raw or not isinstance(raw, str):
        return None
    texto = raw.strip()
    for formato in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(texto[:10], formato).date()
        except ValueError:
            continue
    return None
