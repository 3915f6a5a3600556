from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from consultoria.domain.empresa.value_objects import limpar_cnpj

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

TIPOS_CONSULTORIA: dict[str, str] = {
    "capital-giro": "Capital de Giro",
    "expansao": "Expansão de Negócio",
    "modernizacao": "Modernização",
    "investimento": "Investimento em Equipamentos",
    "outros": "Outros",
}


def mapear_tipo_consultoria(tipo: str) -> str:
    """Slug do formulario para o rotulo exibido. Valores desconhecidos passam direto."""
    return TIPOS_CONSULTORIA.get(tipo, tipo)


@dataclass(frozen=True)
class SolicitacaoConsultoria:
    nome_completo: str
    email: str
    telefone: str
    empresa: str
    cnpj: str
    tempo_existencia: str
    faturamento_anual: str
    tipo_consultoria: str
    mensagem: str

    @property
    def tipo_consultoria_rotulo(self) -> str:
        return mapear_tipo_consultoria(self.tipo_consultoria)

    @classmethod
    def from_form(cls, dados: Mapping[str, str | None]) -> SolicitacaoConsultoria:
        """Constroi a partir do formulario ja validado por validar_solicitacao()."""
        return cls(
            **{campo: (dados.get(campo) or "").strip() for campo in cls.__dataclass_fields__}
        )


def validar_solicitacao(dados: Mapping[str, str | None]) -> list[str]:
    """Retorna a lista de erros do formulario. Lista vazia = valido."""
    erros: list[str] = []

    def campo(nome: str) -> str:
        return (dados.get(nome) or "").strip()

    if len(campo("nome_completo")) < 2:
        erros.append("Nome completo é obrigatório e deve ter pelo menos 2 caracteres")
    if not _EMAIL.match(campo("email")):
        erros.append("Email válido é obrigatório")
    if len(campo("telefone")) < 10:
        erros.append("Telefone válido é obrigatório")
    if len(campo("empresa")) < 2:
        erros.append("Nome da empresa é obrigatório")

    cnpj = campo("cnpj")
    if len(cnpj) < 14:
        erros.append("CNPJ é obrigatório e deve ser válido")
    elif len(limpar_cnpj(cnpj)) != 14:
        erros.append("CNPJ deve conter 14 dígitos")

    if not campo("tempo_existencia"):
        erros.append("Tempo de existência da empresa é obrigatório")
    if not campo("faturamento_anual"):
        erros.append("Faturamento anual é obrigatório")
    if not campo("tipo_consultoria"):
        erros.append("Tipo de consultoria é obrigatório")
    if len(campo("mensagem")) < 5:
        erros.append("Descrição do projeto é obrigatória e deve ter pelo menos 5 caracteres")

    return erros
