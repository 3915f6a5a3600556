from __future__ import annotations

from typing import Any

from consultoria.domain.empresa.entities import PerfilEmpresa
from consultoria.domain.empresa.value_objects import (
    Endereco,
    Socio,
    parse_capital_social,
    parse_data,
)

from .base import atividade, texto


def _descricao(valor: Any) -> str:
    """CNPJ.ws aninha descricoes em objetos: {"id": ..., "descricao": ...}."""
    if isinstance(valor, dict):
        return texto(valor.get("descricao"))
    return texto(valor)


class CNPJws:
    """API publica do CNPJ.ws: dados do estabelecimento aninhados em `estabelecimento`."""

    nome = "CNPJ.ws"
    oficial = False

    def url(self, cnpj: str) -> str:
        return f"https://publica.cnpj.ws/cnpj/{cnpj}"

    def normalizar(self, dados: dict[str, Any]) -> PerfilEmpresa | None:
        razao_social = texto(dados.get("razao_social"))
        if not razao_social:
            return None

        est = dados.get("estabelecimento")
        if not isinstance(est, dict):
            est = {}

        principal_raw = est.get("atividade_principal")
        principal = ""
        if isinstance(principal_raw, dict):
            principal = atividade(
                principal_raw.get("subclasse") or principal_raw.get("id"),
                principal_raw.get("descricao"),
            )
        secundarias = tuple(
            atividade(a.get("subclasse") or a.get("id"), a.get("descricao"))
            for a in est.get("atividades_secundarias") or []
            if isinstance(a, dict)
        )
        socios = tuple(
            Socio(
                nome=texto(s.get("nome")),
                qualificacao=_descricao(s.get("qualificacao_socio")),
                data_entrada=texto(s.get("data_entrada")),
            )
            for s in dados.get("socios") or []
            if isinstance(s, dict)
        )
        logradouro = " ".join(
            p for p in (texto(est.get("tipo_logradouro")), texto(est.get("logradouro"))) if p
        )
        ddd, numero_telefone = texto(est.get("ddd1")), texto(est.get("telefone1"))
        telefone = f"({ddd}) {numero_telefone}" if ddd and numero_telefone else numero_telefone

        return PerfilEmpresa(
            cnpj=texto(est.get("cnpj")),
            razao_social=razao_social,
            nome_fantasia=texto(est.get("nome_fantasia")),
            situacao=texto(est.get("situacao_cadastral")),
            data_situacao=texto(est.get("data_situacao_cadastral")),
            motivo_situacao=_descricao(est.get("motivo_situacao_cadastral")),
            data_abertura=parse_data(est.get("data_inicio_atividade")),
            natureza_juridica=_descricao(dados.get("natureza_juridica")),
            porte=_descricao(dados.get("porte")),
            capital_social=parse_capital_social(dados.get("capital_social")),
            endereco=Endereco(
                logradouro=logradouro,
                numero=texto(est.get("numero")),
                complemento=texto(est.get("complemento")),
                bairro=texto(est.get("bairro")),
                municipio=_nome(est.get("cidade")),
                uf=_sigla(est.get("estado")),
                cep=texto(est.get("cep")),
            ),
            telefone=telefone,
            email=texto(est.get("email")),
            atividade_principal=principal,
            atividades_secundarias=secundarias,
            socios=socios,
        )


def _nome(valor: Any) -> str:
    return texto(valor.get("nome")) if isinstance(valor, dict) else texto(valor)


def _sigla(valor: Any) -> str:
    return texto(valor.get("sigla")) if isinstance(valor, dict) else texto(valor)
