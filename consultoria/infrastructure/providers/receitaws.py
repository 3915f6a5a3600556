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


class ReceitaWS:
    """ReceitaWS: campos planos, datas DD/MM/YYYY, capital como "1000000.00"."""

    nome = "ReceitaWS"
    oficial = False

    def url(self, cnpj: str) -> str:
        return f"https://www.receitaws.com.br/v1/cnpj/{cnpj}"

    def normalizar(self, dados: dict[str, Any]) -> PerfilEmpresa | None:
        razao_social = texto(dados.get("nome"))
        if not razao_social:
            return None

        principais = [a for a in dados.get("atividade_principal") or [] if isinstance(a, dict)]
        principal = atividade(principais[0].get("code"), principais[0].get("text")) if principais else ""

        secundarias = tuple(
            atividade(a.get("code"), a.get("text"))
            for a in dados.get("atividades_secundarias") or []
            if isinstance(a, dict) and (a.get("code") or a.get("text"))
        )
        # ReceitaWS nao informa data de entrada dos socios.
        socios = tuple(
            Socio(nome=texto(s.get("nome")), qualificacao=texto(s.get("qual")))
            for s in dados.get("qsa") or []
            if isinstance(s, dict)
        )

        return PerfilEmpresa(
            cnpj=texto(dados.get("cnpj")),
            razao_social=razao_social,
            nome_fantasia=texto(dados.get("fantasia")),
            situacao=texto(dados.get("situacao")),
            data_situacao=texto(dados.get("data_situacao")),
            motivo_situacao=texto(dados.get("motivo_situacao")),
            data_abertura=parse_data(dados.get("abertura")),
            natureza_juridica=texto(dados.get("natureza_juridica")),
            porte=texto(dados.get("porte")),
            capital_social=parse_capital_social(dados.get("capital_social")),
            endereco=Endereco(
                logradouro=texto(dados.get("logradouro")),
                numero=texto(dados.get("numero")),
                complemento=texto(dados.get("complemento")),
                bairro=texto(dados.get("bairro")),
                municipio=texto(dados.get("municipio")),
                uf=texto(dados.get("uf")),
                cep=texto(dados.get("cep")),
            ),
            telefone=texto(dados.get("telefone")),
            email=texto(dados.get("email")),
            atividade_principal=principal,
            atividades_secundarias=secundarias,
            socios=socios,
        )
