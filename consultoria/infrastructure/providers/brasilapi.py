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


class BrasilAPI:
    nome = "BrasilAPI"
    oficial = True

    def url(self, cnpj: str) -> str:
        return f"https://brasilapi.com.br/api/cnpj/v1/{cnpj}"

    def normalizar(self, dados: dict[str, Any]) -> PerfilEmpresa | None:
        company = dados.get("company") if isinstance(dados.get("company"), dict) else {}
        razao_social = texto(dados.get("razao_social")) or texto(company.get("name"))
        if not razao_social:
            return None

        cnae = dados.get("cnae_fiscal_principal")
        if isinstance(cnae, dict):
            principal = atividade(cnae.get("codigo"), cnae.get("descricao"))
        else:
            principal = atividade(dados.get("cnae_fiscal"), dados.get("cnae_fiscal_descricao"))

        secundarias = tuple(
            atividade(c.get("codigo"), c.get("descricao"))
            for c in dados.get("cnaes_secundarios") or []
            if isinstance(c, dict) and (c.get("codigo") or c.get("descricao"))
        )
        socios = tuple(
            Socio(
                nome=texto(s.get("nome_socio")),
                qualificacao=texto(s.get("qualificacao_socio")),
                data_entrada=texto(s.get("data_entrada_sociedade")),
            )
            for s in dados.get("qsa") or []
            if isinstance(s, dict)
        )
        logradouro = " ".join(
            p
            for p in (texto(dados.get("descricao_tipo_de_logradouro")), texto(dados.get("logradouro")))
            if p
        )

        return PerfilEmpresa(
            cnpj=texto(dados.get("cnpj")),
            razao_social=razao_social,
            nome_fantasia=texto(dados.get("nome_fantasia")) or texto(dados.get("alias")),
            situacao=texto(dados.get("descricao_situacao_cadastral")) or texto(dados.get("status")),
            data_situacao=texto(dados.get("data_situacao_cadastral")),
            motivo_situacao=texto(dados.get("descricao_motivo_situacao_cadastral")),
            data_abertura=parse_data(dados.get("data_inicio_atividade") or dados.get("founded")),
            natureza_juridica=(
                texto(dados.get("descricao_natureza_juridica")) or texto(dados.get("natureza_juridica"))
            ),
            porte=texto(dados.get("porte")) or texto(dados.get("descricao_porte")),
            capital_social=parse_capital_social(dados.get("capital_social")),
            endereco=Endereco(
                logradouro=logradouro,
                numero=texto(dados.get("numero")),
                complemento=texto(dados.get("complemento")),
                bairro=texto(dados.get("bairro")),
                municipio=texto(dados.get("municipio")),
                uf=texto(dados.get("uf")),
                cep=texto(dados.get("cep")),
            ),
            telefone=texto(dados.get("ddd_telefone_1")),
            email=texto(dados.get("email")),
            atividade_principal=principal,
            atividades_secundarias=secundarias,
            socios=socios,
        )
