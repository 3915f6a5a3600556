"""Consulta de CNPJ com fallback sequencial entre provedores.

Politica: ordem fixa, um provedor por vez, primeiro sucesso vence. Sem retry e
sem backoff. Falhas de provedor (rede, timeout, status, corpo invalido) nunca
chegam ao chamador; so aparecem como `all_providers_failed` quando todos falham.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

import httpx

from consultoria.domain.empresa.entities import (
    FONTE_TODAS_FALHARAM,
    FONTE_VALIDACAO,
    PerfilEmpresa,
    ResultadoConsulta,
)
from consultoria.domain.empresa.value_objects import CNPJ, limpar_cnpj
from consultoria.infrastructure.log import log
from consultoria.infrastructure.providers.base import ProvedorCNPJ
from consultoria.infrastructure.providers.brasilapi import BrasilAPI
from consultoria.infrastructure.providers.cnpjws import CNPJws
from consultoria.infrastructure.providers.receitaws import ReceitaWS

HEADERS = {
    "User-Agent": "AporteCapital/1.0",
    "Accept": "application/json",
}
TIMEOUT_PADRAO = 10.0

ERRO_VALIDACAO = "CNPJ deve ter 14 dígitos"
ERRO_TODAS_FALHARAM = (
    "Não foi possível consultar o CNPJ no momento. Todas as APIs estão indisponíveis."
)


def provedores_padrao() -> tuple[ProvedorCNPJ, ...]:
    """Ordem de prioridade: fonte oficial primeiro, depois espelhos de terceiros."""
    return (BrasilAPI(), ReceitaWS(), CNPJws())


class ConsultaCNPJService:
    """Imperative Shell: faz IO de rede e delega a normalizacao a cada provedor."""

    def __init__(
        self,
        client: httpx.Client,
        provedores: Sequence[ProvedorCNPJ] | None = None,
        timeout: float = TIMEOUT_PADRAO,
        relogio: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._client = client
        self._provedores = tuple(provedores) if provedores is not None else provedores_padrao()
        self._timeout = timeout
        self._relogio = relogio

    def consultar(self, cnpj_raw: str) -> ResultadoConsulta:
        cnpj = limpar_cnpj(cnpj_raw)
        log(f"Consultando CNPJ: {cnpj}")

        if len(cnpj) != 14:
            return ResultadoConsulta.falha(ERRO_VALIDACAO, FONTE_VALIDACAO, self._relogio())

        for provedor in self._provedores:
            perfil = self._tentar_provedor(provedor, cnpj)
            if perfil is not None:
                log(f"  Dados obtidos com sucesso via {provedor.nome}")
                return ResultadoConsulta.sucesso(
                    perfil=perfil,
                    fonte=provedor.nome,
                    oficial=provedor.oficial,
                    consultado_em=self._relogio(),
                )

        log(f"  CNPJ {cnpj}: todos os provedores falharam")
        return ResultadoConsulta.falha(ERRO_TODAS_FALHARAM, FONTE_TODAS_FALHARAM, self._relogio())

    def _tentar_provedor(self, provedor: ProvedorCNPJ, cnpj: str) -> PerfilEmpresa | None:
        """Uma tentativa, sem retry. Qualquer falha vira None e o proximo provedor e tentado."""
        log(f"  Tentando API: {provedor.nome}")
        try:
            response = self._client.get(
                provedor.url(cnpj),
                headers=HEADERS,
                timeout=self._timeout,
                follow_redirects=True,
            )
        except httpx.HTTPError as err:
            log(f"  Erro na API {provedor.nome}: {err.__class__.__name__}: {err}")
            return None

        if not response.is_success:
            log(f"  API {provedor.nome} retornou status: {response.status_code}")
            return None

        try:
            dados: Any = response.json()
        except ValueError:
            log(f"  API {provedor.nome} retornou corpo invalido")
            return None

        if not dados or not isinstance(dados, dict) or dados.get("status") == "ERROR":
            log(f"  API {provedor.nome} retornou erro: {dados!r:.200}")
            return None

        try:
            perfil = provedor.normalizar(dados)
        except (ValueError, TypeError, AttributeError, KeyError, ArithmeticError) as err:
            log(f"  Erro ao normalizar dados de {provedor.nome}: {err}")
            return None

        if perfil is None:
            log(f"  API {provedor.nome}: dados incompletos (sem razao social)")
            return None
        return dataclasses.replace(perfil, cnpj=_cnpj_formatado(perfil.cnpj, cnpj))


def _cnpj_formatado(informado: str, consultado: str) -> str:
    """Provedores devolvem o CNPJ com ou sem mascara, ou nem devolvem."""
    try:
        return CNPJ(informado).formatado
    except ValueError:
        return CNPJ(consultado).formatado
