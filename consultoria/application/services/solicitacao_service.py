from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

from consultoria.domain.empresa.entities import ResultadoConsulta
from consultoria.domain.link.entities import ArquivoRef
from consultoria.domain.score.score import ScoreEstimado
from consultoria.domain.solicitacao.entities import SolicitacaoConsultoria
from consultoria.infrastructure.email_sender import EnviadorEmail
from consultoria.infrastructure.email_templates import (
    assunto_email_equipe,
    html_email_confirmacao,
    html_email_equipe,
)
from consultoria.infrastructure.link_registry import RegistroLinks
from consultoria.infrastructure.log import log

from .consulta_cnpj_service import ConsultaCNPJService
from .score_service import calcular_score_estimado
from .whatsapp_service import mensagem_whatsapp_cliente, mensagem_whatsapp_empresa, url_whatsapp

ASSUNTO_CONFIRMACAO = "Confirmação de Solicitação - Aporte Capital"


@dataclass(frozen=True)
class ResultadoSolicitacao:
    consulta: ResultadoConsulta
    score: ScoreEstimado
    email_enviado: bool
    whatsapp_url: str
    whatsapp_url_empresa: str
    link_id: str | None = None
    url_download: str | None = None


class SolicitacaoService:
    """Imperative Shell: orquestra consulta, score, link, emails e WhatsApp."""

    def __init__(
        self,
        consulta_service: ConsultaCNPJService,
        registro_links: RegistroLinks,
        email_sender: EnviadorEmail,
        email_equipe: str,
        whatsapp_numero: str,
        base_url: str,
        email_cc: str | None = None,
        max_downloads: int = 5,
        ttl_horas: int = 48,
        relogio: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._consulta_service = consulta_service
        self._registro_links = registro_links
        self._email_sender = email_sender
        self._email_equipe = email_equipe
        self._email_cc = email_cc or None
        self._whatsapp_numero = whatsapp_numero
        self._base_url = base_url.rstrip("/")
        self._max_downloads = max_downloads
        self._ttl_horas = ttl_horas
        self._relogio = relogio

    def url_download(self, link_id: str) -> str:
        return f"{self._base_url}/download/{link_id}"

    def processar(
        self,
        solicitacao: SolicitacaoConsultoria,
        arquivos: Sequence[ArquivoRef] = (),
    ) -> ResultadoSolicitacao:
        """Processa uma solicitacao ja validada.

        Ao emitir o link, os arquivos passam a ser responsabilidade do
        RegistroLinks e sao removidos na limpeza periodica.
        """
        agora = self._relogio()

        consulta = self._consulta_service.consultar(solicitacao.cnpj)
        score = calcular_score_estimado(consulta, agora.date())
        if consulta.success:
            log(f"Score calculado: {score.valor}/100 - {score.classificacao.value}")
        else:
            log(f"Consulta do CNPJ falhou ({consulta.fonte}): {consulta.erro}")

        link_id: str | None = None
        url_download: str | None = None
        if arquivos:
            link_id = self._registro_links.emitir(
                arquivos, max_downloads=self._max_downloads, ttl_horas=self._ttl_horas
            )
            url_download = self.url_download(link_id)

        resultado_equipe = self._email_sender.enviar(
            para=self._email_equipe,
            assunto=assunto_email_equipe(solicitacao, consulta),
            html=html_email_equipe(solicitacao, consulta, score, arquivos, url_download),
            anexos=arquivos,
            cc=self._email_cc,
        )
        if not resultado_equipe.success:
            log(f"Continuando sem email principal: {resultado_equipe.error}")

        resultado_confirmacao = self._email_sender.enviar(
            para=solicitacao.email,
            assunto=ASSUNTO_CONFIRMACAO,
            html=html_email_confirmacao(solicitacao, len(arquivos), agora),
        )
        if not resultado_confirmacao.success:
            log(f"Email de confirmacao nao enviado: {resultado_confirmacao.error}")

        whatsapp_cliente = url_whatsapp(
            self._whatsapp_numero,
            mensagem_whatsapp_cliente(solicitacao, len(arquivos)),
        )
        whatsapp_empresa = url_whatsapp(
            self._whatsapp_numero,
            mensagem_whatsapp_empresa(
                solicitacao,
                url_download,
                len(arquivos),
                agora,
                max_downloads=self._max_downloads,
                ttl_horas=self._ttl_horas,
            ),
        )

        return ResultadoSolicitacao(
            consulta=consulta,
            score=score,
            email_enviado=resultado_equipe.success,
            whatsapp_url=whatsapp_cliente,
            whatsapp_url_empresa=whatsapp_empresa,
            link_id=link_id,
            url_download=url_download,
        )
