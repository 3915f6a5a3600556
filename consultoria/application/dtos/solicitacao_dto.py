from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from consultoria.application.services.solicitacao_service import ResultadoSolicitacao

from .score_dto import ScoreDTO


class SolicitacaoRespostaDTO(BaseModel):
    success: bool = True
    message: str
    email_enviado: bool
    whatsapp_url: str
    whatsapp_url_empresa: str
    download_link: str | None
    has_files: bool
    cnpj_consultado: bool
    score: ScoreDTO
    request_id: str
    timestamp: datetime

    @classmethod
    def from_domain(
        cls,
        resultado: ResultadoSolicitacao,
        request_id: str,
        timestamp: datetime,
    ) -> SolicitacaoRespostaDTO:
        if resultado.email_enviado:
            message = "Solicitação enviada com sucesso! Entraremos em contato em breve."
        else:
            message = (
                "Solicitação recebida com sucesso! Entraremos em contato em breve. "
                "(Email será enviado posteriormente)"
            )
        return cls(
            message=message,
            email_enviado=resultado.email_enviado,
            whatsapp_url=resultado.whatsapp_url,
            whatsapp_url_empresa=resultado.whatsapp_url_empresa,
            download_link=resultado.url_download,
            has_files=resultado.link_id is not None,
            cnpj_consultado=resultado.consulta.success,
            score=ScoreDTO.from_domain(resultado.score),
            request_id=request_id,
            timestamp=timestamp,
        )


class TesteFormularioDTO(BaseModel):
    success: bool = True
    message: str = "Teste do formulário concluído com sucesso!"
    validation: str = "OK"
    cnpj_test: str
    files_received: int
    request_id: str
    timestamp: datetime


class ErroSolicitacaoDTO(BaseModel):
    success: bool = False
    message: str
    errors: list[str] = []
    request_id: str
    timestamp: datetime
