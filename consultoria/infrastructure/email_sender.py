"""Envio de emails via Resend.

Falha de envio nunca interrompe a solicitacao: o erro e registrado e devolvido
em ResultadoEmail para que a resposta HTTP informe `email_enviado=False`.
"""

from __future__ import annotations

import base64
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import resend

from consultoria.domain.link.entities import ArquivoRef

from .config import get_settings
from .log import log


@dataclass(frozen=True)
class ResultadoEmail:
    success: bool
    message_id: str | None = None
    error: str | None = None


class EnviadorEmail(Protocol):
    def enviar(
        self,
        para: str,
        assunto: str,
        html: str,
        anexos: Sequence[ArquivoRef] = (),
        cc: str | None = None,
    ) -> ResultadoEmail: ...


class ResendEmailSender:
    DEFAULT_FROM_NAME = "Aporte Capital"

    def __init__(self, api_key: str, from_email: str) -> None:
        self.api_key = api_key
        self.from_email = from_email
        if not api_key:
            log("RESEND_API_KEY nao configurada - envio de email desabilitado")
        else:
            resend.api_key = api_key

    def enviar(
        self,
        para: str,
        assunto: str,
        html: str,
        anexos: Sequence[ArquivoRef] = (),
        cc: str | None = None,
    ) -> ResultadoEmail:
        if not self.api_key:
            return ResultadoEmail(success=False, error="Envio de email nao configurado")

        params: dict[str, object] = {
            "from": f"{self.DEFAULT_FROM_NAME} <{self.from_email}>",
            "to": [para],
            "subject": assunto,
            "html": html,
        }
        if cc:
            params["cc"] = [cc]

        try:
            if anexos:
                params["attachments"] = [
                    {
                        "filename": a.nome_original,
                        "content": base64.b64encode(a.caminho.read_bytes()).decode("utf-8"),
                    }
                    for a in anexos
                ]
            response = resend.Emails.send(params)  # type: ignore[arg-type]
        except Exception as err:  # noqa: BLE001
            log(f"Erro no envio de email para {para}: {err}")
            return ResultadoEmail(success=False, error=str(err))

        message_id = response.get("id") if isinstance(response, dict) else None
        log(f"Email enviado para {para}: {message_id or 'sem id'}")
        return ResultadoEmail(success=True, message_id=message_id)


_sender: EnviadorEmail | None = None


def get_email_sender() -> EnviadorEmail:
    global _sender  # noqa: PLW0603
    if _sender is None:
        settings = get_settings()
        _sender = ResendEmailSender(settings.resend_api_key, settings.email_from)
    return _sender


def set_email_sender(sender: EnviadorEmail | None) -> None:
    """Usado em testes para injetar um enviador fake."""
    global _sender  # noqa: PLW0603
    _sender = sender
