# tests/integration/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Sequence
from datetime import datetime, timedelta
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from consultoria.domain.link.entities import ArquivoRef
from consultoria.infrastructure.email_sender import ResultadoEmail
from consultoria.infrastructure.link_registry import RegistroLinks

# Desabilitar rate limit em testes
os.environ["API_RATE_LIMIT_PER_MINUTE"] = "0"
os.environ["PUBLIC_BASE_URL"] = "http://testserver"
os.environ["RECIPIENT_EMAIL"] = "equipe@aporte.com.br"

CNPJ_ACME = "11222333000181"

BRASILAPI_ACME = {
    "cnpj": CNPJ_ACME,
    "razao_social": "ACME LTDA",
    "descricao_situacao_cadastral": "ATIVA",
    "data_inicio_atividade": "2012-04-10",
    "capital_social": 150000,
    "cnae_fiscal": 6201501,
    "cnae_fiscal_descricao": "Desenvolvimento de programas de computador sob encomenda",
    "logradouro": "RUA DAS FLORES",
    "cep": "69005000",
}


class Relogio:
    def __init__(self, inicio: datetime) -> None:
        self.agora = inicio

    def __call__(self) -> datetime:
        return self.agora

    def avancar(self, **kwargs: float) -> None:
        self.agora += timedelta(**kwargs)


class FakeEmailSender:
    def __init__(self) -> None:
        self.enviados: list[dict] = []

    def enviar(
        self,
        para: str,
        assunto: str,
        html: str,
        anexos: Sequence[ArquivoRef] = (),
        cc: str | None = None,
    ) -> ResultadoEmail:
        self.enviados.append({"para": para, "assunto": assunto, "anexos": list(anexos), "cc": cc})
        return ResultadoEmail(success=True, message_id=f"msg-{len(self.enviados)}")


def _provedores_fake(request: httpx.Request) -> httpx.Response:
    """So a BrasilAPI conhece o CNPJ da ACME; o resto responde 404."""
    if request.url.host == "brasilapi.com.br" and request.url.path.endswith(CNPJ_ACME):
        return httpx.Response(200, json=BRASILAPI_ACME)
    return httpx.Response(404, json={"message": "CNPJ não encontrado"})


@pytest.fixture()
def relogio() -> Relogio:
    return Relogio(datetime.now())


@pytest.fixture()
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture()
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    diretorio = tmp_path / "uploads"
    monkeypatch.setenv("UPLOAD_DIR", str(diretorio))
    return diretorio


@pytest.fixture()
def registro(relogio: Relogio) -> RegistroLinks:
    return RegistroLinks(relogio=relogio)


@pytest.fixture()
def client(
    upload_dir: Path,
    registro: RegistroLinks,
    email_sender: FakeEmailSender,
) -> Generator[TestClient, None, None]:
    """TestClient com provedores de CNPJ, email e registro de links injetados."""
    from consultoria.infrastructure import email_sender as email_module
    from consultoria.infrastructure import http_client, link_registry

    # Limpar cache de settings para pegar as variaveis de ambiente do teste
    from consultoria.infrastructure.config import get_settings
    get_settings.cache_clear()

    http_client.set_http_client(httpx.Client(transport=httpx.MockTransport(_provedores_fake)))
    email_module.set_email_sender(email_sender)
    link_registry.set_registro_links(registro)

    from consultoria.interfaces.api.main import app
    with TestClient(app) as c:
        yield c

    http_client.set_http_client(None)
    email_module.set_email_sender(None)
    link_registry.set_registro_links(None)
    get_settings.cache_clear()
