from consultoria.application.services.consulta_cnpj_service import ConsultaCNPJService
from consultoria.application.services.solicitacao_service import SolicitacaoService
from consultoria.infrastructure.config import get_settings
from consultoria.infrastructure.email_sender import get_email_sender
from consultoria.infrastructure.http_client import get_http_client
from consultoria.infrastructure.link_registry import get_registro_links
from consultoria.infrastructure.upload_storage import UploadStorage


def get_consulta_service() -> ConsultaCNPJService:
    return ConsultaCNPJService(
        client=get_http_client(),
        timeout=get_settings().cnpj_timeout_seconds,
    )


def get_solicitacao_service() -> SolicitacaoService:
    settings = get_settings()
    return SolicitacaoService(
        consulta_service=get_consulta_service(),
        registro_links=get_registro_links(),
        email_sender=get_email_sender(),
        email_equipe=settings.recipient_email,
        email_cc=settings.cc_email,
        whatsapp_numero=settings.whatsapp_number,
        base_url=settings.public_base_url,
        max_downloads=settings.link_max_downloads,
        ttl_horas=settings.link_ttl_hours,
    )


def get_upload_storage() -> UploadStorage:
    return UploadStorage(get_settings().upload_dir)