from __future__ import annotations

import secrets
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from starlette.datastructures import FormData, UploadFile

from consultoria.application.dtos.solicitacao_dto import (
    ErroSolicitacaoDTO,
    SolicitacaoRespostaDTO,
    TesteFormularioDTO,
)
from consultoria.application.services.consulta_cnpj_service import ConsultaCNPJService
from consultoria.application.services.solicitacao_service import SolicitacaoService
from consultoria.domain.link.entities import ArquivoRef
from consultoria.domain.solicitacao.entities import SolicitacaoConsultoria, validar_solicitacao
from consultoria.infrastructure.log import log
from consultoria.infrastructure.upload_storage import UploadInvalido, UploadStorage, remover_arquivos
from consultoria.interfaces.api.dependencies import (
    get_consulta_service,
    get_solicitacao_service,
    get_upload_storage,
)

router = APIRouter()

# Nomes enviados pelo formulario da landing page (camelCase) -> campos do dominio.
_CAMPOS_FORMULARIO: dict[str, str] = {
    "nomeCompleto": "nome_completo",
    "email": "email",
    "telefone": "telefone",
    "empresa": "empresa",
    "cnpj": "cnpj",
    "tempoExistencia": "tempo_existencia",
    "faturamentoAnual": "faturamento_anual",
    "tipoConsultoria": "tipo_consultoria",
    "mensagem": "mensagem",
}


def _dados_formulario(form: FormData) -> dict[str, str]:
    dados: dict[str, str] = {}
    for origem, destino in _CAMPOS_FORMULARIO.items():
        valor = form.get(origem, form.get(destino))
        dados[destino] = valor if isinstance(valor, str) else ""
    return dados


def _uploads(form: FormData) -> list[UploadFile]:
    return [f for f in form.getlist("documentos") if isinstance(f, UploadFile) and f.filename]


def _erro(
    message: str,
    request_id: str,
    timestamp: datetime,
    errors: list[str] | None = None,
    status_code: int = 400,
) -> JSONResponse:
    dto = ErroSolicitacaoDTO(
        message=message,
        errors=errors or [],
        request_id=request_id,
        timestamp=timestamp,
    )
    return JSONResponse(status_code=status_code, content=dto.model_dump(mode="json"))


def _salvar_uploads(storage: UploadStorage, uploads: list[UploadFile]) -> list[ArquivoRef]:
    """Grava todos ou nenhum: se um arquivo e rejeitado, os ja gravados sao removidos."""
    salvos: list[ArquivoRef] = []
    try:
        for upload in uploads:
            salvos.append(storage.salvar(upload.filename or "arquivo", upload.content_type, upload.file))
    except Exception:
        remover_arquivos(salvos)
        raise
    return salvos


@router.post("/consultoria", response_model=SolicitacaoRespostaDTO)
async def criar_solicitacao(
    request: Request,
    service: SolicitacaoService = Depends(get_solicitacao_service),  # noqa: B008
    storage: UploadStorage = Depends(get_upload_storage),  # noqa: B008
) -> SolicitacaoRespostaDTO | JSONResponse:
    request_id = secrets.token_hex(8)
    timestamp = datetime.now()
    log("Nova solicitacao de consultoria", request_id)

    form = await request.form(max_files=storage.max_arquivos + 1)
    dados = _dados_formulario(form)
    uploads = _uploads(form)

    if len(uploads) > storage.max_arquivos:
        return _erro(f"Muitos arquivos. Máximo: {storage.max_arquivos} arquivos", request_id, timestamp)

    erros = validar_solicitacao(dados)
    if erros:
        log(f"Validacao falhou: {erros}", request_id)
        return _erro("Dados inválidos", request_id, timestamp, errors=erros)

    try:
        arquivos = await run_in_threadpool(_salvar_uploads, storage, uploads)
    except UploadInvalido as err:
        return _erro(str(err), request_id, timestamp)

    solicitacao = SolicitacaoConsultoria.from_form(dados)
    try:
        resultado = await run_in_threadpool(service.processar, solicitacao, arquivos)
    except Exception:
        log("Erro no processamento; removendo arquivos", request_id)
        remover_arquivos(arquivos)
        raise

    log(f"Processamento concluido (email_enviado={resultado.email_enviado})", request_id)
    return SolicitacaoRespostaDTO.from_domain(resultado, request_id, timestamp)


@router.post("/test-form", response_model=TesteFormularioDTO)
async def testar_formulario(
    request: Request,
    service: ConsultaCNPJService = Depends(get_consulta_service),  # noqa: B008
) -> TesteFormularioDTO | JSONResponse:
    """Valida o formulario e testa a consulta do CNPJ, sem gravar arquivos nem enviar email."""
    request_id = secrets.token_hex(8)
    timestamp = datetime.now()

    form = await request.form()
    dados = _dados_formulario(form)
    erros = validar_solicitacao(dados)
    if erros:
        return _erro("Dados inválidos", request_id, timestamp, errors=erros)

    consulta = await run_in_threadpool(service.consultar, dados["cnpj"])
    return TesteFormularioDTO(
        cnpj_test="OK" if consulta.success else "ERRO",
        files_received=len(_uploads(form)),
        request_id=request_id,
        timestamp=timestamp,
    )
