from __future__ import annotations

import io
import zipfile
from datetime import datetime
from html import escape
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, Response

from consultoria.domain.link.entities import LinkTemporario
from consultoria.infrastructure.link_registry import RegistroLinks, get_registro_links

router = APIRouter()

_ESTILO = """
    body { font-family: 'Segoe UI', Tahoma, sans-serif; background: #f5f5f5; padding: 20px; }
    .container { max-width: 800px; margin: 0 auto; background: white; border-radius: 15px; padding: 2rem; }
    .file-item { display: flex; justify-content: space-between; padding: 1rem; border-bottom: 1px solid #e9ecef; }
    .warning { background: #fff3cd; color: #856404; padding: 1rem; border-radius: 8px; margin-top: 1rem; }
"""


def _pagina_invalida(motivo: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="pt-BR">
<head><meta charset="UTF-8"><title>Link Inválido - Aporte Capital</title><style>{_ESTILO}</style></head>
<body>
<div class="container">
<h1>Link Inválido</h1>
<p><strong>Motivo:</strong> {escape(motivo)}</p>
<p>Este link pode ter expirado ou atingido o limite de downloads.</p>
<a href="/">Voltar ao Site</a>
</div>
</body>
</html>"""


def _pagina_download(link: LinkTemporario, agora: datetime) -> str:
    restante = max(0, int((link.expira_em - agora).total_seconds()))
    horas, resto = divmod(restante, 3600)
    minutos = resto // 60
    arquivos = "".join(
        f'<div class="file-item"><div><strong>{escape(a.nome_original)}</strong>'
        f"<p>{a.tamanho / 1024 / 1024:.2f} MB</p></div>"
        f'<a href="/download/{link.id}/file/{quote(a.nome_original, safe="")}">Baixar</a></div>'
        for a in link.arquivos
    )
    return f"""<!DOCTYPE html>
<html lang="pt-BR">
<head><meta charset="UTF-8"><title>Download Seguro - Aporte Capital</title><style>{_ESTILO}</style></head>
<body>
<div class="container">
<h1>Download Seguro</h1>
<p>Código da solicitação: #{link.id}</p>
<p>Criado em: {link.criado_em:%d/%m/%Y %H:%M}</p>
<p>Expira em: {horas}h {minutos}min</p>
<p>Downloads: {link.downloads}/{link.max_downloads}</p>
<h2>Documentos Disponíveis</h2>
{arquivos}
<p><a href="/download/{link.id}/zip">Baixar Todos (ZIP)</a></p>
<div class="warning">
<strong>Importante:</strong> Este link é temporário e expirará automaticamente.
Após {link.max_downloads} downloads, o link será desativado por segurança.
</div>
</div>
</body>
</html>"""


@router.get("/download/{link_id}", response_class=HTMLResponse)
def pagina_download(
    link_id: str,
    registro: RegistroLinks = Depends(get_registro_links),  # noqa: B008
) -> HTMLResponse:
    validacao = registro.validar(link_id)
    if not validacao.valido or validacao.link is None:
        motivo = validacao.motivo.value if validacao.motivo else "invalid"
        return HTMLResponse(_pagina_invalida(motivo), status_code=404)
    return HTMLResponse(_pagina_download(validacao.link, datetime.now()))


@router.get("/download/{link_id}/file/{filename}", response_model=None)
def baixar_arquivo(
    link_id: str,
    filename: str,
    registro: RegistroLinks = Depends(get_registro_links),  # noqa: B008
) -> FileResponse | JSONResponse:
    validacao = registro.validar(link_id)
    if not validacao.valido or validacao.link is None:
        motivo = validacao.motivo.value if validacao.motivo else "invalid"
        return JSONResponse(status_code=404, content={"error": motivo})

    arquivo = validacao.link.arquivo(filename)
    if arquivo is None:
        return JSONResponse(status_code=404, content={"error": "Arquivo não encontrado"})
    if not arquivo.caminho.exists():
        return JSONResponse(status_code=404, content={"error": "Arquivo não existe no servidor"})

    registro.registrar_download(link_id)
    return FileResponse(arquivo.caminho, filename=arquivo.nome_original)


@router.get("/download/{link_id}/zip", response_model=None)
def baixar_todos(
    link_id: str,
    registro: RegistroLinks = Depends(get_registro_links),  # noqa: B008
) -> Response:
    """Todos os arquivos em um ZIP. Conta como um unico download."""
    validacao = registro.validar(link_id)
    if not validacao.valido or validacao.link is None:
        motivo = validacao.motivo.value if validacao.motivo else "invalid"
        return JSONResponse(status_code=404, content={"error": motivo})

    existentes = [a for a in validacao.link.arquivos if a.caminho.exists()]
    if not existentes:
        return JSONResponse(status_code=404, content={"error": "Arquivos não existem no servidor"})

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for arquivo in existentes:
            zf.write(arquivo.caminho, arcname=arquivo.nome_original)

    registro.registrar_download(link_id)
    return Response(
        content=buffer.getvalue(),
        media_type="application/zip",
        headers={"Content-Disposition": f"attachment; filename=documentos_{link_id}.zip"},
    )
