# consultoria/infrastructure/upload_storage.py
#
# IO-only: persist uploaded documents to the upload directory.
#
# Design decisions:
#   - Files are streamed to disk in chunks; the size limit is enforced while
#     copying so an oversized upload never lands fully on disk.
#   - Stored name is "<epoch-ms>_<sanitised original name>". The original
#     name is kept on ArquivoRef for display and download.
#   - A rejected file is removed before the error propagates. Callers remove
#     files already accepted in the same request with remover_arquivos().
from __future__ import annotations

import re
import time
import uuid
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from consultoria.domain.link.entities import ArquivoRef

from .log import log

TIPOS_PERMITIDOS = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})
TAMANHO_MAXIMO = 50 * 1024 * 1024  # 50 MB por arquivo
MAX_ARQUIVOS = 10
_CHUNK = 1024 * 1024


class UploadInvalido(ValueError):
    """Arquivo rejeitado por tipo, tamanho ou quantidade."""


def _nome_seguro(nome: str) -> str:
    return re.sub(r"[^a-zA-Z0-9.-]", "_", Path(nome).name) or "arquivo"


class UploadStorage:
    def __init__(
        self,
        diretorio: Path,
        tamanho_maximo: int = TAMANHO_MAXIMO,
        max_arquivos: int = MAX_ARQUIVOS,
    ) -> None:
        self._diretorio = diretorio
        self._tamanho_maximo = tamanho_maximo
        self.max_arquivos = max_arquivos

    def salvar(self, nome_original: str, content_type: str | None, stream: BinaryIO) -> ArquivoRef:
        """Grava o arquivo e retorna sua referencia.

        Raises:
            UploadInvalido: tipo nao permitido ou tamanho acima do limite.
        """
        if content_type not in TIPOS_PERMITIDOS:
            raise UploadInvalido("Apenas arquivos PDF, DOC e DOCX são permitidos")

        self._diretorio.mkdir(parents=True, exist_ok=True)
        prefixo = str(time.time_ns() // 1_000_000)
        destino = self._diretorio / f"{prefixo}_{_nome_seguro(nome_original)}"
        if destino.exists():
            destino = self._diretorio / f"{prefixo}_{uuid.uuid4().hex[:8]}_{_nome_seguro(nome_original)}"

        tamanho = 0
        with destino.open("wb") as saida:
            while chunk := stream.read(_CHUNK):
                tamanho += len(chunk)
                if tamanho > self._tamanho_maximo:
                    break
                saida.write(chunk)

        if tamanho > self._tamanho_maximo:
            destino.unlink(missing_ok=True)
            limite_mb = self._tamanho_maximo // (1024 * 1024)
            raise UploadInvalido(f"Arquivo muito grande. Tamanho máximo: {limite_mb}MB")

        return ArquivoRef(nome_original=nome_original, tamanho=tamanho, caminho=destino)


def remover_arquivos(arquivos: Iterable[ArquivoRef]) -> None:
    """Remocao best-effort: falha em um arquivo nao impede os demais."""
    for arquivo in arquivos:
        try:
            if arquivo.caminho.exists():
                arquivo.caminho.unlink()
                log(f"Arquivo removido: {arquivo.caminho}")
        except OSError as err:
            log(f"Erro ao remover arquivo {arquivo.caminho}: {err}")
