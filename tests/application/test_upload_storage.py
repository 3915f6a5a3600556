# tests/application/test_upload_storage.py
from __future__ import annotations

import io
from pathlib import Path

import pytest

from consultoria.infrastructure.upload_storage import (
    UploadInvalido,
    UploadStorage,
    remover_arquivos,
)

PDF = "application/pdf"


def test_salvar_grava_com_prefixo_e_nome_original(tmp_path: Path):
    storage = UploadStorage(tmp_path)
    ref = storage.salvar("Balanço 2025.pdf", PDF, io.BytesIO(b"%PDF-1.4 conteudo"))

    assert ref.nome_original == "Balanço 2025.pdf"
    assert ref.tamanho == len(b"%PDF-1.4 conteudo")
    assert ref.caminho.parent == tmp_path
    assert ref.caminho.name.endswith("_Balan_o_2025.pdf")
    assert ref.caminho.read_bytes() == b"%PDF-1.4 conteudo"


def test_salvar_nao_sobrescreve_nome_repetido(tmp_path: Path):
    storage = UploadStorage(tmp_path)
    a = storage.salvar("doc.pdf", PDF, io.BytesIO(b"a"))
    b = storage.salvar("doc.pdf", PDF, io.BytesIO(b"b"))
    assert a.caminho != b.caminho
    assert a.caminho.read_bytes() == b"a"


def test_nome_com_caminho_nao_escapa_do_diretorio(tmp_path: Path):
    ref = UploadStorage(tmp_path).salvar("../../etc/passwd.pdf", PDF, io.BytesIO(b"x"))
    assert ref.caminho.parent == tmp_path


def test_tipo_nao_permitido(tmp_path: Path):
    with pytest.raises(UploadInvalido, match="PDF, DOC e DOCX"):
        UploadStorage(tmp_path).salvar("foto.png", "image/png", io.BytesIO(b"x"))
    assert list(tmp_path.iterdir()) == []


def test_arquivo_grande_e_removido(tmp_path: Path):
    storage = UploadStorage(tmp_path, tamanho_maximo=1024 * 1024)
    with pytest.raises(UploadInvalido, match="Tamanho máximo: 1MB"):
        storage.salvar("grande.pdf", PDF, io.BytesIO(b"0" * (1024 * 1024 + 1)))
    assert list(tmp_path.iterdir()) == []


def test_remover_arquivos_ignora_inexistentes(tmp_path: Path):
    storage = UploadStorage(tmp_path)
    ref = storage.salvar("doc.pdf", PDF, io.BytesIO(b"a"))
    ref.caminho.unlink()
    remover_arquivos([ref])
    assert not ref.caminho.exists()
