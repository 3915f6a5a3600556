# tests/domain/test_link_registry.py
from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path

import pytest

from consultoria.domain.link.entities import ArquivoRef, MotivoInvalido
from consultoria.infrastructure.link_registry import RegistroLinks, gerar_link_id


class Relogio:
    """Relogio controlado pelo teste."""

    def __init__(self, inicio: datetime) -> None:
        self.agora = inicio

    def __call__(self) -> datetime:
        return self.agora

    def avancar(self, **kwargs: float) -> None:
        self.agora += timedelta(**kwargs)


@pytest.fixture()
def relogio() -> Relogio:
    return Relogio(datetime(2026, 3, 1, 9, 0))


@pytest.fixture()
def registro(relogio: Relogio) -> RegistroLinks:
    return RegistroLinks(relogio=relogio)


def _arquivo(tmp_path: Path, nome: str = "balanco.pdf") -> ArquivoRef:
    caminho = tmp_path / f"1700000000000_{nome}"
    caminho.write_bytes(b"%PDF-1.4 teste")
    return ArquivoRef(nome_original=nome, tamanho=14, caminho=caminho)


def test_gerar_link_id_formato():
    link_id = gerar_link_id()
    assert len(link_id) == 32
    assert link_id == link_id.upper()
    int(link_id, 16)


def test_emitir_cria_link_ativo(registro: RegistroLinks, relogio: Relogio, tmp_path: Path):
    link_id = registro.emitir([_arquivo(tmp_path)])
    validacao = registro.validar(link_id)
    assert validacao.valido
    assert validacao.link is not None
    assert validacao.link.downloads == 0
    assert validacao.link.expira_em == relogio.agora + timedelta(hours=48)
    assert link_id in registro
    assert len(registro) == 1


def test_emitir_rejeita_parametros_negativos(registro: RegistroLinks):
    with pytest.raises(ValueError):
        registro.emitir([], max_downloads=-1)
    with pytest.raises(ValueError):
        registro.emitir([], ttl_horas=-1)


def test_emitir_gera_novo_id_em_colisao(relogio: Relogio):
    ids = iter(["A" * 32, "A" * 32, "B" * 32])
    registro = RegistroLinks(relogio=relogio, gerar_id=lambda: next(ids))
    assert registro.emitir([]) == "A" * 32
    assert registro.emitir([]) == "B" * 32


def test_validar_inexistente(registro: RegistroLinks):
    validacao = registro.validar("NAOEXISTE")
    assert not validacao.valido
    assert validacao.motivo == MotivoInvalido.NAO_ENCONTRADO
    assert validacao.motivo.value == "not found"


def test_limite_de_downloads(registro: RegistroLinks, tmp_path: Path):
    link_id = registro.emitir([_arquivo(tmp_path)], max_downloads=2)
    for _ in range(2):
        assert registro.validar(link_id).valido
        registro.registrar_download(link_id)

    validacao = registro.validar(link_id)
    assert validacao.motivo == MotivoInvalido.LIMITE_ATINGIDO
    # Esgotamento desativa o link permanentemente
    assert registro.validar(link_id).motivo == MotivoInvalido.DESATIVADO


def test_expiracao(registro: RegistroLinks, relogio: Relogio, tmp_path: Path):
    link_id = registro.emitir([_arquivo(tmp_path)], ttl_horas=1)
    relogio.avancar(minutes=59)
    assert registro.validar(link_id).valido

    relogio.avancar(minutes=1, microseconds=1)
    assert registro.validar(link_id).motivo == MotivoInvalido.EXPIRADO
    assert registro.validar(link_id).motivo == MotivoInvalido.DESATIVADO


def test_link_valido_no_instante_de_expiracao(
    registro: RegistroLinks, relogio: Relogio
):
    link_id = registro.emitir([], ttl_horas=1)
    relogio.avancar(hours=1)
    assert registro.validar(link_id).valido

    relogio.avancar(microseconds=1)
    assert registro.validar(link_id).motivo == MotivoInvalido.EXPIRADO


def test_ttl_zero_expira_no_instante_seguinte(registro: RegistroLinks, relogio: Relogio):
    link_id = registro.emitir([], ttl_horas=0)
    relogio.avancar(microseconds=1)
    assert registro.validar(link_id).motivo == MotivoInvalido.EXPIRADO


def test_max_downloads_zero_nunca_valido(registro: RegistroLinks):
    link_id = registro.emitir([], max_downloads=0)
    assert registro.validar(link_id).motivo == MotivoInvalido.LIMITE_ATINGIDO


def test_validar_retorna_copia(registro: RegistroLinks):
    link_id = registro.emitir([], max_downloads=1)
    copia = registro.validar(link_id).link
    assert copia is not None
    copia.downloads = 99
    assert registro.validar(link_id).valido


def test_registrar_download_inexistente_ignorado(registro: RegistroLinks):
    registro.registrar_download("NAOEXISTE")
    assert len(registro) == 0


def test_limpeza_remove_expirados_e_arquivos(
    registro: RegistroLinks, relogio: Relogio, tmp_path: Path
):
    expirado = _arquivo(tmp_path, "antigo.pdf")
    vigente = _arquivo(tmp_path, "novo.pdf")
    id_expirado = registro.emitir([expirado], ttl_horas=1)
    relogio.avancar(hours=2)
    id_vigente = registro.emitir([vigente], ttl_horas=48)

    resultado = registro.limpar_expirados()

    assert resultado.links_removidos == 1
    assert resultado.arquivos_removidos == 1
    assert resultado.falhas == ()
    assert not expirado.caminho.exists()
    assert vigente.caminho.exists()
    assert registro.validar(id_expirado).motivo == MotivoInvalido.NAO_ENCONTRADO
    assert registro.validar(id_vigente).valido


def test_limpeza_remove_esgotados(registro: RegistroLinks, tmp_path: Path):
    arquivo = _arquivo(tmp_path)
    link_id = registro.emitir([arquivo], max_downloads=1)
    registro.registrar_download(link_id)

    resultado = registro.limpar_expirados()

    assert resultado.links_removidos == 1
    assert not arquivo.caminho.exists()
    assert link_id not in registro


def test_limpeza_tolera_arquivo_ja_removido(
    registro: RegistroLinks, relogio: Relogio, tmp_path: Path
):
    arquivo = _arquivo(tmp_path)
    registro.emitir([arquivo], ttl_horas=1)
    arquivo.caminho.unlink()
    relogio.avancar(hours=1, microseconds=1)

    resultado = registro.limpar_expirados()

    assert resultado.links_removidos == 1
    assert resultado.arquivos_removidos == 0


def test_limpeza_registra_falha_e_segue(
    registro: RegistroLinks, relogio: Relogio, tmp_path: Path
):
    # diretorio nao vazio: unlink levanta OSError
    diretorio = tmp_path / "1700000000000_pasta.pdf"
    diretorio.mkdir()
    (diretorio / "dentro.txt").write_bytes(b"x")
    preso = ArquivoRef(nome_original="pasta.pdf", tamanho=1, caminho=diretorio)
    normal = _arquivo(tmp_path, "normal.pdf")
    id_preso = registro.emitir([preso], ttl_horas=1)
    id_normal = registro.emitir([normal], ttl_horas=1)
    relogio.avancar(hours=2)

    resultado = registro.limpar_expirados()

    assert resultado.links_removidos == 2
    assert resultado.arquivos_removidos == 1
    assert resultado.falhas == (str(diretorio),)
    assert diretorio.exists()
    assert not normal.caminho.exists()
    assert id_preso not in registro
    assert id_normal not in registro
    assert len(registro) == 0

def test_limpeza_sem_links(registro: RegistroLinks):
    resultado = registro.limpar_expirados()
    assert resultado.links_removidos == 0
