# consultoria/infrastructure/link_registry.py
#
# In-memory registry of temporary download links.
#
# Design decisions:
#   - One explicit object instead of a module-level dict, with the clock and
#     the id generator injected so expiry and collisions are testable.
#   - Every operation runs under a single threading.Lock. Issuance happens on
#     request threads, validation on download threads and the sweep on a
#     background task; the lock serialises the three mutation paths.
#   - validar() flips `ativo` inside the same critical section that detects
#     expiry or exhaustion (check-and-set).
#   - limpar_expirados() detaches dead records under the lock and deletes
#     their files after releasing it, so slow disk IO never blocks issuance
#     or validation. Each file is deleted in isolation; failures are logged.
#   - Process-lifetime cache only. Nothing survives a restart.
from __future__ import annotations

import dataclasses
import secrets
import threading
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

from consultoria.domain.link.entities import (
    ArquivoRef,
    LinkTemporario,
    MotivoInvalido,
    ResultadoLimpeza,
    ValidacaoLink,
)

from .log import log

MAX_DOWNLOADS_PADRAO = 5
TTL_HORAS_PADRAO = 48


def gerar_link_id() -> str:
    """32 caracteres hex maiusculos (128 bits de entropia)."""
    return secrets.token_hex(16).upper()


class RegistroLinks:
    def __init__(
        self,
        relogio: Callable[[], datetime] = datetime.now,
        gerar_id: Callable[[], str] = gerar_link_id,
    ) -> None:
        self._relogio = relogio
        self._gerar_id = gerar_id
        self._links: dict[str, LinkTemporario] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._links)

    def __contains__(self, link_id: object) -> bool:
        with self._lock:
            return link_id in self._links

    def emitir(
        self,
        arquivos: Iterable[ArquivoRef],
        max_downloads: int = MAX_DOWNLOADS_PADRAO,
        ttl_horas: float = TTL_HORAS_PADRAO,
    ) -> str:
        """Cria um link ativo com downloads=0 e retorna seu identificador."""
        if max_downloads < 0:
            raise ValueError("max_downloads nao pode ser negativo")
        if ttl_horas < 0:
            raise ValueError("ttl_horas nao pode ser negativo")

        with self._lock:
            link_id = self._gerar_id()
            while link_id in self._links:
                link_id = self._gerar_id()

            agora = self._relogio()
            link = LinkTemporario(
                id=link_id,
                arquivos=tuple(arquivos),
                criado_em=agora,
                expira_em=agora + timedelta(hours=ttl_horas),
                max_downloads=max_downloads,
            )
            self._links[link_id] = link

        log(f"Link temporario criado: {link_id} - expira em {link.expira_em:%d/%m/%Y %H:%M}")
        return link_id

    def validar(self, link_id: str) -> ValidacaoLink:
        """Verifica o link na ordem: inexistente, desativado, expirado, esgotado.

        Expiracao e esgotamento desativam o link permanentemente. Retorna uma
        copia do registro; alteracoes nela nao afetam o registro.
        """
        with self._lock:
            link = self._links.get(link_id)
            if link is None:
                return ValidacaoLink.invalido(MotivoInvalido.NAO_ENCONTRADO)
            if not link.ativo:
                return ValidacaoLink.invalido(MotivoInvalido.DESATIVADO)
            if link.expirado(self._relogio()):
                link.desativar()
                return ValidacaoLink.invalido(MotivoInvalido.EXPIRADO)
            if link.esgotado:
                link.desativar()
                return ValidacaoLink.invalido(MotivoInvalido.LIMITE_ATINGIDO)
            return ValidacaoLink.ok(dataclasses.replace(link))

    def registrar_download(self, link_id: str) -> None:
        """Incrementa o contador. Nao revalida: chamar validar() antes."""
        with self._lock:
            link = self._links.get(link_id)
            if link is None:
                return
            link.downloads += 1
            downloads, maximo = link.downloads, link.max_downloads
        log(f"Download {downloads}/{maximo} para link {link_id}")

    def limpar_expirados(self) -> ResultadoLimpeza:
        """Remove links expirados, desativados ou esgotados e apaga seus arquivos."""
        with self._lock:
            agora = self._relogio()
            mortos = [link for link in self._links.values() if not link.utilizavel(agora)]
            for link in mortos:
                del self._links[link.id]

        arquivos_removidos = 0
        falhas: list[str] = []
        for link in mortos:
            for arquivo in link.arquivos:
                if not arquivo.caminho.exists():
                    continue
                try:
                    arquivo.caminho.unlink()
                except OSError as err:
                    log(f"Erro ao remover arquivo {arquivo.caminho}: {err}")
                    falhas.append(str(arquivo.caminho))
                    continue
                arquivos_removidos += 1
                log(f"Arquivo removido: {arquivo.caminho}")

        if mortos:
            log(f"{len(mortos)} links temporarios expirados foram removidos")
        return ResultadoLimpeza(
            links_removidos=len(mortos),
            arquivos_removidos=arquivos_removidos,
            falhas=tuple(falhas),
        )


_registro: RegistroLinks | None = None


def get_registro_links() -> RegistroLinks:
    global _registro  # noqa: PLW0603
    if _registro is None:
        _registro = RegistroLinks()
    return _registro


def set_registro_links(registro: RegistroLinks | None) -> None:
    """Usado em testes para injetar um registro com relogio controlado."""
    global _registro  # noqa: PLW0603
    _registro = registro
