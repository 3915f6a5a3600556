from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class MotivoInvalido(str, Enum):
    NAO_ENCONTRADO = "not found"
    DESATIVADO = "deactivated"
    EXPIRADO = "expired"
    LIMITE_ATINGIDO = "download limit reached"


@dataclass(frozen=True)
class ArquivoRef:
    """Arquivo enviado pelo formulario e ja gravado em disco."""

    nome_original: str
    tamanho: int
    caminho: Path


@dataclass
class LinkTemporario:
    """Link de download com prazo e limite de downloads.

    Mutavel apenas pelo RegistroLinks, sob lock. Transicoes de `ativo` sao
    unidirecionais: uma vez False, nunca volta a True.
    """

    id: str
    arquivos: tuple[ArquivoRef, ...]
    criado_em: datetime
    expira_em: datetime
    max_downloads: int
    downloads: int = 0
    ativo: bool = True

    def expirado(self, agora: datetime) -> bool:
        return agora > self.expira_em

    @property
    def esgotado(self) -> bool:
        return self.downloads >= self.max_downloads

    def utilizavel(self, agora: datetime) -> bool:
        return self.ativo and not self.expirado(agora) and not self.esgotado

    def desativar(self) -> None:
        self.ativo = False

    def arquivo(self, nome_original: str) -> ArquivoRef | None:
        return next((a for a in self.arquivos if a.nome_original == nome_original), None)


@dataclass(frozen=True)
class ValidacaoLink:
    valido: bool
    link: LinkTemporario | None = None
    motivo: MotivoInvalido | None = None

    @classmethod
    def ok(cls, link: LinkTemporario) -> ValidacaoLink:
        return cls(valido=True, link=link)

    @classmethod
    def invalido(cls, motivo: MotivoInvalido) -> ValidacaoLink:
        return cls(valido=False, motivo=motivo)


@dataclass(frozen=True)
class ResultadoLimpeza:
    links_removidos: int = 0
    arquivos_removidos: int = 0
    falhas: tuple[str, ...] = field(default_factory=tuple)
