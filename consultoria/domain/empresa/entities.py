from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from .value_objects import Endereco, Socio

FONTE_VALIDACAO = "validation"
FONTE_TODAS_FALHARAM = "all_providers_failed"


@dataclass(frozen=True)
class PerfilEmpresa:
    """Perfil canonico da empresa, independente do provedor que respondeu."""

    cnpj: str
    razao_social: str
    nome_fantasia: str = ""
    situacao: str = ""
    data_situacao: str = ""
    motivo_situacao: str = ""
    data_abertura: date | None = None
    natureza_juridica: str = ""
    porte: str = ""
    capital_social: Decimal | None = None
    endereco: Endereco = Endereco()
    telefone: str = ""
    email: str = ""
    atividade_principal: str = ""
    atividades_secundarias: tuple[str, ...] = ()
    socios: tuple[Socio, ...] = ()

    def __post_init__(self) -> None:
        stripped = self.razao_social.strip()
        if not stripped:
            raise ValueError("Razao social nao pode ser vazia")
        object.__setattr__(self, "razao_social", stripped)


@dataclass(frozen=True)
class ResultadoConsulta:
    """Resultado de uma consulta de CNPJ. success=True implica perfil presente."""

    success: bool
    fonte: str
    consultado_em: datetime
    perfil: PerfilEmpresa | None = None
    oficial: bool = False
    erro: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.perfil is None:
            raise ValueError("Consulta bem-sucedida exige perfil")
        if not self.success and not self.erro:
            raise ValueError("Consulta com falha exige mensagem de erro")

    @property
    def razao_social(self) -> str | None:
        return self.perfil.razao_social if self.perfil else None

    @classmethod
    def sucesso(
        cls,
        perfil: PerfilEmpresa,
        fonte: str,
        oficial: bool,
        consultado_em: datetime,
    ) -> ResultadoConsulta:
        return cls(
            success=True,
            fonte=fonte,
            consultado_em=consultado_em,
            perfil=perfil,
            oficial=oficial,
        )

    @classmethod
    def falha(cls, erro: str, fonte: str, consultado_em: datetime) -> ResultadoConsulta:
        return cls(success=False, fonte=fonte, consultado_em=consultado_em, erro=erro)
