# consultoria/infrastructure/providers/base.py
#
# Protocol definition for CNPJ registry providers.
#
# Design decisions:
#   - Uses typing.Protocol (structural subtyping) rather than ABC so that
#     concrete providers don't need to inherit from a base; they just expose
#     the right attributes. Tests pass plain fakes.
#   - Each provider owns only its URL template and its normalizer. Network IO
#     and the fallback policy live in the resolver, so normalizers stay pure:
#     JSON dict in, PerfilEmpresa (or None) out.
#   - `oficial` is a display/trust label. The resolver never branches on it.
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from consultoria.domain.empresa.entities import PerfilEmpresa


@runtime_checkable
class ProvedorCNPJ(Protocol):
    """Contract for registry providers.

        nome        - name reported as `fonte` in the lookup result.
        oficial     - whether the source is an official registry mirror.
        url         - endpoint for a cleaned 14-digit CNPJ.
        normalizar  - provider-specific payload into the canonical profile.
    """

    nome: str
    oficial: bool

    def url(self, cnpj: str) -> str:
        """Build the GET endpoint for a cleaned CNPJ (14 digits)."""
        ...

    def normalizar(self, dados: dict[str, Any]) -> PerfilEmpresa | None:
        """Map the provider payload to PerfilEmpresa.

        Returns:
            None when the payload carries no legal name. Never raises for
            missing or oddly-typed optional fields.
        """
        ...


def texto(valor: Any) -> str:
    """Coerce optional scalar payload fields to a stripped string."""
    if valor is None or isinstance(valor, (dict, list)):
        return ""
    return str(valor).strip()


def atividade(codigo: Any, descricao: Any) -> str:
    """Format an activity as "<codigo> - <descricao>", dropping empty parts."""
    partes = [p for p in (texto(codigo), texto(descricao)) if p]
    return " - ".join(partes)
