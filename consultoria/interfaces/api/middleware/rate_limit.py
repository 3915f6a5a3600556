from __future__ import annotations

import math
import time
from collections import deque

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from consultoria.infrastructure.config import get_settings

JANELA_SEGUNDOS = 60.0


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Janela deslizante de 60s por IP, apenas para rotas /api.

    Links de download ficam fora do limite: ja sao protegidos por prazo e
    numero maximo de downloads.
    """

    def __init__(self, app: object) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._acessos: dict[str, deque[float]] = {}
        self._ultima_varredura = 0.0

    def _varrer(self, agora: float) -> None:
        """Remove IPs cujo acesso mais recente ja saiu da janela."""
        vencidos = [
            ip for ip, acessos in self._acessos.items() if agora - acessos[-1] >= JANELA_SEGUNDOS
        ]
        for ip in vencidos:
            del self._acessos[ip]
        self._ultima_varredura = agora

    def registrar(self, client_ip: str, agora: float, limite: int) -> int | None:
        """Conta o acesso e devolve None, ou os segundos de espera se excedeu."""
        if agora - self._ultima_varredura >= JANELA_SEGUNDOS:
            self._varrer(agora)

        acessos = self._acessos.setdefault(client_ip, deque())
        while acessos and agora - acessos[0] >= JANELA_SEGUNDOS:
            acessos.popleft()

        if len(acessos) >= limite:
            espera = math.ceil(JANELA_SEGUNDOS - (agora - acessos[0]))
            return max(espera, 1)

        acessos.append(agora)
        return None

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        settings = get_settings()
        limite = settings.rate_limit_per_minute

        # 0 = sem limite (usado em testes)
        if limite == 0 or not request.url.path.startswith("/api"):
            return await call_next(request)

        api_key = request.headers.get("X-API-Key")
        if settings.admin_api_key and api_key == settings.admin_api_key:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        espera = self.registrar(client_ip, time.monotonic(), limite)
        if espera is not None:
            return Response(
                content='{"detail": "Rate limit excedido. Tente novamente em 1 minuto."}',
                status_code=429,
                media_type="application/json",
                headers={"Retry-After": str(espera)},
            )
        return await call_next(request)
