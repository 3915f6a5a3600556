from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from consultoria.infrastructure.config import get_settings
from consultoria.infrastructure.http_client import close_http_client
from consultoria.infrastructure.link_registry import get_registro_links
from consultoria.infrastructure.log import log
from consultoria.interfaces.api.middleware.rate_limit import RateLimitMiddleware


async def _limpeza_periodica(intervalo: float) -> None:
    while True:
        await asyncio.sleep(intervalo)
        try:
            await asyncio.to_thread(get_registro_links().limpar_expirados)
        except Exception as err:  # noqa: BLE001
            log(f"Erro na limpeza de links: {err}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    log(f"Uploads em {settings.upload_dir}")

    tarefa = asyncio.create_task(_limpeza_periodica(settings.link_sweep_interval_seconds))
    yield
    tarefa.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await tarefa
    close_http_client()


app = FastAPI(
    title="Aporte Capital API",
    debug=get_settings().debug,  # NUNCA True em producao
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url=None,
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next: object) -> Response:
    response = await call_next(request)  # type: ignore[misc]
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response  # type: ignore[return-value]


app.add_middleware(RateLimitMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

from consultoria.interfaces.api.routes.cnpj_routes import router as cnpj_router  # noqa: E402
from consultoria.interfaces.api.routes.consultoria_routes import router as consultoria_router  # noqa: E402
from consultoria.interfaces.api.routes.download_routes import router as download_router  # noqa: E402
from consultoria.interfaces.api.routes.health_routes import router as health_router  # noqa: E402

app.include_router(health_router, prefix="/api")
app.include_router(consultoria_router, prefix="/api")
app.include_router(cnpj_router, prefix="/api")
# Links de download sao compartilhados fora da API, sem prefixo
app.include_router(download_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "consultoria.interfaces.api.main:app",
        host="0.0.0.0",  # noqa: S104
        port=get_settings().port,
    )
