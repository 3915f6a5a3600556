# tests/integration/test_rate_limit.py
from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def rate_limited_client(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> Generator[TestClient, None, None]:
    """Client com rate limit ativo (3 req/min para teste rapido)."""
    from consultoria.infrastructure.config import get_settings
    from consultoria.interfaces.api.main import app

    monkeypatch.setenv("API_RATE_LIMIT_PER_MINUTE", "3")
    monkeypatch.setenv("ADMIN_API_KEY", "test-key")
    get_settings.cache_clear()

    # Middleware guarda as janelas por IP; reconstruir a pilha zera o estado
    app.middleware_stack = None
    yield client

    get_settings.cache_clear()


def test_rate_limit_permite_dentro_do_limite(rate_limited_client: TestClient) -> None:
    for _ in range(3):
        response = rate_limited_client.get("/api/health")
        assert response.status_code == 200


def test_rate_limit_bloqueia_apos_limite(rate_limited_client: TestClient) -> None:
    for _ in range(3):
        rate_limited_client.get("/api/health")
    response = rate_limited_client.get("/api/health")
    assert response.status_code == 429
    assert "Rate limit" in response.json()["detail"]
    assert 1 <= int(response.headers["Retry-After"]) <= 60


def test_rate_limit_bypass_com_api_key(rate_limited_client: TestClient) -> None:
    for _ in range(3):
        rate_limited_client.get("/api/health")
    response = rate_limited_client.get("/api/health", headers={"X-API-Key": "test-key"})
    assert response.status_code == 200


def test_rate_limit_api_key_errada_nao_libera(rate_limited_client: TestClient) -> None:
    for _ in range(3):
        rate_limited_client.get("/api/health")
    response = rate_limited_client.get("/api/health", headers={"X-API-Key": "outra"})
    assert response.status_code == 429


def test_rate_limit_nao_se_aplica_a_downloads(rate_limited_client: TestClient) -> None:
    for _ in range(5):
        response = rate_limited_client.get("/download/NAOEXISTE")
        assert response.status_code == 404


def test_janela_vencida_libera_ip() -> None:
    from consultoria.interfaces.api.middleware.rate_limit import RateLimitMiddleware

    limiter = RateLimitMiddleware(None)
    for t in (0.0, 1.0, 2.0):
        assert limiter.registrar("10.0.0.1", t, limite=3) is None
    assert limiter.registrar("10.0.0.1", 3.0, limite=3) == 57
    assert limiter.registrar("10.0.0.1", 62.0, limite=3) is None


def test_ip_sem_acessos_na_janela_sai_do_mapa() -> None:
    from consultoria.interfaces.api.middleware.rate_limit import RateLimitMiddleware

    limiter = RateLimitMiddleware(None)
    limiter.registrar("10.0.0.1", 0.0, limite=3)
    limiter.registrar("10.0.0.2", 30.0, limite=3)

    # 10.0.0.1 nao voltou: some do mapa na varredura seguinte
    limiter.registrar("10.0.0.2", 61.0, limite=3)

    assert "10.0.0.1" not in limiter._acessos
    assert list(limiter._acessos["10.0.0.2"]) == [30.0, 61.0]
