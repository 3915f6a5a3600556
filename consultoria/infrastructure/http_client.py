from __future__ import annotations

import httpx

_client: httpx.Client | None = None


def get_http_client() -> httpx.Client:
    global _client  # noqa: PLW0603
    if _client is None:
        _client = httpx.Client()
    return _client


def set_http_client(client: httpx.Client | None) -> None:
    """Usado em testes para injetar um cliente com httpx.MockTransport."""
    global _client  # noqa: PLW0603
    _client = client


def close_http_client() -> None:
    global _client  # noqa: PLW0603
    if _client is not None:
        _client.close()
        _client = None
