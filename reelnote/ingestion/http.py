from __future__ import annotations

import httpx


class ExternalAPIError(Exception):
    pass


def build_http_client(timeout: float = 15) -> httpx.AsyncClient:
    """Create the HTTP client shared by every outbound integration."""
    return httpx.AsyncClient(timeout=timeout)
