"""API key guard for the scorecard routers."""

from __future__ import annotations

from fastapi import Header, HTTPException, Query, status

from scorecard.config import get_settings


def require_api_key(
    x_api_key: str | None = Header(default=None, alias="x-api-key"),
    api_key_query: str | None = Query(default=None, alias="apiKey"),
) -> str | None:
    """Reject the request unless it carries one of the configured keys.

    Only enforced when ``REQUIRE_API_KEY`` is on. The header wins over the
    ``apiKey`` query parameter.
    """

    settings = get_settings()
    candidate = x_api_key or api_key_query
    if not settings.require_api_key:
        return candidate

    if candidate is None or candidate not in settings.api_keys:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid api key",
        )
    return candidate


__all__ = ["require_api_key"]
