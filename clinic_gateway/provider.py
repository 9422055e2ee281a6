"""Process-wide OpenAI client and the error mapping around upstream calls."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Awaitable, Optional, TypeVar

from openai import APITimeoutError, AsyncOpenAI

from .config import get_settings
from .errors import ProviderError, ProviderTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@lru_cache
def get_openai_client() -> Optional[AsyncOpenAI]:
    """Build the shared client once; handlers receive it through ``Depends``.

    Without a key this returns ``None`` so requests are still validated;
    ``require_client`` fails them once a provider call is due.
    """
    settings = get_settings()
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; provider calls will fail.")
        return None
    logger.info(
        "Initialising OpenAI client (timeout=%ss, max_retries=%s)",
        settings.request_timeout,
        settings.max_retries,
    )
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
    )


def require_client(client: Optional[AsyncOpenAI]) -> AsyncOpenAI:
    if client is None:
        raise ProviderError("Provider not configured", "OPENAI_API_KEY is not set.")
    return client


async def call_provider(label: str, call: Awaitable[T]) -> T:
    """Await an upstream call, turning any failure into a ``ProviderError``."""
    try:
        return await call
    except APITimeoutError as exc:
        logger.error("%s timed out: %s", label, exc)
        raise ProviderTimeoutError(f"{label} timed out", str(exc)) from exc
    except Exception as exc:
        logger.error("%s error: %s", label, exc)
        raise ProviderError(f"{label} failed", str(exc)) from exc
