from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import os

from .fetch import DEFAULT_TIMEOUT

BASE_URL_ENV = "TAYCO_BLOG_BASE_URL"
TIMEOUT_ENV = "TAYCO_BLOG_TIMEOUT"


@dataclass(frozen=True)
class Settings:
    """Host-side settings used to build the blog service."""

    base_url: str
    timeout: float = DEFAULT_TIMEOUT


def resolve_settings(
    base_url: Optional[str] = None, timeout: Optional[float] = None
) -> Settings:
    """Prefer explicit values, then the environment."""

    base_url = base_url or os.getenv(BASE_URL_ENV, "")
    if not base_url:
        raise ValueError(f"No blog base URL given; pass --base-url or set {BASE_URL_ENV}")

    if timeout is None:
        raw_timeout = os.getenv(TIMEOUT_ENV)
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise ValueError(f"{TIMEOUT_ENV} must be a number, got {raw_timeout!r}") from None
    if timeout <= 0:
        raise ValueError("timeout must be positive")

    return Settings(base_url=base_url, timeout=timeout)
