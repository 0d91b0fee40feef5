"""
Runtime settings for the pharmacy reference API.

All values come from environment variables (optionally loaded from a .env
file at startup) with defaults suitable for local development.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import List

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class ProviderSettings:
    """
    Connection settings for one OpenAI-compatible chat-completion provider.

    Attributes:
        name: Short provider name used in logs and failure accounting
        base_url: API root, the client posts to {base_url}/chat/completions
        model: Model identifier sent with every request
        api_key: Bearer token (empty means the provider is skipped)
    """

    name: str
    base_url: str
    model: str
    api_key: str = ""

    @classmethod
    def from_env(cls, prefix: str, *, name: str, base_url: str, model: str, key_env: str) -> "ProviderSettings":
        api_key_env = os.getenv(f"{prefix}_API_KEY_ENV", key_env)
        return cls(
            name=os.getenv(f"{prefix}_NAME", name),
            base_url=os.getenv(f"{prefix}_BASE_URL", base_url).rstrip("/"),
            model=os.getenv(f"{prefix}_MODEL", model),
            api_key=os.getenv(api_key_env, ""),
        )


@dataclass
class Settings:
    """Application settings resolved once at startup."""

    fda_label_url: str = "https://api.fda.gov/drug/label.json"
    fda_timeout_seconds: float = 15.0
    fda_verify_tls: bool = False

    ai_timeout_seconds: float = 20.0
    ai_failure_threshold: int = 5
    ai_failure_window_seconds: float = 300.0
    providers: List[ProviderSettings] = field(default_factory=list)

    drug_cache_ttl_seconds: int = 300
    translation_cache_ttl_seconds: int = 120

    api_prefix: str = "/api/v1"
    request_timeout_seconds: float = 60.0
    timeout_middleware_enabled: bool = True
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    debug: bool = False


def get_settings() -> Settings:
    """
    Build settings from the current environment.

    Returns:
        Settings instance; providers are listed best-quality first
    """
    providers = [
        ProviderSettings.from_env(
            "AI_PRIMARY",
            name="groq",
            base_url="https://api.groq.com/openai/v1",
            model="llama-3.3-70b-versatile",
            key_env="GROQ_API_KEY",
        ),
        ProviderSettings.from_env(
            "AI_SECONDARY",
            name="openai",
            base_url="https://api.openai.com/v1",
            model="gpt-4o-mini",
            key_env="OPENAI_API_KEY",
        ),
    ]

    failure_threshold = int(os.getenv("AI_FAILURE_THRESHOLD", "5"))
    if failure_threshold <= 0:
        raise ValueError("AI_FAILURE_THRESHOLD must be a positive integer")

    settings = Settings(
        fda_label_url=os.getenv("FDA_LABEL_URL", "https://api.fda.gov/drug/label.json"),
        fda_timeout_seconds=float(os.getenv("FDA_TIMEOUT_SECONDS", "15")),
        fda_verify_tls=_env_bool("FDA_VERIFY_TLS", "false"),
        ai_timeout_seconds=float(os.getenv("AI_TIMEOUT_SECONDS", "20")),
        ai_failure_threshold=failure_threshold,
        ai_failure_window_seconds=float(os.getenv("AI_FAILURE_WINDOW_SECONDS", "300")),
        providers=providers,
        drug_cache_ttl_seconds=int(os.getenv("DRUG_CACHE_TTL_SECONDS", "300")),
        translation_cache_ttl_seconds=int(os.getenv("TRANSLATION_CACHE_TTL_SECONDS", "120")),
        api_prefix=os.getenv("API_PREFIX", "/api/v1"),
        request_timeout_seconds=float(os.getenv("REQUEST_TIMEOUT_SECONDS", "60")),
        timeout_middleware_enabled=_env_bool("TIMEOUT_MIDDLEWARE_ENABLED", "true"),
        cors_origins=os.getenv("CORS_ORIGINS", "http://localhost:3000").split(","),
        debug=_env_bool("DEBUG", "false"),
    )

    configured = [p.name for p in providers if p.api_key]
    if not configured:
        logger.warning("No AI provider API keys configured; AI features will use static fallbacks")

    return settings
