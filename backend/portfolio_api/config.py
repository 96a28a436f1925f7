from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return default


def _env_number(name: str, default: float, minimum: float, cast=float):
    """Numeric env value, falling back to ``default`` when unset or unparsable and never below ``minimum``."""
    raw = os.getenv(name, "").strip()
    try:
        value = cast(raw) if raw else default
    except ValueError:
        value = default
    return max(minimum, value)


def _env_secret(name: str) -> str:
    raw = os.getenv(name, "").strip()
    # Hosting dashboards sometimes store the key with its quotes.
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in {'"', "'"}:
        raw = raw[1:-1].strip()
    return raw


_DEFAULT_CONTENT_PATH = Path(__file__).resolve().parent / "data" / "portfolio.json"


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str
    cors_origins: list[str]
    contact_rate_limit_max: int
    contact_rate_limit_window_seconds: int
    resend_api_key: str
    resend_api_url: str
    contact_email: str
    email_from: str
    email_timeout: float
    enable_prometheus_metrics: bool
    content_path: str

    @property
    def is_production(self) -> bool:
        return self.env.lower() not in {"development", "dev", "test", "testing"}

    def validate(self) -> None:
        """Raise early on dangerous mis-configurations in non-dev environments."""
        if self.is_production and not self.resend_api_key:
            raise RuntimeError(
                "RESEND_API_KEY must be set in production, otherwise contact "
                "messages are only logged and never delivered."
            )


settings = Settings(
    env=os.getenv("ENV", "development"),
    log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    cors_origins=[
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", os.getenv("SITE_URL", "http://localhost:3000")).split(",")
        if origin.strip()
    ],
    contact_rate_limit_max=_env_number("CONTACT_RATE_LIMIT_MAX", 5, 1, int),
    contact_rate_limit_window_seconds=_env_number("CONTACT_RATE_LIMIT_WINDOW_SECONDS", 60 * 60, 1, int),
    resend_api_key=_env_secret("RESEND_API_KEY"),
    resend_api_url=os.getenv("RESEND_API_URL", "https://api.resend.com/emails").strip(),
    contact_email=os.getenv("CONTACT_EMAIL", "alex@example.com").strip(),
    email_from=os.getenv("EMAIL_FROM", "Portfolio Contact <onboarding@resend.dev>").strip(),
    email_timeout=_env_number("EMAIL_TIMEOUT", 10.0, 0.5),
    enable_prometheus_metrics=_env_flag("ENABLE_PROMETHEUS_METRICS", True),
    content_path=os.getenv("CONTENT_PATH", str(_DEFAULT_CONTENT_PATH)).strip(),
)

settings.validate()
