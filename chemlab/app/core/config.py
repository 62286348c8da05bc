from __future__ import annotations

import os
from dataclasses import dataclass

from chemlab.app.models.core_types import Currency

ENV_PREFIX = "CHEMLAB_"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    currency: Currency = Currency.twd
    org_name: str = "Chem Lab"
    seed: bool = True
    log_level: str = "INFO"

    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_timeout: float = 30.0


def get_settings() -> Settings:
    """
    Reads the configuration from the environment.

    Priority: environment variable, then the dataclass default.
    An unknown currency code falls back to the default currency.
    """
    currency_raw = os.getenv(f"{ENV_PREFIX}CURRENCY", "").strip().upper()
    try:
        currency = Currency(currency_raw) if currency_raw else Settings.currency
    except ValueError:
        currency = Settings.currency

    return Settings(
        currency=currency,
        org_name=os.getenv(f"{ENV_PREFIX}ORG_NAME", Settings.org_name),
        seed=_env_flag(f"{ENV_PREFIX}SEED", Settings.seed),
        log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", Settings.log_level).upper(),
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", Settings.gemini_model),
        gemini_timeout=float(os.getenv("GEMINI_TIMEOUT", str(Settings.gemini_timeout))),
    )
