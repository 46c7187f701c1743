"""Runtime settings, read from the environment once at start-up.

Fee settings are handed to the pricer as constructor arguments; nothing
in the domain reads these values directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path


class ConfigError(Exception):
    """An environment variable holds an unusable value."""


@dataclass(frozen=True)
class Settings:

    data_dir: Path
    service_fee_percent: Decimal = Decimal("5.0")
    delivery_fee: Decimal = Decimal("200.0")
    store_timeout: float = 5.0
    telegram_bot_token: str | None = None
    telegram_chat_id: str | None = None
    environment: str = "development"

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return Settings(
            data_dir=Path(env.get("LAMAN_DATA_DIR") or "data"),
            service_fee_percent=_decimal(env, "LAMAN_SERVICE_FEE_PERCENT", "5.0"),
            delivery_fee=_decimal(env, "LAMAN_DELIVERY_FEE", "200.0"),
            store_timeout=float(_decimal(env, "LAMAN_STORE_TIMEOUT", "5.0")),
            telegram_bot_token=env.get("TELEGRAM_BOT_TOKEN") or None,
            telegram_chat_id=env.get("TELEGRAM_CHAT_ID") or None,
            environment=(env.get("ENVIRONMENT") or "development").lower(),
        )


def _decimal(env, key: str, default: str) -> Decimal:
    raw = env.get(key) or default
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from None
    if not value.is_finite() or value < 0:
        raise ConfigError(f"{key} must be a non-negative number, got {raw!r}")
    return value
