"""
Configuration loader for the dark pool payment proxy
"""

import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = "https://agent-dark-pool.pulseradar.workers.dev"
DEFAULT_FACILITATOR_URL = "https://facilitator.daydreams.systems"
DEFAULT_PAY_TO = "0x01D11F7e1a46AbFC6092d7be484895D2d505095c"
DEFAULT_ASSET = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"  # USDC on Base

_TRUTHY = ("1", "true", "yes", "on")


class PaymentsConfig(BaseModel):
    """x402 payment requirements advertised for the submit entrypoint"""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    facilitator_url: str = DEFAULT_FACILITATOR_URL
    pay_to: str = DEFAULT_PAY_TO
    network: str = "base"
    asset: str = DEFAULT_ASSET
    price: str = "$0.50"
    max_timeout_seconds: int = Field(default=300, ge=1)

    @field_validator("facilitator_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class ProxySettings(BaseModel):
    """Process-wide settings, built once at startup and never mutated"""

    model_config = ConfigDict(frozen=True)

    backend_url: str = DEFAULT_BACKEND_URL
    internal_api_key: Optional[str] = None
    port: int = Field(default=8080, ge=1, le=65535)
    base_url: Optional[str] = None
    backend_timeout_seconds: float = Field(default=30.0, gt=0)
    integrations_mode: str = "real"
    log_level: str = "INFO"
    payments: PaymentsConfig = Field(default_factory=PaymentsConfig)

    @field_validator("backend_url")
    @classmethod
    def normalize_backend_url(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("internal_api_key")
    @classmethod
    def blank_key_is_missing(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        if not value.isascii():
            raise ValueError("INTERNAL_API_KEY must contain only ASCII characters")
        return value

    @field_validator("integrations_mode")
    @classmethod
    def normalize_mode(cls, value: str) -> str:
        mode = (value or "").strip().lower()
        if mode in {"mock", "test"}:
            return "mock"
        return "real"

    @property
    def public_base_url(self) -> str:
        return (self.base_url or f"http://localhost:{self.port}").rstrip("/")

    @property
    def has_api_key(self) -> bool:
        return self.internal_api_key is not None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ProxySettings:
    """
    Build ProxySettings from environment variables

    Args:
        environ: Mapping to read from. Defaults to os.environ after loading .env

    Returns:
        Validated ProxySettings object

    Raises:
        ValidationError: If a variable cannot be converted (e.g. PORT=abc)
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    payments = {
        "enabled": environ.get("PAYMENTS_ENABLED", "").strip().lower() in _TRUTHY,
        "facilitator_url": environ.get("FACILITATOR_URL", DEFAULT_FACILITATOR_URL),
        "pay_to": environ.get("PAY_TO", DEFAULT_PAY_TO),
        "network": environ.get("PAYMENT_NETWORK", "base"),
        "asset": environ.get("PAYMENT_ASSET", DEFAULT_ASSET),
        "price": environ.get("SUBMIT_PRICE", "$0.50"),
    }
    data = {
        "backend_url": environ.get("CLOUDFLARE_BACKEND") or DEFAULT_BACKEND_URL,
        "internal_api_key": environ.get("INTERNAL_API_KEY"),
        "port": environ.get("PORT") or 8080,
        "base_url": environ.get("BASE_URL") or None,
        "backend_timeout_seconds": environ.get("BACKEND_TIMEOUT_SECONDS") or 30.0,
        "integrations_mode": environ.get("INTEGRATIONS_MODE", "real"),
        "log_level": environ.get("LOG_LEVEL", "INFO").upper(),
        "payments": payments,
    }

    try:
        settings = ProxySettings(**data)
    except ValidationError as e:
        logger.error(f"Settings validation failed: {e}")
        raise

    if not settings.has_api_key:
        logger.warning("INTERNAL_API_KEY is not set; submissions will be rejected as misconfigured.")
    return settings
