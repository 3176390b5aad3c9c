# src/config/env.py
import os
from dataclasses import dataclass
from typing import Optional, Iterable, List, Dict

from dotenv import load_dotenv, find_dotenv

from src.utils.logger import setup_logger
from src.utils.result import ConfigError

log = setup_logger("startup")

API_BASE_URL = "https://api.cloudflare.com/client/v4"
STREAM_DOMAIN = "cloudflarestream.com"

# Canonical names first; the VITE_ aliases are what the browser build of the panel used
ACCOUNT_ID_KEYS = ("CLOUDFLARE_ACCOUNT_ID", "VITE_CLOUDFLARE_ACCOUNT_ID")
API_TOKEN_KEYS = ("CLOUDFLARE_API_TOKEN", "VITE_CLOUDFLARE_API_TOKEN")
CUSTOMER_CODE_KEYS = ("CLOUDFLARE_CUSTOMER_CODE", "VITE_CLOUDFLARE_CUSTOMER_CODE")


def init_environment() -> None:
    """
    Initialize environment variables for the panel.
    Loads .env file if it exists (dev), continues without it (production).
    Safe to call multiple times.
    """
    path = find_dotenv(usecwd=True)
    if path:
        load_dotenv(path, override=False)
        log.info(".env loaded from: %s", path)
    else:
        log.info("No .env file found. Continuing with OS env.")

    log.info(
        "Environment status: ACCOUNT_ID=%s, API_TOKEN=%s, CUSTOMER_CODE=%s",
        "YES" if account_id() else "NO",
        "YES" if api_token() else "NO",
        "YES" if customer_code() else "NO",
    )


def getenv_any(keys: Iterable[str], default: Optional[str] = None) -> Optional[str]:
    """
    Get environment variable value from multiple possible key names.
    Returns the first non-empty value found, or default if none found.

    Args:
        keys: Iterable of environment variable names to check
        default: Default value if no keys are found

    Returns:
        First non-empty environment variable value or default
    """
    for k in keys:
        v = os.getenv(k)
        if v not in (None, ""):
            return v
    return default


def account_id() -> str:
    """Get the Cloudflare account ID."""
    return getenv_any(ACCOUNT_ID_KEYS, "")


def api_token() -> str:
    """Get the Cloudflare API token (Stream:Edit permission)."""
    return getenv_any(API_TOKEN_KEYS, "")


def customer_code() -> str:
    """Get the customer code used in customer-<code>.cloudflarestream.com URLs."""
    return getenv_any(CUSTOMER_CODE_KEYS, "")


@dataclass(frozen=True)
class StreamConfig:
    """Immutable snapshot of the panel configuration, read once at startup."""

    account_id: str = ""
    api_token: str = ""
    customer_code: str = ""
    api_base_url: str = API_BASE_URL
    stream_domain: str = STREAM_DOMAIN

    @property
    def stream_api_url(self) -> str:
        return f"{self.api_base_url}/accounts/{self.account_id}/stream"

    def customer_host(self, code: Optional[str] = None) -> str:
        return f"https://customer-{code or self.customer_code}.{self.stream_domain}"

    def validate(self) -> bool:
        return validate_config(self)

    def redacted(self) -> Dict[str, str]:
        """Log-safe view of the configuration."""
        token = self.api_token
        return {
            "account_id": self.account_id,
            "api_token": f"{token[:4]}..." if token else "",
            "customer_code": self.customer_code,
            "api_base_url": self.api_base_url,
        }


def load_config() -> StreamConfig:
    """Read the configuration from the process environment."""
    return StreamConfig(
        account_id=account_id(),
        api_token=api_token(),
        customer_code=customer_code(),
    )


def validate_config(config: StreamConfig) -> bool:
    """
    Check that the API credentials are present.

    Raises:
        ConfigError: listing every missing variable, not only the first one

    Returns:
        True when the configuration can be used to build an API client
    """
    missing: List[str] = []

    if not config.account_id:
        missing.append(ACCOUNT_ID_KEYS[0])

    if not config.api_token:
        missing.append(API_TOKEN_KEYS[0])

    if missing:
        raise ConfigError(missing)

    return True
