# src/config/__init__.py
"""
Configuration module for the Stream Live panel.

Provides centralized environment variable management that works
with or without .env files (dev vs production deployment).
"""

from .env import (
    init_environment,
    getenv_any,
    account_id,
    api_token,
    customer_code,
    load_config,
    validate_config,
    StreamConfig,
    API_BASE_URL,
    STREAM_DOMAIN,
)

__all__ = [
    'init_environment',
    'getenv_any',
    'account_id',
    'api_token',
    'customer_code',
    'load_config',
    'validate_config',
    'StreamConfig',
    'API_BASE_URL',
    'STREAM_DOMAIN',
]
