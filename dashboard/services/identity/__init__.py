"""
Identity Provider Factory

Returns the Mock or Supabase identity provider based on ENV_MODE.
"""

import logging
from functools import lru_cache

from dashboard.core.config import get_settings
from dashboard.services.identity.base import (
    AuthError,
    AuthSession,
    AuthUser,
    BaseIdentityProvider,
)
from dashboard.services.identity.mock import MockIdentityProvider
from dashboard.services.identity.supabase_provider import SupabaseIdentityProvider

logger = logging.getLogger(__name__)


@lru_cache()
def get_identity_provider() -> BaseIdentityProvider:
    """Get the configured identity provider."""
    settings = get_settings()

    if settings.is_development:
        logger.info("Identity Provider: Using MockIdentityProvider (development mode)")
        return MockIdentityProvider()
    else:
        logger.info(f"Identity Provider: Using SupabaseIdentityProvider ({settings.env_mode.value} mode)")
        return SupabaseIdentityProvider()


def reset_identity_provider() -> None:
    """Clear the cached provider instance."""
    get_identity_provider.cache_clear()


__all__ = [
    "get_identity_provider",
    "reset_identity_provider",
    "AuthError",
    "AuthSession",
    "AuthUser",
    "BaseIdentityProvider",
    "MockIdentityProvider",
    "SupabaseIdentityProvider",
]
