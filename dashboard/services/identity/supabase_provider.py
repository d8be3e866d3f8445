"""
Supabase Identity Provider

Production implementation backed by Supabase Auth:
- anon client for sign-up, sign-in and password recovery
- service-role client for token lookup, admin password updates,
  sign-out and signup link generation

The supabase-py client is synchronous, so calls run in a worker thread.
"""

import asyncio
import logging
from typing import Optional

from supabase import AuthError as SupabaseAuthError, Client, create_client

from dashboard.core.config import get_settings
from dashboard.services.identity.base import (
    AuthError,
    AuthSession,
    AuthUser,
    BaseIdentityProvider,
    check_password_strength,
)

logger = logging.getLogger(__name__)


def _to_auth_user(user) -> AuthUser:
    metadata = getattr(user, "user_metadata", None) or {}
    return AuthUser(id=str(user.id), email=user.email or "", full_name=metadata.get("full_name"))


class SupabaseIdentityProvider(BaseIdentityProvider):
    """Identity provider using Supabase Auth."""

    def __init__(
        self,
        client: Optional[Client] = None,
        admin_client: Optional[Client] = None,
    ):
        settings = get_settings()
        self.site_url = settings.site_url

        if client is None or admin_client is None:
            if not (settings.supabase_url and settings.supabase_anon_key and settings.supabase_service_role_key):
                raise ValueError("Supabase is not configured (SUPABASE_URL / keys missing)")
            client = client or create_client(settings.supabase_url, settings.supabase_anon_key)
            admin_client = admin_client or create_client(settings.supabase_url, settings.supabase_service_role_key)

        self.client = client
        self.admin_client = admin_client
        logger.info("SupabaseIdentityProvider initialized")

    @property
    def provider_name(self) -> str:
        return "supabase"

    async def _call(self, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except SupabaseAuthError as e:
            logger.warning(f"Supabase auth error: {e}")
            raise AuthError(str(e)) from e

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: Optional[str] = None,
    ) -> AuthUser:
        check_password_strength(password)
        response = await self._call(self.client.auth.sign_up, {
            "email": email,
            "password": password,
            "options": {"data": {"full_name": full_name}},
        })
        if response.user is None:
            raise AuthError("Sign up failed")
        return _to_auth_user(response.user)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        response = await self._call(self.client.auth.sign_in_with_password, {
            "email": email,
            "password": password,
        })
        if response.session is None or response.user is None:
            raise AuthError("Invalid login credentials")
        return AuthSession(access_token=response.session.access_token, user=_to_auth_user(response.user))

    async def sign_out(self, access_token: str) -> None:
        await self._call(self.admin_client.auth.admin.sign_out, access_token)

    async def get_user(self, access_token: str) -> Optional[AuthUser]:
        try:
            response = await self._call(self.admin_client.auth.get_user, access_token)
        except AuthError:
            return None
        if response is None or response.user is None:
            return None
        return _to_auth_user(response.user)

    async def request_password_reset(
        self,
        email: str,
        redirect_to: Optional[str] = None,
    ) -> None:
        await self._call(
            self.client.auth.reset_password_for_email,
            email,
            {"redirect_to": redirect_to or f"{self.site_url}/set-new-password"},
        )

    async def update_password(self, access_token: str, new_password: str) -> None:
        check_password_strength(new_password)
        user = await self.get_user(access_token)
        if user is None:
            raise AuthError("Auth session missing!")
        await self._call(self.admin_client.auth.admin.update_user_by_id, user.id, {"password": new_password})

    async def generate_signup_link(
        self,
        email: str,
        redirect_to: Optional[str] = None,
    ) -> str:
        response = await self._call(self.admin_client.auth.admin.generate_link, {
            "type": "signup",
            "email": email,
            "options": {"redirect_to": redirect_to or self.site_url},
        })
        action_link = getattr(getattr(response, "properties", None), "action_link", None)
        if not action_link:
            raise AuthError("Failed to generate signup link")
        return action_link

    async def health_check(self) -> bool:
        try:
            await self._call(self.admin_client.auth.admin.list_users)
            return True
        except AuthError:
            return False
