"""
Mock Identity Provider

In-memory accounts and bearer tokens for development and tests.
Passwords are stored as salted PBKDF2 hashes; recovery and signup
links are recorded instead of being emailed.
"""

import hashlib
import hmac
import logging
import secrets
import uuid
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urlencode

from dashboard.core.config import get_settings
from dashboard.services.identity.base import (
    AuthError,
    AuthSession,
    AuthUser,
    BaseIdentityProvider,
    check_password_strength,
)

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000


@dataclass
class _Account:
    user: AuthUser
    salt: bytes
    password_hash: bytes


def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)


class MockIdentityProvider(BaseIdentityProvider):
    """Mock identity provider for development."""

    def __init__(self):
        self._accounts: Dict[str, _Account] = {}
        self._sessions: Dict[str, str] = {}  # token -> email
        self.recovery_links: Dict[str, str] = {}
        self.signup_links: Dict[str, str] = {}
        logger.info("MockIdentityProvider initialized")

    @property
    def provider_name(self) -> str:
        return "mock"

    @staticmethod
    def _normalize(email: str) -> str:
        return email.strip().lower()

    def _issue_token(self, email: str) -> str:
        token = secrets.token_urlsafe(32)
        self._sessions[token] = email
        return token

    def _link(self, redirect_to: Optional[str], **params: str) -> str:
        base = redirect_to or get_settings().site_url
        return f"{base}#{urlencode(params)}"

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: Optional[str] = None,
    ) -> AuthUser:
        key = self._normalize(email)
        if key in self._accounts:
            raise AuthError("User already registered")
        check_password_strength(password)

        salt = secrets.token_bytes(16)
        user = AuthUser(id=uuid.uuid4().hex, email=key, full_name=full_name)
        self._accounts[key] = _Account(user=user, salt=salt, password_hash=_hash_password(password, salt))
        logger.info(f"Mock account created for {key}")
        return user

    async def sign_in(self, email: str, password: str) -> AuthSession:
        account = self._accounts.get(self._normalize(email))
        if account is None or not hmac.compare_digest(
            account.password_hash, _hash_password(password, account.salt)
        ):
            raise AuthError("Invalid login credentials")

        return AuthSession(access_token=self._issue_token(account.user.email), user=account.user)

    async def sign_out(self, access_token: str) -> None:
        self._sessions.pop(access_token, None)

    async def get_user(self, access_token: str) -> Optional[AuthUser]:
        email = self._sessions.get(access_token)
        if email is None:
            return None
        return self._accounts[email].user

    async def request_password_reset(
        self,
        email: str,
        redirect_to: Optional[str] = None,
    ) -> None:
        key = self._normalize(email)
        # Unknown addresses are not reported to the caller.
        if key not in self._accounts:
            logger.info(f"Mock password reset requested for unknown address {key}")
            return

        token = self._issue_token(key)
        self.recovery_links[key] = self._link(redirect_to, access_token=token, type="recovery")
        logger.info(f"Mock recovery link issued for {key}")

    async def update_password(self, access_token: str, new_password: str) -> None:
        email = self._sessions.get(access_token)
        if email is None:
            raise AuthError("Auth session missing!")
        check_password_strength(new_password)

        account = self._accounts[email]
        account.salt = secrets.token_bytes(16)
        account.password_hash = _hash_password(new_password, account.salt)
        logger.info(f"Mock password updated for {email}")

    async def generate_signup_link(
        self,
        email: str,
        redirect_to: Optional[str] = None,
    ) -> str:
        key = self._normalize(email)
        link = self._link(redirect_to, token=secrets.token_urlsafe(24), type="signup")
        self.signup_links[key] = link
        return link

    async def health_check(self) -> bool:
        return True
