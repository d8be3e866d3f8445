"""
Identity Provider Abstract Base Class

Defines the account and session operations behind the sign-in,
sign-up and password reset screens. Both MockIdentityProvider and
SupabaseIdentityProvider implement this contract.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

MIN_PASSWORD_LENGTH = 6


class AuthError(Exception):
    """Account or session operation rejected; message is user-facing."""


@dataclass(frozen=True)
class AuthUser:
    """Authenticated account."""
    id: str
    email: str
    full_name: Optional[str] = None


@dataclass(frozen=True)
class AuthSession:
    """Bearer session returned by sign-in."""
    access_token: str
    user: AuthUser
    token_type: str = "bearer"


def check_password_strength(password: str) -> None:
    """Raise AuthError when a password is too short."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise AuthError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


class BaseIdentityProvider(ABC):
    """Abstract base class for identity providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: Optional[str] = None,
    ) -> AuthUser:
        """Create an account."""
        pass

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session."""
        pass

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """Revoke a session."""
        pass

    @abstractmethod
    async def get_user(self, access_token: str) -> Optional[AuthUser]:
        """Resolve a bearer token, or None if it is not a live session."""
        pass

    @abstractmethod
    async def request_password_reset(
        self,
        email: str,
        redirect_to: Optional[str] = None,
    ) -> None:
        """Start the provider's password recovery flow for an address."""
        pass

    @abstractmethod
    async def update_password(self, access_token: str, new_password: str) -> None:
        """Set a new password for the session's user."""
        pass

    @abstractmethod
    async def generate_signup_link(
        self,
        email: str,
        redirect_to: Optional[str] = None,
    ) -> str:
        """Create an email confirmation link without sending it."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check provider connectivity."""
        pass
