"""
Notification Service Abstract Base Class

Defines the interface for sending transactional email.
Supports both Mock (development) and Real (production) implementations.

Implementations only provide ``send_email`` and ``health_check``; the
password reset, signup confirmation and order confirmation messages are
built here from the shared templates.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from dashboard.services.notifications import templates


@dataclass
class NotificationResult:
    """Result from sending a notification."""
    success: bool
    message_id: Optional[str] = None
    error_message: Optional[str] = None
    provider: str = "unknown"


@dataclass
class EmailLineItem:
    """Line shown in an order confirmation email. ``price`` is the unit price."""
    name: str
    quantity: int
    price: float

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


Recipients = Union[str, List[str]]


class BaseNotificationService(ABC):
    """Abstract base class for notification services."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def send_email(
        self,
        to_email: Recipients,
        subject: str,
        body_html: str,
        body_text: Optional[str] = None,
    ) -> NotificationResult:
        """
        Send an email.

        Delivery failures are reported through the result, never raised.
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check service connectivity."""
        pass

    async def send_password_reset(
        self,
        to_email: str,
        reset_link: str,
        customer_name: Optional[str] = None,
    ) -> NotificationResult:
        """Send a password reset link."""
        subject, html = templates.password_reset(
            customer_name or templates.name_from_email(to_email),
            reset_link,
        )
        return await self.send_email(to_email=to_email, subject=subject, body_html=html)

    async def send_signup_confirmation(
        self,
        to_email: str,
        action_link: str,
        customer_name: Optional[str] = None,
    ) -> NotificationResult:
        """Send an account confirmation link."""
        subject, html = templates.signup_confirmation(
            customer_name or templates.name_from_email(to_email),
            action_link,
        )
        return await self.send_email(to_email=to_email, subject=subject, body_html=html)

    async def send_order_confirmation(
        self,
        to_email: str,
        customer_name: str,
        order_id: str,
        total_amount: float,
        items: Sequence[EmailLineItem],
    ) -> NotificationResult:
        """Send an order summary."""
        subject, html = templates.order_confirmation(customer_name, order_id, total_amount, items)
        return await self.send_email(to_email=to_email, subject=subject, body_html=html)
