"""
Email bodies for transactional messages.

Each builder returns ``(subject, html)``.
"""

from html import escape
from typing import Sequence, Tuple

from dashboard.core.config import get_settings


def name_from_email(email: str) -> str:
    """Fallback display name: the local part of the address."""
    return email.split("@")[0]


def _signature() -> str:
    return f"<p>Best regards,<br/>{escape(get_settings().restaurant_name)}</p>"


def password_reset(customer_name: str, reset_link: str) -> Tuple[str, str]:
    subject = f"Password Reset Request - {get_settings().app_name}"
    html = f"""
    <h2>Password Reset Request</h2>
    <p>Hello {escape(customer_name)},</p>
    <p>We received a request to reset your password. Click the link below to reset your password:</p>
    <p><a href="{escape(reset_link)}">Reset Password</a></p>
    <p>If you didn't request this, please ignore this email.</p>
    {_signature()}
    """
    return subject, html


def signup_confirmation(customer_name: str, action_link: str) -> Tuple[str, str]:
    link = escape(action_link)
    html = f"""
    <h2>Confirm your account</h2>
    <p>Hello {escape(customer_name)},</p>
    <p>Click the button below to confirm your email and finish creating your account:</p>
    <p><a href="{link}">Confirm Email</a></p>
    <p>If the button doesn't work, copy and paste this link into your browser:</p>
    <p><a href="{link}">{link}</a></p>
    """
    return "Confirm your account", html


def order_confirmation(
    customer_name: str,
    order_id: str,
    total_amount: float,
    items: Sequence,
) -> Tuple[str, str]:
    subject = f"Order Confirmation - {get_settings().app_name}"
    rows = "".join(
        f"<tr><td>{escape(item.name)}</td><td>{item.quantity}</td><td>${item.price:.2f}</td><td>${item.line_total:.2f}</td></tr>"
        for item in items
    )
    html = f"""
    <h2>Order Confirmation</h2>
    <p>Hello {escape(customer_name)},</p>
    <p>Thank you for your order #{escape(order_id)}. Here are the details:</p>
    <table>
        <thead><tr><th>Item</th><th>Quantity</th><th>Price</th><th>Line Total</th></tr></thead>
        <tbody>{rows}</tbody>
    </table>
    <p><strong>Total: ${total_amount:.2f}</strong></p>
    {_signature()}
    """
    return subject, html
