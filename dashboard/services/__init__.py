"""
                        Services Module

External collaborators with the hybrid architecture pattern.
Each service has a Mock (development) and a Real (production) implementation.

Services:
    - notifications: Transactional email via SendGrid
    - identity: Accounts and sessions via Supabase Auth
"""

from dashboard.services.identity import get_identity_provider
from dashboard.services.notifications import get_notification_service

__all__ = ["get_identity_provider", "get_notification_service"]
