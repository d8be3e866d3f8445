"""
Draft Sessions

Owns one OrderCartManager per order-entry session. Each draft is
exclusively owned by the session that opened it and is discarded on
close or emptied by a successful submission.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Dict, Iterable, Optional, Tuple

from dashboard.core.config import get_settings
from dashboard.ordering.cart import OrderCartManager
from dashboard.ordering.models import OrderLineItem, OrderSubmission

logger = logging.getLogger(__name__)


class DraftNotFoundError(LookupError):
    """Raised when a draft id does not belong to an open session."""

    def __init__(self, draft_id: str):
        super().__init__(f"Draft {draft_id} not found")
        self.draft_id = draft_id


class InvalidDraftError(ValueError):
    """Raised when submitting a draft that is missing a table, waiter or items."""


class DraftRegistry:
    """Open drafts keyed by session id."""

    def __init__(self, estimated_ready_minutes: Optional[int] = None):
        if estimated_ready_minutes is None:
            estimated_ready_minutes = get_settings().estimated_ready_minutes
        self.estimated_ready_minutes = estimated_ready_minutes
        self._drafts: Dict[str, OrderCartManager] = {}

    def __len__(self) -> int:
        return len(self._drafts)

    def open(
        self,
        initial_table: str = "",
        initial_waiter: str = "",
        initial_note: str = "",
        initial_items: Iterable[OrderLineItem] = (),
    ) -> Tuple[str, OrderCartManager]:
        """Start a new editing session and return its id and cart."""
        draft_id = uuid.uuid4().hex
        cart = OrderCartManager(
            initial_items=initial_items,
            initial_table=initial_table,
            initial_waiter=initial_waiter,
            initial_note=initial_note,
        )
        self._drafts[draft_id] = cart
        logger.info(f"Draft {draft_id} opened")
        return draft_id, cart

    def get(self, draft_id: str) -> OrderCartManager:
        try:
            return self._drafts[draft_id]
        except KeyError:
            raise DraftNotFoundError(draft_id) from None

    def close(self, draft_id: str) -> None:
        if self._drafts.pop(draft_id, None) is not None:
            logger.info(f"Draft {draft_id} closed")

    def submit(self, draft_id: str) -> OrderSubmission:
        """
        Hand the current draft off as an order and empty it.

        Raises:
            DraftNotFoundError: Unknown draft id
            InvalidDraftError: Draft is missing a table, waiter or items;
                the draft is left untouched
        """
        cart = self.get(draft_id)
        snapshot = cart.snapshot()

        if not snapshot.is_valid:
            raise InvalidDraftError("Please select a table, waiter, and add items to the order")

        created_at = datetime.now(timezone.utc)
        submission = OrderSubmission(
            order_id=uuid.uuid4().hex[:12],
            draft=snapshot,
            created_at=created_at,
            estimated_ready_time=created_at + timedelta(minutes=self.estimated_ready_minutes),
        )
        cart.reset_form()

        logger.info(
            f"Draft {draft_id} submitted as order {submission.order_id} "
            f"(table {snapshot.selected_table}, ${snapshot.total_amount:.2f})"
        )
        return submission


@lru_cache()
def get_draft_registry() -> DraftRegistry:
    """Get the process-wide draft registry."""
    return DraftRegistry()
