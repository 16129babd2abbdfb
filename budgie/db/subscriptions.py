"""
Subscription repository.

Subscriptions are created and deleted only; replacing one means deleting it
and adding it again.
"""

import logging
import uuid
from typing import Optional

from budgie.models.transaction import SubscriptionInput
from budgie.utils.timestamp import to_millis, utc_now

from .base import BaseRepository
from .models import Subscription

logger = logging.getLogger(__name__)


class SubscriptionRepository(BaseRepository):
    """Repository for recurring subscriptions."""

    def add(self, data: SubscriptionInput) -> Subscription:
        """
        Insert a new subscription.

        Args:
            data: Subscription values

        Returns:
            The created Subscription with its generated ID

        Raises:
            ValueError: If the name is empty or the amount is not positive
        """
        data.validate()

        now = utc_now()
        subscription = Subscription(
            id=str(uuid.uuid4()),
            name=data.name,
            amount=data.amount,
            currency=data.currency,
            billing_period=data.billing_period,
            next_billing_date=data.next_billing_date,
            notification_enabled=data.notification_enabled,
            category=data.category,
            created_at=now,
            updated_at=now,
        )

        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO subscriptions (
                    id, name, amount, currency, billingPeriod, nextBillingDate,
                    notificationEnabled, category, createdAt, updatedAt
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    subscription.id,
                    subscription.name,
                    subscription.amount,
                    subscription.currency.value,
                    subscription.billing_period.value,
                    to_millis(subscription.next_billing_date),
                    1 if subscription.notification_enabled else 0,
                    subscription.category.value,
                    to_millis(subscription.created_at),
                    to_millis(subscription.updated_at),
                ),
            )

        logger.info(f"Subscription added: {subscription.id} ({subscription.name})")
        return subscription

    def get_by_id(self, subscription_id: str) -> Optional[Subscription]:
        """Get a subscription by its ID, or None when it does not exist."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM subscriptions WHERE id = ?", (subscription_id,)
            ).fetchone()
        return Subscription.from_row(row) if row else None

    def list_subscriptions(self) -> list[Subscription]:
        """All subscriptions, soonest next billing date first."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT * FROM subscriptions ORDER BY nextBillingDate ASC"
            ).fetchall()
        return [Subscription.from_row(row) for row in rows]

    def delete(self, subscription_id: str) -> bool:
        """
        Delete a subscription.

        Returns:
            True if deleted, False if the ID did not exist
        """
        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM subscriptions WHERE id = ?", (subscription_id,)
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Subscription deleted: {subscription_id}")
        return deleted
