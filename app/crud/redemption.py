"""
Contract code redemption.

Creates the member profile and subscription and marks the contract code
used in a single transaction.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from google.cloud.firestore import transactional

from app.crud.contract_code import ContractCodeCRUD
from app.crud.user import SubscriptionCRUD, UserCRUD
from app.models.contract_code import ContractCodeStatus, check_redeemable
from app.models.subscription import Subscription
from app.models.user import UserProfile
from app.services.local_store import LocalStore


def _redeem(transaction, code_ref, user_ref, subscription_ref, code: str,
            profile: UserProfile, now: datetime) -> Subscription:
    # Reads must precede writes; the re-check makes a concurrent redemption
    # of the same code fail here instead of overwriting it.
    snapshot = code_ref.get(transaction=transaction)
    contract = check_redeemable(code, snapshot.to_dict() if snapshot.exists else None, now)

    subscription = Subscription.starting_at(profile.user_id, contract.plan_id, now)
    transaction.set(user_ref, profile.to_dict())
    transaction.set(subscription_ref, subscription.to_dict())
    transaction.update(code_ref, {
        "status": ContractCodeStatus.USED.value,
        "usedBy": profile.user_id,
        "usedAt": now,
    })
    return subscription


class RedemptionCRUD:
    """Atomic write spanning contractCodes, users and subscriptions."""

    def __init__(self, db: Any):
        self.db = db
        self.codes = ContractCodeCRUD(db)
        self.users = UserCRUD(db)
        self.subscriptions = SubscriptionCRUD(db)

    def _run_transaction(self, func, *args):
        if isinstance(self.db, LocalStore):
            return self.db.run_transaction(func, *args)
        return transactional(func)(self.db.transaction(), *args)

    async def redeem(self, code: str, profile: UserProfile,
                     now: Optional[datetime] = None) -> Subscription:
        """
        Redeem ``code`` for the member described by ``profile``.

        Args:
            code: Normalized contract code
            profile: Profile of the newly created identity
            now: Redemption time, also the subscription start

        Returns:
            The created subscription

        Raises:
            ContractCodeError: If the code is no longer redeemable when the
                               transaction reads it. Nothing is written.
        """
        now = now or datetime.now(timezone.utc)
        return self._run_transaction(
            _redeem,
            self.codes.reference(code),
            self.users.get_collection().document(profile.user_id),
            self.subscriptions.get_collection().document(profile.user_id),
            code,
            profile,
            now,
        )
