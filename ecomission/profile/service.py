"""Profile service - point mutations on the persisted user."""

import logging
from typing import Optional

from ecomission.core.store import LocalStore
from ecomission.gamification.rules import stage_for_points
from ecomission.profile.models import User

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Read-modify-write operations on the user record.

    Assumes a single writer: each call loads the user, changes it, saves it
    and returns the updated copy. Insufficient balance is an expected outcome
    and is signalled by returning None.
    """

    def __init__(self, store: LocalStore):
        self.store = store

    def get_user(self) -> User:
        return self.store.load_user()

    def award_points(self, amount: int) -> User:
        """Credit a completed mission: balance, lifetime total and mission count."""
        if amount < 0:
            raise ValueError(f"Cannot award a negative amount: {amount}")

        user = self.store.load_user()
        user.points += amount
        user.lifetime_points += amount
        user.total_missions_completed += 1
        user.stage = stage_for_points(user.lifetime_points).value
        self.store.save_user(user)
        return user

    def deduct_points(self, amount: int) -> Optional[User]:
        """Spend from the balance. Lifetime points are never reduced."""
        if amount < 0:
            raise ValueError(f"Cannot deduct a negative amount: {amount}")

        user = self.store.load_user()
        if user.points < amount:
            return None

        user.points -= amount
        self.store.save_user(user)
        return user

    def purchase(self, item_id: str, cost: int) -> Optional[User]:
        """Buy an item. Owning it already still charges but does not duplicate it."""
        if cost < 0:
            raise ValueError(f"Cannot charge a negative cost: {cost}")

        user = self.store.load_user()
        if user.points < cost:
            return None

        user.points -= cost
        if item_id not in user.inventory:
            user.inventory.append(item_id)
        self.store.save_user(user)
        logger.info(f"Purchased {item_id} for {cost}P")
        return user

    def rename(self, name: str) -> User:
        """Set the display name; restore looks up backup rows by this name."""
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValueError("Name must not be empty")

        user = self.store.load_user()
        user.name = cleaned
        self.store.save_user(user)
        return user

    def reset(self) -> User:
        """Wipe all local data and start over."""
        self.store.clear()
        logger.info("Local data wiped")
        return self.store.load_user()
