"""
Read-side contract the recommendation engine needs from an interaction store.

The engine never owns persistence: it asks a store for like-sets, the
post -> business mapping and business metadata, and treats every answer as an
immutable snapshot for the duration of one request.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping

from .models import Business


class StoreUnavailableError(RuntimeError):
    """The backing interaction data could not be read."""


class InteractionStore(ABC):
    """Interface every interaction backend implements."""

    @abstractmethod
    def likes_of(self, user_id: str) -> frozenset[str]:
        """Return the post ids *user_id* has liked (empty if unknown)."""

    @abstractmethod
    def all_users(self) -> Iterable[tuple[str, frozenset[str]]]:
        """Yield ``(user_id, liked_post_ids)`` for every known user."""

    @abstractmethod
    def business_of(self, post_id: str) -> str | None:
        """Return the id of the business *post_id* belongs to, if any."""

    @abstractmethod
    def business_metadata(self, business_id: str) -> Business | None:
        """Return display metadata for *business_id*, if known."""


class InMemoryInteractionStore(InteractionStore):
    def __init__(
        self,
        user_likes: Mapping[str, Iterable[str]],
        post_business: Mapping[str, str],
        businesses: Iterable[Business],
    ) -> None:
        self._user_likes: dict[str, frozenset[str]] = {
            user_id: frozenset(posts) for user_id, posts in user_likes.items()
        }
        self._post_business: dict[str, str] = dict(post_business)
        self._businesses: dict[str, Business] = {b.id: b for b in businesses}

    def likes_of(self, user_id: str) -> frozenset[str]:
        return self._user_likes.get(user_id, frozenset())

    def all_users(self) -> Iterator[tuple[str, frozenset[str]]]:
        return iter(self._user_likes.items())

    def business_of(self, post_id: str) -> str | None:
        return self._post_business.get(post_id)

    def business_metadata(self, business_id: str) -> Business | None:
        return self._businesses.get(business_id)


# ---------------------------------------------------------------------------
# Demo fixture
# ---------------------------------------------------------------------------

DEMO_USER_LIKES: dict[str, list[str]] = {
    "user_1": ["post_1", "post_2", "post_3", "post_5"],
    "user_2": ["post_2", "post_3", "post_4", "post_6"],
    "user_3": ["post_1", "post_4", "post_7", "post_8"],
    "user_4": ["post_2", "post_5", "post_6", "post_9"],
}

DEMO_POST_BUSINESS: dict[str, str] = {
    "post_1": "business_1",
    "post_2": "business_2",
    "post_3": "business_1",
    "post_4": "business_3",
    "post_5": "business_2",
    "post_6": "business_3",
    "post_7": "business_4",
    "post_8": "business_4",
    "post_9": "business_5",
}

DEMO_BUSINESSES: list[Business] = [
    Business(id="business_1", name="Coffee Shop A", category="Food & Drink"),
    Business(id="business_2", name="Restaurant B", category="Food & Drink"),
    Business(id="business_3", name="Gym C", category="Fitness"),
    Business(id="business_4", name="Salon D", category="Beauty"),
    Business(id="business_5", name="Bookstore E", category="Retail"),
]


def demo_store() -> InMemoryInteractionStore:
    """Return a fresh store seeded with the four-user demo data."""
    return InMemoryInteractionStore(DEMO_USER_LIKES, DEMO_POST_BUSINESS, DEMO_BUSINESSES)
