from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pandas as pd

from ..config import DEFAULT_APP_CONFIG, AppConfig
from .models import Business
from .store import InteractionStore, StoreUnavailableError, demo_store

logger = logging.getLogger(__name__)

LIKES_CSV = "likes.csv"
POSTS_CSV = "posts.csv"
BUSINESSES_CSV = "businesses.csv"

_REQUIRED_COLUMNS: dict[str, list[str]] = {
    LIKES_CSV: ["user_id", "post_id"],
    POSTS_CSV: ["post_id", "business_id"],
    BUSINESSES_CSV: ["id", "name", "category"],
}


def _read(data_dir: Path, filename: str) -> pd.DataFrame:
    path = data_dir / filename
    try:
        df = pd.read_csv(path, dtype=str)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise StoreUnavailableError(f"cannot read {path}") from exc

    missing = [c for c in _REQUIRED_COLUMNS[filename] if c not in df.columns]
    if missing:
        raise StoreUnavailableError(f"{path} is missing columns: {', '.join(missing)}")

    # Blank ids carry no information
    return df.dropna(subset=_REQUIRED_COLUMNS[filename][:2])


class CsvInteractionStore(InteractionStore):
    """Interaction store backed by three CSV exports, loaded on first access."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self._user_likes: dict[str, frozenset[str]] | None = None
        self._post_business: dict[str, str] = {}
        self._businesses: dict[str, Business] = {}

    def _load(self) -> dict[str, frozenset[str]]:
        likes = _read(self.data_dir, LIKES_CSV)
        posts = _read(self.data_dir, POSTS_CSV)
        businesses = _read(self.data_dir, BUSINESSES_CSV)

        duplicated = posts["post_id"].duplicated(keep="first")
        if duplicated.any():
            logger.warning(
                "%d posts in %s map to more than one business, keeping the first: %s",
                int(duplicated.sum()),
                self.data_dir / POSTS_CSV,
                ", ".join(sorted(set(posts.loc[duplicated, "post_id"]))[:10]),
            )
            posts = posts.loc[~duplicated]
        self._post_business = dict(zip(posts["post_id"], posts["business_id"]))
        self._businesses = {
            row["id"]: Business(id=row["id"], name=row["name"], category=row["category"])
            for row in businesses.fillna("").to_dict(orient="records")
        }
        user_likes = {
            user_id: frozenset(group["post_id"])
            for user_id, group in likes.groupby("user_id", sort=False)
        }
        logger.info(
            "Loaded %d likes for %d users from %s",
            len(likes), len(user_likes), self.data_dir,
        )
        return user_likes

    def _likes(self) -> dict[str, frozenset[str]]:
        if self._user_likes is None:
            self._user_likes = self._load()
        return self._user_likes

    def likes_of(self, user_id: str) -> frozenset[str]:
        return self._likes().get(user_id, frozenset())

    def all_users(self) -> Iterator[tuple[str, frozenset[str]]]:
        return iter(self._likes().items())

    def business_of(self, post_id: str) -> str | None:
        self._likes()
        return self._post_business.get(post_id)

    def business_metadata(self, business_id: str) -> Business | None:
        self._likes()
        return self._businesses.get(business_id)


def build_store(config: AppConfig = DEFAULT_APP_CONFIG) -> InteractionStore:
    """Return the CSV store when a data directory is configured, else demo data."""
    if config.data_path is not None:
        return CsvInteractionStore(config.data_path)
    logger.info("LUNA_DATA_DIR not set, serving the demo interaction data")
    return demo_store()
