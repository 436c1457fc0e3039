from __future__ import annotations

import logging
import time
from collections import defaultdict

from .models import (
    PotentialFriend,
    RecommendationResult,
    RecommendedBusiness,
)
from .similarity import score_users
from .store import InteractionStore

logger = logging.getLogger(__name__)

ALGORITHM = "collaborative_filtering"
MAX_SIMILAR_USERS = 10
MAX_RECOMMENDED_BUSINESSES = 20
NO_LIKES_MESSAGE = "No likes found for user. Start liking posts to get recommendations!"


def _similar_users(
    user_id: str,
    user_likes: frozenset[str],
    store: InteractionStore,
) -> tuple[list[PotentialFriend], dict[str, frozenset[str]]]:
    """Return every user with nonzero similarity, best first, plus their like-sets."""
    others = {uid: likes for uid, likes in store.all_users() if uid != user_id}
    scores = score_users(user_likes, others)

    friends = [
        PotentialFriend(user_id=uid, similarity_score=sim, shared_interests=shared)
        for uid, (sim, shared) in scores.items()
        if sim > 0
    ]
    friends.sort(key=lambda f: (-f.similarity_score, f.user_id))
    return friends, others


def _score_posts(
    neighbours: list[PotentialFriend],
    neighbour_likes: dict[str, frozenset[str]],
    user_likes: frozenset[str],
) -> dict[str, float]:
    """Sum each neighbour's similarity onto the posts they like that the user does not."""
    post_scores: dict[str, float] = defaultdict(float)
    for friend in neighbours:
        for post_id in sorted(neighbour_likes[friend.user_id] - user_likes):
            post_scores[post_id] += friend.similarity_score
    return post_scores


def _rank_businesses(
    post_scores: dict[str, float],
    store: InteractionStore,
) -> list[RecommendedBusiness]:
    business_scores: dict[str, float] = defaultdict(float)
    business_posts: dict[str, set[str]] = defaultdict(set)
    for post_id, score in sorted(post_scores.items()):
        business_id = store.business_of(post_id)
        if business_id is None:
            continue
        business_scores[business_id] += score
        business_posts[business_id].add(post_id)

    ranked: list[RecommendedBusiness] = []
    for business_id in sorted(business_scores, key=lambda b: (-business_scores[b], b)):
        business = store.business_metadata(business_id)
        if business is None:
            logger.warning("No metadata for business %s, skipping", business_id)
            continue
        ranked.append(RecommendedBusiness(
            business=business,
            recommendation_score=business_scores[business_id],
            reason=f"Liked by {len(business_posts[business_id])} similar user(s)",
        ))
        if len(ranked) == MAX_RECOMMENDED_BUSINESSES:
            break
    return ranked


def get_recommendations(user_id: str, store: InteractionStore) -> RecommendationResult:
    """
    Recommend potential friends and businesses for *user_id*.

    Users are compared by cosine similarity of their liked posts. The ten
    most similar users vote for the posts they like that *user_id* has not
    liked yet, weighted by their similarity, and the votes are summed per
    owning business. Store errors propagate to the caller.
    """
    start_time = time.time()

    user_likes = store.likes_of(user_id)
    if not user_likes:
        logger.debug("User %s has no likes, returning empty recommendations", user_id)
        return RecommendationResult(message=NO_LIKES_MESSAGE)

    similar, neighbour_likes = _similar_users(user_id, user_likes, store)
    top_similar = similar[:MAX_SIMILAR_USERS]

    post_scores = _score_posts(top_similar, neighbour_likes, user_likes)
    businesses = _rank_businesses(post_scores, store)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.debug(
        "Recommendations for %s: %d similar users, %d businesses in %.1f ms",
        user_id, len(similar), len(businesses), elapsed_ms,
    )

    return RecommendationResult(
        potential_friends=top_similar,
        recommended_businesses=businesses,
        algorithm=ALGORITHM,
        total_similar_users=len(similar),
    )
