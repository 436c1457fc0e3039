from __future__ import annotations

import math
from collections.abc import Mapping, Set

import numpy as np


def user_similarity(likes_a: Set[str], likes_b: Set[str]) -> float:
    """
    Cosine similarity between two users' binary like-vectors.

    Each user is a 0/1 vector over the union of both like-sets, so the dot
    product is the size of the intersection and the magnitudes are the square
    roots of the set sizes. Returns 0.0 when either set is empty.
    """
    if not likes_a or not likes_b:
        return 0.0
    shared = len(likes_a & likes_b)
    if shared == 0:
        return 0.0
    # sqrt(|A| * |B|) rather than sqrt(|A|) * sqrt(|B|) keeps sim(A, A) == 1.0 exactly
    return shared / math.sqrt(len(likes_a) * len(likes_b))


def score_users(
    target_likes: Set[str],
    others: Mapping[str, Set[str]],
) -> dict[str, tuple[float, int]]:
    """
    Score *target_likes* against every like-set in *others* in one pass.

    Returns ``{user_id: (similarity, shared_count)}`` for every key of
    *others*, with the same values ``user_similarity`` gives pairwise.
    Work is proportional to the total number of likes, never to the number
    of distinct posts.
    """
    if not others:
        return {}
    user_ids = list(others)
    if not target_likes:
        return {uid: (0.0, 0) for uid in user_ids}

    target = frozenset(target_likes)
    count = len(user_ids)
    shared = np.fromiter(
        (len(target & others[uid]) for uid in user_ids), dtype=np.int64, count=count,
    )
    sizes = np.fromiter((len(others[uid]) for uid in user_ids), dtype=np.int64, count=count)

    denom = np.sqrt(sizes * len(target))
    sims = np.divide(
        shared, denom, out=np.zeros(count, dtype=np.float64), where=shared > 0,
    )

    return {
        uid: (float(sim), int(n))
        for uid, sim, n in zip(user_ids, sims, shared)
    }
