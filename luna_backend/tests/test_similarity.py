from __future__ import annotations

import math
import tracemalloc

import pytest

from luna_backend.recommendations.similarity import score_users, user_similarity

LIKE_SETS = [
    set(),
    {"post_1"},
    {"post_1", "post_2", "post_3", "post_5"},
    {"post_2", "post_3", "post_4", "post_6"},
    {"post_1", "post_4", "post_7", "post_8"},
    {"post_9"},
    {"post_1", "post_2", "post_3", "post_4", "post_5", "post_6", "post_7"},
]


def test_similarity_is_symmetric():
    for a in LIKE_SETS:
        for b in LIKE_SETS:
            assert user_similarity(a, b) == user_similarity(b, a)


def test_similarity_is_bounded():
    for a in LIKE_SETS:
        for b in LIKE_SETS:
            assert 0.0 <= user_similarity(a, b) <= 1.0


def test_identical_non_empty_sets_score_one():
    for likes in LIKE_SETS[1:]:
        assert user_similarity(likes, set(likes)) == 1.0


def test_empty_sets_score_zero():
    assert user_similarity(set(), set()) == 0.0
    assert user_similarity({"post_1"}, set()) == 0.0
    assert user_similarity(set(), {"post_1", "post_2"}) == 0.0


def test_disjoint_sets_score_zero():
    assert user_similarity({"post_1", "post_2"}, {"post_3"}) == 0.0


def test_known_cosine_value():
    # two shared posts out of 4 and 4 -> 2 / (2 * 2)
    a = {"post_1", "post_2", "post_3", "post_5"}
    b = {"post_2", "post_3", "post_4", "post_6"}
    assert user_similarity(a, b) == pytest.approx(0.5)

    # one shared post out of 1 and 3 -> 1 / sqrt(3)
    assert user_similarity({"a"}, {"a", "b", "c"}) == pytest.approx(1 / math.sqrt(3))


def test_subset_scores_below_one():
    assert user_similarity({"a", "b"}, {"a", "b", "c"}) < 1.0


def test_accepts_frozensets():
    assert user_similarity(frozenset({"a"}), frozenset({"a"})) == 1.0


def test_score_users_matches_pairwise():
    target = {"post_1", "post_2", "post_3", "post_5"}
    others = {f"user_{i}": likes for i, likes in enumerate(LIKE_SETS)}

    scores = score_users(target, others)

    assert set(scores) == set(others)
    for uid, likes in others.items():
        sim, shared = scores[uid]
        assert sim == pytest.approx(user_similarity(target, likes))
        assert shared == len(target & likes)


def test_score_users_empty_target():
    scores = score_users(set(), {"u1": {"a"}, "u2": set()})
    assert scores == {"u1": (0.0, 0), "u2": (0.0, 0)}


def test_score_users_no_others():
    assert score_users({"a"}, {}) == {}


def test_score_users_memory_follows_like_count():
    # 4000 users with two private likes each: 8k likes over 8k distinct posts
    target = {"p_0_0", "p_0_1"}
    others = {f"u{i}": {f"p_{i}_0", f"p_{i}_1"} for i in range(4000)}

    tracemalloc.start()
    try:
        scores = score_users(target, others)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()

    assert peak < 10e6
    assert scores["u0"] == (1.0, 2)
    assert scores["u1"] == (0.0, 0)
