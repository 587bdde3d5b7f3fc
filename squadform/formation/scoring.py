from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from itertools import combinations

from .models import SkillProfile

DEFAULT_BREADTH_WEIGHT = 0.5


def jaccard_similarity(left: frozenset[str] | set[str], right: frozenset[str] | set[str]) -> float:
    if not left and not right:
        return 0.0
    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)


def similarity(a: SkillProfile, b: SkillProfile) -> float:
    return jaccard_similarity(a.tokens, b.tokens)


def token_frequencies(profiles: Sequence[SkillProfile]) -> Counter[str]:
    """Count how many profiles contain each token."""
    counts: Counter[str] = Counter()
    for profile in profiles:
        counts.update(profile.tokens)
    return counts


def diversity_score(
    profile: SkillProfile,
    frequencies: Counter[str],
    breadth_weight: float = DEFAULT_BREADTH_WEIGHT,
) -> float:
    rarity = sum(1.0 / frequencies[token] for token in profile.tokens if frequencies[token] > 0)
    return rarity + breadth_weight * len(profile.categories)


def diversity_scores(
    profiles: Sequence[SkillProfile],
    breadth_weight: float = DEFAULT_BREADTH_WEIGHT,
) -> list[float]:
    """Score every profile against the token frequencies of this run's pool.

    Rare tokens contribute more (1 / number of profiles holding the token) and
    each covered category adds ``breadth_weight``. Scores are only meaningful
    within one pool, since frequencies change whenever the pool does.
    """
    frequencies = token_frequencies(profiles)
    return [diversity_score(profile, frequencies, breadth_weight) for profile in profiles]


def squad_cohesion(profiles: Sequence[SkillProfile]) -> float | None:
    """Mean pairwise similarity of a squad; None for squads with fewer than two members."""
    pairs = list(combinations(profiles, 2))
    if not pairs:
        return None
    return round(sum(similarity(a, b) for a, b in pairs) / len(pairs), 4)


def squad_categories(profiles: Sequence[SkillProfile]) -> list[str]:
    covered: set[str] = set()
    for profile in profiles:
        covered |= profile.categories
    return sorted(covered)
