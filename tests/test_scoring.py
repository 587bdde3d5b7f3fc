import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from squadform.formation.models import SkillProfile  # noqa: E402
from squadform.formation.scoring import (  # noqa: E402
    diversity_scores,
    jaccard_similarity,
    similarity,
    squad_categories,
    squad_cohesion,
    token_frequencies,
)


def _profile(pid, tokens, categories=()):
    return SkillProfile(participant_id=pid, tokens=frozenset(tokens), categories=frozenset(categories))


class SimilarityTests(unittest.TestCase):
    def test_jaccard_of_overlapping_sets(self):
        self.assertAlmostEqual(jaccard_similarity({"a", "b"}, {"b", "c"}), 1 / 3)

    def test_empty_sets_score_zero(self):
        self.assertEqual(jaccard_similarity(set(), set()), 0.0)
        self.assertEqual(similarity(_profile(1, []), _profile(2, [])), 0.0)

    def test_similarity_is_symmetric_and_reflexive(self):
        a = _profile(1, ["python", "docker"])
        b = _profile(2, ["python", "react", "css"])
        self.assertEqual(similarity(a, b), similarity(b, a))
        self.assertEqual(similarity(a, a), 1.0)
        self.assertAlmostEqual(similarity(a, b), 0.25)


class DiversityTests(unittest.TestCase):
    def test_rare_tokens_and_breadth_raise_the_score(self):
        broad = _profile(1, ["x", "y"], ["A"])
        narrow = _profile(2, ["x"])
        self.assertEqual(token_frequencies([broad, narrow])["x"], 2)
        scores = diversity_scores([broad, narrow])
        self.assertAlmostEqual(scores[0], 0.5 + 1.0 + 0.5)
        self.assertAlmostEqual(scores[1], 0.5)

    def test_breadth_weight_is_configurable(self):
        profile = _profile(1, ["x"], ["A", "B"])
        self.assertAlmostEqual(diversity_scores([profile], breadth_weight=2.0)[0], 1.0 + 4.0)

    def test_empty_profile_scores_zero(self):
        self.assertEqual(diversity_scores([_profile(1, [])]), [0.0])


class SquadSummaryTests(unittest.TestCase):
    def test_cohesion_is_mean_pairwise_similarity(self):
        a = _profile(1, ["python"])
        b = _profile(2, ["python"])
        c = _profile(3, ["figma"])
        self.assertEqual(squad_cohesion([a, b]), 1.0)
        self.assertAlmostEqual(squad_cohesion([a, b, c]), round(1 / 3, 4))

    def test_cohesion_needs_two_members(self):
        self.assertIsNone(squad_cohesion([_profile(1, ["python"])]))
        self.assertIsNone(squad_cohesion([]))

    def test_categories_are_sorted_union(self):
        profiles = [_profile(1, [], ["frontend"]), _profile(2, [], ["design", "frontend"])]
        self.assertEqual(squad_categories(profiles), ["design", "frontend"])


if __name__ == "__main__":
    unittest.main()
