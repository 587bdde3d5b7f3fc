import random
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from squadform.formation import (  # noqa: E402
    NoEligibleParticipants,
    is_valid_partition,
    random_partition,
    validate_and_repair,
)


class PartitionRepairTests(unittest.TestCase):
    def test_duplicates_and_unknown_ids_are_dropped_and_remainder_reassigned(self):
        ids = [1, 2, 3, 4, 5, 6]
        squads = validate_and_repair([[1, 2, 2], [2, 3, 99]], ids, 3, random.Random(0))
        self.assertEqual(squads[:2], [[1, 2], [3]])
        self.assertEqual(len(squads), 3)
        self.assertEqual(sorted(squads[2]), [4, 5, 6])
        self.assertTrue(is_valid_partition(squads, ids, 3))

    def test_valid_partition_is_returned_unchanged(self):
        ids = [1, 2, 3, 4, 5]
        partition = [[1, 2], [3, 4, 5]]
        once = validate_and_repair(partition, ids, 3, random.Random(1))
        twice = validate_and_repair(once, ids, 3, random.Random(2))
        self.assertEqual(once, partition)
        self.assertEqual(twice, partition)

    def test_oversized_squads_are_cut_back(self):
        ids = [1, 2, 3, 4, 5]
        squads = validate_and_repair([[1, 2, 3, 4, 5]], ids, 3, random.Random(0))
        self.assertEqual(squads[0], [1, 2, 3])
        self.assertEqual(sorted(squads[1]), [4, 5])

    def test_malformed_entries_are_ignored(self):
        squads = validate_and_repair([None, [], "ab", [[1]], (1,)], [1], 2, random.Random(0))
        self.assertEqual(squads, [[1]])

    def test_empty_candidate_gives_random_chunks(self):
        ids = list(range(7))
        squads = validate_and_repair([], ids, 3, random.Random(0))
        self.assertEqual([len(squad) for squad in squads], [3, 3, 1])
        self.assertTrue(is_valid_partition(squads, ids, 3))

    def test_remainder_shuffle_is_reproducible_under_seed(self):
        ids = list(range(12))
        first = validate_and_repair([[0, 1]], ids, 4, random.Random(42))
        second = validate_and_repair([[0, 1]], ids, 4, random.Random(42))
        self.assertEqual(first, second)

    def test_is_valid_partition_detects_violations(self):
        self.assertFalse(is_valid_partition([[1, 2], [2]], [1, 2], 2))
        self.assertFalse(is_valid_partition([[1]], [1, 2], 2))
        self.assertFalse(is_valid_partition([[1, 2, 3]], [1, 2, 3], 2))
        self.assertFalse(is_valid_partition([[1], []], [1], 2))
        self.assertTrue(is_valid_partition([[2, 1]], [1, 2], 2))


class RandomFallbackTests(unittest.TestCase):
    def test_chunks_every_id_into_squads(self):
        ids = list(range(1, 11))
        squads = random_partition(ids, 4, random.Random(7))
        self.assertEqual([len(squad) for squad in squads], [4, 4, 2])
        self.assertTrue(is_valid_partition(squads, ids, 4))

    def test_same_seed_same_partition(self):
        ids = list(range(30))
        self.assertEqual(
            random_partition(ids, 5, random.Random(3)),
            random_partition(ids, 5, random.Random(3)),
        )

    def test_input_order_is_left_untouched(self):
        ids = [5, 4, 3, 2, 1]
        random_partition(ids, 2, random.Random(0))
        self.assertEqual(ids, [5, 4, 3, 2, 1])

    def test_empty_pool_raises(self):
        with self.assertRaises(NoEligibleParticipants):
            random_partition([], 4, random.Random(0))


if __name__ == "__main__":
    unittest.main()
