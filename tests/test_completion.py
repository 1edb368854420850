import random
import unittest

from game import (
    CLEARED,
    COVERED,
    REVEALED,
    SELECTING,
    SUCCESS,
    VOID,
    Board,
    deal_board,
    has_playable_pairs,
    has_playable_pairs_bruteforce,
)
from helpers import make_board


class TestCompletionDetector(unittest.TestCase):
    def test_given_complementary_revealed_pair_when_detecting_then_true(self):
        self.assertTrue(has_playable_pairs(make_board([4, 1, 1, 1, 1, 1, 1, 6])))
        self.assertTrue(has_playable_pairs(make_board([9, 2, 2, 2, 2, 2, 2, 1])))

    def test_given_single_five_when_detecting_then_false_but_two_fives_true(self):
        self.assertFalse(has_playable_pairs(make_board([5, 1, 1, 1, 1, 1, 1, 1])))
        self.assertTrue(has_playable_pairs(make_board([5, 1, 1, 1, 1, 1, 1, 5])))

    def test_given_no_complements_when_detecting_then_false(self):
        self.assertFalse(has_playable_pairs(make_board([1, 2, 3, 4, 1, 2, 3, 4])))

    def test_given_complement_only_under_cover_when_detecting_then_false(self):
        # Covered cells all hold 9; the ring's 1 must not pair with them.
        board = make_board([1, 2, 2, 2, 2, 2, 2, 2], fill=9)
        self.assertFalse(has_playable_pairs(board))

    def test_given_pair_in_non_revealed_states_when_detecting_then_ignored(self):
        board = make_board([4, 6, 1, 1, 1, 1, 1, 1])
        self.assertTrue(has_playable_pairs(board))
        for state in (SELECTING, SUCCESS, CLEARED, COVERED):
            self.assertFalse(has_playable_pairs(board.with_states([(3, 3)], state)))

    def test_given_random_boards_when_detecting_then_matches_bruteforce(self):
        rng = random.Random(2024)
        states = (COVERED, REVEALED, REVEALED, SELECTING, SUCCESS, CLEARED)
        for _ in range(400):
            dealt = deal_board(rng)
            cells = tuple(
                c if c.state == VOID else c.with_state(rng.choice(states))
                for c in dealt.cells
            )
            board = Board(size=dealt.size, cells=cells)
            self.assertEqual(has_playable_pairs(board), has_playable_pairs_bruteforce(board))

    def test_given_fresh_deals_when_detecting_then_matches_bruteforce(self):
        for seed in range(200):
            board = deal_board(seed=seed)
            self.assertEqual(has_playable_pairs(board), has_playable_pairs_bruteforce(board))


if __name__ == '__main__':
    unittest.main(verbosity=2)
