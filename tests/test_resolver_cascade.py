import unittest

from game import (
    CLEARED,
    COVERED,
    MISTAKE_LIMIT,
    REVEALED,
    SELECTING,
    SUCCESS,
    VOID,
    SelectionEntry,
    apply_cascade,
    begin_selection,
    bonus_cells,
    clear_targets,
    cross_cells,
    end_selection,
    is_match,
    resolve_pair,
    reveal_targets,
    square_cells,
)
from helpers import make_board


def _select(board, a, b):
    board, start = begin_selection(board, a)
    return end_selection(board, start, b)


class TestMatchResolver(unittest.TestCase):
    def setUp(self):
        self.board = make_board([4, 6, 3, 7, 1, 1, 1, 1])

    def test_given_pair_summing_to_ten_when_resolving_then_success_and_no_mistake(self):
        board, pair = _select(self.board, (3, 3), (3, 4))
        self.assertTrue(is_match(pair))
        res = resolve_pair(board, pair, mistakes=0)
        self.assertTrue(res.matched)
        self.assertFalse(res.failed)
        self.assertEqual(res.mistakes, 0)
        self.assertEqual(res.board.at(3, 3).state, SUCCESS)
        self.assertEqual(res.board.at(3, 4).state, SUCCESS)

    def test_given_mismatched_pair_when_resolving_then_revealed_and_mistake_counted(self):
        board, pair = _select(self.board, (3, 3), (3, 5))
        self.assertFalse(is_match(pair))
        res = resolve_pair(board, pair, mistakes=0)
        self.assertFalse(res.matched)
        self.assertEqual(res.mistakes, 1)
        self.assertFalse(res.failed)
        self.assertEqual(res.board.at(3, 3).state, REVEALED)
        self.assertEqual(res.board.at(3, 5).state, REVEALED)
        self.assertEqual(res.board.count(SELECTING), 0)

    def test_given_two_prior_mistakes_when_mismatching_then_failed(self):
        board, pair = _select(self.board, (3, 3), (3, 5))
        res = resolve_pair(board, pair, mistakes=MISTAKE_LIMIT - 1)
        self.assertEqual(res.mistakes, 3)
        self.assertTrue(res.failed)

    def test_given_partial_selection_when_resolving_then_value_error(self):
        with self.assertRaises(ValueError):
            resolve_pair(self.board, (SelectionEntry(3, 3, 4),), mistakes=0)


class TestCascade(unittest.TestCase):
    def setUp(self):
        self.board = make_board([4, 6, 3, 7, 1, 1, 1, 1])

    def test_given_pivot_when_computing_shapes_then_clipped_to_bounds(self):
        self.assertEqual(set(cross_cells(self.board, (4, 4))), {(4, 4), (3, 4), (5, 4), (4, 3), (4, 5)})
        self.assertEqual(set(cross_cells(self.board, (0, 0))), {(0, 0), (1, 0), (0, 1)})
        self.assertEqual(len(square_cells(self.board, (4, 4))), 9)
        self.assertEqual(set(square_cells(self.board, (8, 8))), {(7, 7), (7, 8), (8, 7), (8, 8)})

    def test_given_path_length_when_computing_bonus_then_shape_by_threshold(self):
        pivot = (2, 2)
        self.assertEqual(bonus_cells(self.board, 2, pivot), [])
        self.assertEqual(len(bonus_cells(self.board, 3, pivot)), 5)
        self.assertEqual(len(bonus_cells(self.board, 4, pivot)), 5)
        self.assertEqual(len(bonus_cells(self.board, 5, pivot)), 9)
        self.assertEqual(bonus_cells(self.board, 5, None), [])
        self.assertEqual(set(reveal_targets(self.board, 2, pivot)), set(cross_cells(self.board, pivot)))
        self.assertEqual(set(reveal_targets(self.board, 3, pivot)), set(cross_cells(self.board, pivot)))
        self.assertEqual(set(reveal_targets(self.board, 5, pivot)), set(square_cells(self.board, pivot)))
        self.assertEqual(reveal_targets(self.board, 2, None), [])

    def test_given_matched_pair_when_cascading_then_pair_cleared_and_pivot_cross_revealed(self):
        board, pair = _select(self.board, (3, 3), (3, 4))
        board = resolve_pair(board, pair, 0).board
        out = apply_cascade(board, pair)
        self.assertEqual(out.at(3, 3).state, CLEARED)
        self.assertEqual(out.at(3, 4).state, CLEARED)
        self.assertEqual(out.count(CLEARED), 2)
        # Only (2, 4) around the pivot (3, 4) was still covered.
        self.assertEqual(out.at(2, 4).state, REVEALED)
        self.assertEqual(out.count(COVERED), 71)
        self.assertEqual(out.count(REVEALED), 7)
        self.assertEqual(out.at(4, 4).state, VOID)
        # The input board is a value and is left alone.
        self.assertEqual(board.at(3, 3).state, SUCCESS)

    def test_given_covered_neighbors_when_pivot_matched_then_they_become_playable(self):
        board = make_board([4, 6, 3, 7, 1, 1, 1, 1], fill=2)
        board, pair = _select(board, (3, 4), (3, 3))  # pivot (3, 3)
        out = apply_cascade(resolve_pair(board, pair, 0).board, pair)
        self.assertEqual(out.at(2, 3).state, REVEALED)
        self.assertEqual(out.at(3, 2).state, REVEALED)
        self.assertEqual(out.at(2, 3).visible_value, 2)
        self.assertEqual(out.at(3, 3).state, CLEARED)
        self.assertEqual(out.at(3, 4).state, CLEARED)
        # Diagonals stay covered below the square threshold.
        self.assertEqual(out.at(2, 2).state, COVERED)
        self.assertEqual(out.opened_count(), 10)

    def test_given_cross_length_when_cascading_then_cross_cleared_and_void_kept(self):
        pair = (SelectionEntry(3, 3, 4), SelectionEntry(3, 4, 6))
        targets = clear_targets(self.board, pair, 3)
        self.assertEqual(len(targets), len(set(targets)))  # de-duplicated
        out = apply_cascade(self.board, pair, path_length=3)
        for coord in [(3, 3), (3, 4), (2, 4), (3, 5)]:
            self.assertEqual(out.at(*coord).state, CLEARED)
        self.assertEqual(out.at(4, 4).state, VOID)
        self.assertEqual(out.count(CLEARED), 4)

    def test_given_square_length_when_cascading_then_square_cleared(self):
        pair = (SelectionEntry(0, 1, 4), SelectionEntry(0, 0, 6))
        out = apply_cascade(self.board, pair, path_length=5)
        self.assertEqual({c.coord for c in out.cells_in(CLEARED)}, {(0, 0), (0, 1), (1, 0), (1, 1)})

    def test_given_already_cleared_cells_when_cascading_then_unchanged(self):
        board = self.board.with_states([(3, 3)], CLEARED)
        pair = (SelectionEntry(3, 3, 4), SelectionEntry(3, 4, 6))
        out = apply_cascade(board, pair)
        self.assertEqual(out.at(3, 3).state, CLEARED)
        self.assertEqual(out.at(3, 4).state, CLEARED)

    def test_given_empty_selection_when_cascading_then_same_board(self):
        self.assertIs(apply_cascade(self.board, tuple()), self.board)


if __name__ == '__main__':
    unittest.main(verbosity=2)
