import argparse
import random
import sys
import time

sys.path.append('.')
import game  # type: ignore  # noqa: E402

STATES = (game.COVERED, game.REVEALED, game.SELECTING, game.SUCCESS, game.CLEARED)


def random_board(rng: random.Random) -> game.Board:
    """A dealt board with every non-void cell pushed into a random state."""
    board = game.deal_board(rng)
    cells = []
    for cell in board.cells:
        if cell.state == game.VOID:
            cells.append(cell)
        else:
            cells.append(cell.with_state(rng.choice(STATES)))
    return game.Board(size=board.size, cells=tuple(cells))


def main():
    parser = argparse.ArgumentParser(description='Cross-check has_playable_pairs against brute force')
    parser.add_argument('--boards', type=int, default=2000)
    parser.add_argument('--seed', type=int, default=0)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    mismatches = 0
    positives = 0
    t0 = time.time()
    for i in range(args.boards):
        board = random_board(rng)
        fast = game.has_playable_pairs(board)
        slow = game.has_playable_pairs_bruteforce(board)
        positives += int(slow)
        if fast != slow:
            mismatches += 1
            print(f"board #{i}: fast={fast} brute={slow}")
            print(board.pretty(show_hidden=True))
    took = int((time.time() - t0) * 1000)
    print(f"Checked {args.boards} boards ({positives} with pairs) in {took}ms, mismatches={mismatches}")
    return 1 if mismatches else 0


if __name__ == '__main__':
    sys.exit(main())
