from __future__ import annotations

import argparse
import logging
import os
from typing import Callable, List, Optional, Tuple

from .board import Coord
from .scheduler import ManualScheduler
from .session import COMPLETED, FAILED, RESOLUTION_DELAY_MS, SessionController

HELP = (
    "Commands:\n"
    "  r1,c1 r2,c2   pick a pair (press on the first cell, release on the second)\n"
    "  r,c           press on a cell and release off the grid (cancels)\n"
    "  restart       deal a new board\n"
    "  quit          leave"
)


def parse_coord(text: str) -> Coord:
    """Parses 'r,c' (or 'r-c') into a coordinate."""
    sep = ',' if ',' in text else '-'
    parts = [t for t in text.strip().split(sep) if t != '']
    if len(parts) != 2:
        raise ValueError(f'Could not parse coordinate {text!r}')
    return int(parts[0]), int(parts[1])


def parse_command(text: str) -> Tuple[Coord, Optional[Coord]]:
    tokens = text.split()
    if len(tokens) not in (1, 2):
        raise ValueError('Expected one or two coordinates')
    start = parse_coord(tokens[0])
    end = parse_coord(tokens[1]) if len(tokens) == 2 else None
    return start, end


def render(controller: SessionController, show_values: bool = False) -> str:
    view = controller.view()
    lines = [
        controller.board.pretty(show_hidden=show_values),
        f"SUM: {view.sum_expression}{' ✓' if view.sum_highlight else ''}",
        f"Opened: {view.opened_count}/{view.total_playable}   Mistakes: {view.mistakes}   Status: {view.status}",
    ]
    if view.message:
        lines.append(view.message)
    return '\n'.join(lines)


def play(
    controller: SessionController,
    scheduler: ManualScheduler,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    show_values: bool = False,
) -> None:
    """Interactive loop. Returns on 'quit' or end of input."""
    write(render(controller, show_values))
    while True:
        try:
            text = read('> ').strip()
        except EOFError:
            return
        if not text:
            continue
        if text in ('quit', 'exit', 'q'):
            return
        if text in ('help', '?'):
            write(HELP)
            continue
        if text == 'restart':
            controller.restart()
            write(render(controller, show_values))
            continue
        if controller.status in (FAILED, COMPLETED):
            write("The game is over. Type 'restart' to play again.")
            continue
        try:
            start, end = parse_command(text)
        except ValueError:
            write('Could not parse. Try again.')
            continue
        if not controller.pointer_down(start):
            write(f'Cell {start} cannot be picked.')
            continue
        controller.pointer_up(end)
        if controller.is_resolving:
            write(render(controller, show_values))
            scheduler.advance(RESOLUTION_DELAY_MS)
        write(render(controller, show_values))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='MineSum10: pair revealed cells that sum to 10')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal')
    parser.add_argument('--show-values', action='store_true', help='Show covered values (debugging)')
    parser.add_argument('--log-level', default=os.getenv('MINESUM_LOG_LEVEL', 'WARNING'), help='Logging level')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

    scheduler = ManualScheduler()
    controller = SessionController(scheduler=scheduler, seed=args.seed)
    print(HELP)
    play(controller, scheduler, show_values=args.show_values)
