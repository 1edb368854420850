"""
MineSum10 core Python package.

This package contains the puzzle engine as pure-logic helpers, kept apart
from the Flask app and the CLI so it can be tested on its own.
Modules:
- board.py: Board, Cell, Coord, cell states
- deal.py: fresh boards (void center, revealed ring)
- selection.py: two-cell pick protocol
- resolver.py: match / mismatch judgement, mistakes
- cascade.py: clear + reveal after a match
- completion.py: playable-pair detection
- scheduler.py: deferred actions with cancel
- session.py: SessionController tying it all together
- cli.py: terminal front end
"""
