"""Simple ASCII demo for the Blockfall engine.

Run with: `python -m blockfall`

This module hard-drops a handful of pieces and prints the resulting frame,
a minimal smoke test showing the stack, the active piece and its ghost.
"""

from __future__ import annotations

import random

from . import Command, Session, format_grid, render_grid


def main(seed: int = 0, drops: int = 5) -> None:
    session = Session(rng=random.Random(seed))
    for _ in range(drops):
        session.tick(0.0, [Command.HARD_DROP])
        if session.game_over:
            break
    print(format_grid(render_grid(session.board)))
    print(f"Score: {session.score}  Next: {session.next_kind.value}")


if __name__ == "__main__":
    main()
