import random

from ultimate.logic import Macro, Position, apply_move, game_outcome, legal_moves, opponent


def make_position(marks=None, macro=None):
    """Build a position from {(x, y): player} and a {(bx, by): Macro} overlay on an all-OPEN macroboard."""
    cells = [[0]*9 for _ in range(9)]
    for (x, y), p in (marks or {}).items():
        cells[x][y] = p
    grid = [[Macro.OPEN]*3 for _ in range(3)]
    for (bx, by), v in (macro or {}).items():
        grid[bx][by] = v
    return Position(cells, grid)


def local_marks(bx, by, values):
    """Map a row-major nine-value local board onto {(x, y): player}."""
    return {(bx*3 + i % 3, by*3 + i // 3): v for i, v in enumerate(values) if v}


def random_playout(seed, plies):
    rng = random.Random(seed)
    pos, player = Position.new(), 1
    for _ in range(plies):
        if game_outcome(pos) is not None:
            break
        pos = apply_move(pos, rng.choice(legal_moves(pos)), player)
        player = opponent(player)
    return pos, player
