"""Board model and rules for Ultimate Tic Tac Toe.

Coordinates follow the board's column/row convention: a Move is (x, y),
``cells[x][y]`` holds the occupant and ``macro[x // 3][y // 3]`` the status
of the local board containing it. Nine-value sequences (one local board, or
the macroboard flattened) are always row-major.
"""
from enum import IntEnum
from typing import NamedTuple

WIN_LINES = [
    (0,1,2),(3,4,5),(6,7,8),
    (0,3,6),(1,4,7),(2,5,8),
    (0,4,8),(2,4,6)
]

# Lines passing through each of the nine squares
LINES_THROUGH = [[line for line in WIN_LINES if i in line] for i in range(9)]


class Cell(IntEnum):
    EMPTY = 0
    PLAYER_ONE = 1
    PLAYER_TWO = 2


class Macro(IntEnum):
    ACTIVE = -1
    OPEN = 0
    WON_BY_ONE = 1
    WON_BY_TWO = 2
    TIED = 3


class Move(NamedTuple):
    x: int
    y: int

    @property
    def board(self):
        """Local board (bx, by) this move is played in."""
        return self.x // 3, self.y // 3

    @property
    def target(self):
        """Local board the opponent is sent to."""
        return self.x % 3, self.y % 3


class IllegalMoveError(ValueError):
    pass


def opponent(player):
    return 2 if player == 1 else 1

def is_decided(status):
    """Won or tied; plain ints written into a grid work too."""
    return status > Macro.OPEN


# ── Nine-square logic (local boards and the macroboard) ──────────────────────
def is_win(values, player):
    return any(values[a] == values[b] == values[c] == player for a, b, c in WIN_LINES)

def is_lose(values, player):
    return is_win(values, opponent(player))

def is_tie(values):
    # Only meaningful once neither side has a line
    return all(v != Macro.OPEN and v != Macro.ACTIVE for v in values)

def outcome(values):
    """1 or 2 for a completed line, ``Macro.TIED`` when decided without one, else None."""
    for p in (1, 2):
        if is_win(values, p): return p
    if is_tie(values): return Macro.TIED
    return None

def completes_line(values, i, player):
    """Would placing ``player`` on square ``i`` finish one of its lines?"""
    return any(all(values[j] == player for j in line if j != i) for line in LINES_THROUGH[i])


# ── Position ─────────────────────────────────────────────────────────────────
class Position:
    __slots__ = ('cells', 'macro')

    def __init__(self, cells, macro):
        if len(cells) != 9 or any(len(col) != 9 for col in cells):
            raise ValueError("cells must be a 9x9 grid")
        if len(macro) != 3 or any(len(col) != 3 for col in macro):
            raise ValueError("macro must be a 3x3 grid")
        self.cells = [[Cell(v) for v in col] for col in cells]
        self.macro = [[Macro(v) for v in col] for col in macro]

    @classmethod
    def new(cls):
        return cls([[Cell.EMPTY]*9 for _ in range(9)], [[Macro.ACTIVE]*3 for _ in range(3)])

    def copy(self):
        p = Position.__new__(Position)
        p.cells = [list(col) for col in self.cells]
        p.macro = [list(col) for col in self.macro]
        return p

    def cell(self, x, y):
        return self.cells[x][y]

    def local_values(self, bx, by):
        sx, sy = bx * 3, by * 3
        return [self.cells[sx + j][sy + i] for i in range(3) for j in range(3)]

    def macro_values(self):
        return [self.macro[bx][by] for by in range(3) for bx in range(3)]

    def is_empty(self):
        return all(v == Cell.EMPTY for col in self.cells for v in col)

    def empty_cells_in_play(self):
        count = 0
        for bx in range(3):
            for by in range(3):
                if not is_decided(self.macro[bx][by]):
                    count += self.local_values(bx, by).count(Cell.EMPTY)
        return count

    def __eq__(self, other):
        if not isinstance(other, Position): return NotImplemented
        return self.cells == other.cells and self.macro == other.macro

    def __repr__(self):
        return f"Position(macro={[list(map(int, c)) for c in self.macro]})"

    def __str__(self):
        marks = {Cell.EMPTY: '.', Cell.PLAYER_ONE: 'X', Cell.PLAYER_TWO: 'O'}
        rows = []
        for y in range(9):
            if y and y % 3 == 0: rows.append('------+-------+------')
            row = [marks[self.cells[x][y]] for x in range(9)]
            rows.append(' | '.join(' '.join(row[i:i+3]) for i in (0, 3, 6)))
        return '\n'.join(rows)


# ── Rules ────────────────────────────────────────────────────────────────────
def legal_moves(position):
    macro, cells = position.macro, position.cells
    return [Move(x, y) for y in range(9) for x in range(9)
            if macro[x // 3][y // 3] == Macro.ACTIVE and cells[x][y] == Cell.EMPTY]

def game_outcome(position):
    return outcome(position.macro_values())

def apply_move(position, move, player):
    """Return the position after ``player`` plays ``move``; the input is left untouched."""
    x, y = move
    if player not in (1, 2):
        raise IllegalMoveError(f"unknown player id {player!r}")
    if not (0 <= x < 9 and 0 <= y < 9):
        raise IllegalMoveError(f"{tuple(move)} is off the board")
    bx, by = x // 3, y // 3
    if position.macro[bx][by] != Macro.ACTIVE:
        raise IllegalMoveError(f"local board {(bx, by)} is not active")
    if position.cells[x][y] != Cell.EMPTY:
        raise IllegalMoveError(f"cell {(x, y)} is already taken")

    nxt = position.copy()
    nxt.cells[x][y] = Cell(player)
    macro = nxt.macro

    local = nxt.local_values(bx, by)
    if is_win(local, player):     macro[bx][by] = Macro(player)
    elif is_lose(local, player):  macro[bx][by] = Macro(opponent(player))
    elif is_tie(local):           macro[bx][by] = Macro.TIED

    tx, ty = x % 3, y % 3
    if is_decided(macro[tx][ty]):
        # Free move: the opponent may play in any undecided board
        for col in macro:
            for i, v in enumerate(col):
                if v == Macro.OPEN: col[i] = Macro.ACTIVE
    else:
        for col in macro:
            for i, v in enumerate(col):
                if v == Macro.ACTIVE: col[i] = Macro.OPEN
        macro[tx][ty] = Macro.ACTIVE
    return nxt
