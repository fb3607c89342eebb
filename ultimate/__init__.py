"""Ultimate Tic Tac Toe decision engine.

Modules:
- logic: position model, move generation and the move transition
- ai: heuristic evaluation and alpha-beta search
- config: search settings
- match: headless game driver and bot-vs-bot tallies
"""

from .ai import choose_best_move, enumerate_legal_moves, evaluate, get_best_move, minimax
from .logic import Cell, IllegalMoveError, Macro, Move, Position, apply_move, legal_moves
from .match import Game

__all__ = [
    "Cell",
    "Macro",
    "Move",
    "Position",
    "IllegalMoveError",
    "legal_moves",
    "apply_move",
    "evaluate",
    "minimax",
    "get_best_move",
    "enumerate_legal_moves",
    "choose_best_move",
    "Game",
]
