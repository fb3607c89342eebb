"""Headless game driver: one game object, bot-vs-bot play, and running tallies."""
import logging
import random
from dataclasses import dataclass

from .ai import get_best_move, select_depth
from .config import SearchConfig
from .logic import Macro, Move, Position, apply_move, game_outcome, legal_moves, opponent

logger = logging.getLogger(__name__)


class Game:
    def __init__(self, starting_player=1, config=None):
        self.position = Position.new()
        self.current_player = starting_player
        self.config = config or SearchConfig()
        self.winner = None                 # 1, 2, Macro.TIED or None
        self.last_move = None
        self.move_history = []             # [{x, y, player}, ...]

    def is_over(self):
        return self.winner is not None

    def valid_moves(self):
        if self.is_over(): return []
        return legal_moves(self.position)

    def make_move(self, move):
        if self.is_over(): return False
        if not isinstance(move, (tuple, list)) or len(move) != 2: return False
        if not all(isinstance(v, int) for v in move): return False
        move = Move(*move)
        if move not in self.valid_moves(): return False
        player = self.current_player
        self.position = apply_move(self.position, move, player)
        self.last_move = move
        self.move_history.append({"x": move.x, "y": move.y, "player": player})
        self.winner = game_outcome(self.position)
        if self.winner is not None:
            self._clear_active()
        self.current_player = opponent(player)
        return True

    def bot_move(self, rng=None, stop=None):
        """Pick a move for the side to play using its seat's depth."""
        depth = select_depth(self.position, self.current_player, self.config)
        return get_best_move(self.valid_moves(), self.position, self.current_player, depth,
                             self.config, rng, stop)

    def _clear_active(self):
        for col in self.position.macro:
            for i, v in enumerate(col):
                if v == Macro.ACTIVE: col[i] = Macro.OPEN

    def state(self):
        return {
            "cells": [[int(v) for v in col] for col in self.position.cells],
            "macro": [[int(v) for v in col] for col in self.position.macro],
            "player": self.current_player,
            "winner": None if self.winner is None else int(self.winner),
            "lastMove": None if self.last_move is None else list(self.last_move),
            "moveHistory": list(self.move_history),
        }


@dataclass
class MatchStats:
    wins: int = 0      # player one
    losses: int = 0    # player two
    ties: int = 0

    @property
    def games(self):
        return self.wins + self.losses + self.ties

    def record(self, winner):
        if winner == 1:            self.wins += 1
        elif winner == 2:          self.losses += 1
        elif winner == Macro.TIED: self.ties += 1
        else:
            raise ValueError(f"game has no result: {winner!r}")


def play_game(config=None, rng=None, starting_player=None, stop=None):
    rng = rng or random
    if starting_player is None:
        starting_player = rng.choice((1, 2))
    game = Game(starting_player, config)
    while not game.is_over():
        move = game.bot_move(rng, stop)
        if not game.make_move(move):
            raise RuntimeError(f"engine produced an illegal move {tuple(move)}")
        logger.debug("player %d -> %s\n%s", game.move_history[-1]["player"], tuple(move), game.position)
    logger.info("game over after %d moves: %s", len(game.move_history),
                "tie" if game.winner == Macro.TIED else f"player {int(game.winner)} wins")
    return game


def run_matches(games, config=None, seed=None, stop=None):
    rng = random.Random(seed)
    stats = MatchStats()
    for _ in range(games):
        stats.record(play_game(config, rng, stop=stop).winner)
    logger.info("%d Wins, %d Losses, %d Ties", stats.wins, stats.losses, stats.ties)
    return stats
