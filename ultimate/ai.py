"""Search engine for Ultimate Tic Tac Toe.

STRATEGY
────────
1. Macroboard control dominates: owning a local board is worth 1000 points
   scaled by where it sits (centre 1.6, corners 1.2, edges 0.7/0.8).

2. Two-in-a-row on the macroboard (an undecided board that would finish a
   macro line) is worth 500.

3. Two-in-a-row inside a local board is worth a tenth of that board's
   weight per threat, ten times more when taking the board would also make
   or break a macro line.

4. Plain minimax with alpha-beta. Wins score above MAX_SCORE and are
   preferred the sooner they come. Equal-best root moves are picked at
   random. Branches that reach the endgame while time remains get an
   extra ply.
"""
import logging
import random
import time

from .config import SearchConfig
from .logic import (Macro, Move, apply_move, completes_line, game_outcome, is_decided,
                    legal_moves, opponent)

logger = logging.getLogger(__name__)

# Evaluations always stay strictly inside (-MAX_SCORE, MAX_SCORE)
MAX_SCORE = 20000
INF = 100000

CENTER_MOVE = Move(4, 4)


class SearchAnomalyError(RuntimeError):
    """A node finished without a real score, or a live position had no moves."""


class SearchCancelled(Exception):
    pass


# ── Board geometry ────────────────────────────────────────────────────────────
# Weight of each local board in tenths, row-major on the macroboard
_BOARD_WEIGHT = [12, 7, 12,
                 7, 16, 8,
                 12, 8, 12]

_MACRO_OWNED   = 100   # x weight  -> 1000 * multiplier
_MACRO_TWO     = 500
_LOCAL_TWO     = 1     # x weight  -> 10 * multiplier
_LOCAL_DECIDER = 10    # a local threat that also makes or blocks a macro line


# ── Heuristic evaluation ──────────────────────────────────────────────────────
def _macro_twos(macro, player):
    return sum(1 for i in range(9)
               if not is_decided(macro[i]) and completes_line(macro, i, player))

def _local_twos(values, macro, b, player):
    """Count threats inside one local board, weighted by what taking it would do on the macroboard."""
    units = 0
    opp = opponent(player)
    for i in range(9):
        if values[i] != 0 or not completes_line(values, i, player):
            continue
        if completes_line(macro, b, player) or completes_line(macro, b, opp):
            units += _LOCAL_DECIDER
        else:
            units += _LOCAL_TWO
    return units

def evaluate(position, bot_id):
    """Static score of a position for ``bot_id``. Positive = good for the bot."""
    opp = opponent(bot_id)
    macro = position.macro_values()
    score = 0

    for b in range(9):
        if macro[b] == bot_id:  score += _MACRO_OWNED * _BOARD_WEIGHT[b]
        elif macro[b] == opp:   score -= _MACRO_OWNED * _BOARD_WEIGHT[b]

    score += _MACRO_TWO * (_macro_twos(macro, bot_id) - _macro_twos(macro, opp))

    for b in range(9):
        if is_decided(macro[b]):
            continue
        values = position.local_values(b % 3, b // 3)
        score += _BOARD_WEIGHT[b] * (_local_twos(values, macro, b, bot_id)
                                     - _local_twos(values, macro, b, opp))

    return max(-MAX_SCORE + 1, min(MAX_SCORE - 1, score))


# ── Alpha-Beta ────────────────────────────────────────────────────────────────
def minimax(position, bot_id, player, depth, alpha, beta, stop=None):
    if depth < 0:
        raise ValueError(f"search depth must be non-negative, got {depth}")
    if stop is not None and stop.is_set():
        raise SearchCancelled()

    result = game_outcome(position)
    if result == bot_id:       return MAX_SCORE + depth
    if result == Macro.TIED:   return 0
    if result is not None:     return -MAX_SCORE - depth
    if depth == 0:             return evaluate(position, bot_id)

    moves = legal_moves(position)
    if not moves:
        raise SearchAnomalyError(f"no legal moves in a live position: {position!r}")

    nxt = opponent(player)
    maximizing = (player == bot_id)
    best = -INF if maximizing else INF
    for move in moves:
        child = apply_move(position, move, player)
        val = minimax(child, bot_id, nxt, depth-1, alpha, beta, stop)
        if maximizing:
            best = max(best, val)
            alpha = max(alpha, best)
        else:
            best = min(best, val)
            beta = min(beta, best)
        if beta <= alpha:
            break

    if abs(best) >= INF:
        raise SearchAnomalyError(f"score {best} reached the search bound at depth {depth}")
    return best


# ── Depth policy ──────────────────────────────────────────────────────────────
def is_endgame(position, empty_cells):
    return position.empty_cells_in_play() < empty_cells

def select_depth(position, player_id, config=None):
    """Search depth for a seat: seat 1 digs deeper late, seat 2 early."""
    config = config or SearchConfig()
    if config.fixed_depth is not None:
        return config.fixed_depth
    normal, late = config.depth_table[player_id]
    return late if is_endgame(position, config.role_endgame_empty_cells) else normal


# ── Public API ────────────────────────────────────────────────────────────────
def get_best_move(legal, position, bot_id, depth, config=None, rng=None, stop=None):
    if position.is_empty():
        return CENTER_MOVE
    if not legal:
        raise SearchAnomalyError("asked for a move with no legal moves")
    config = config or SearchConfig()
    rng = rng or random
    opp = opponent(bot_id)

    t0 = time.time()
    best_score = -INF
    best_moves = []
    for move in legal:
        child = apply_move(position, move, bot_id)
        branch_depth = depth
        if time.time() - t0 < config.time_budget and is_endgame(child, config.endgame_empty_cells):
            branch_depth += config.endgame_depth_bonus
        score = minimax(child, bot_id, opp, branch_depth, -INF, INF, stop)
        logger.debug("move %s depth %d -> %d", tuple(move), branch_depth, score)
        if score > best_score:
            best_score, best_moves = score, [move]
        elif score == best_score:
            best_moves.append(move)

    choice = rng.choice(best_moves)
    logger.debug("player %d picks %s (score %d, %d tied) in %.2fs",
                 bot_id, tuple(choice), best_score, len(best_moves), time.time() - t0)
    return choice


enumerate_legal_moves = legal_moves
choose_best_move = get_best_move
