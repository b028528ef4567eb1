"""
lookahead.py

Depth-bounded forward search. Unlike expectimax this does not branch over
every possible spawn: each expansion plays out a single random spawn, so
one call is a sample, not an exact best move. Seed the player for
repeatable results.
"""

from typing import List, NamedTuple, Optional, Union

from .board import DIRECTIONS, Board, Direction
from .engine import GamePlayer
from .scoring import ScoreFn, ScoreFunction, get_score_function

# Returned when there is nothing to choose from
FALLBACK_DIRECTION: Direction = Direction.DOWN


class SearchNode(NamedTuple):
    direction: Optional[Direction]   # first move on the path; None only at the root
    board: Board
    rank: int


def expand_scenarios(player: GamePlayer, frontier: List[SearchNode], score_fn: ScoreFn) -> List[SearchNode]:
    """Play every direction from every node; invalid moves yield no child."""
    out: List[SearchNode] = []
    for node in frontier:
        for direction in DIRECTIONS:
            new_board = player.try_play(node.board, direction)
            if new_board is None:
                continue
            first = node.direction if node.direction is not None else direction
            out.append(SearchNode(first, new_board, score_fn(new_board)))
    return out


def best_node(frontier: List[SearchNode]) -> Optional[SearchNode]:
    """Highest rank; the earliest node in frontier order wins ties."""
    best: Optional[SearchNode] = None
    for node in frontier:
        if best is None or node.rank > best.rank:
            best = node
    return best


def naive_lookahead(
    player: GamePlayer,
    board: Board,
    depth: int,
    score_function: Union[ScoreFunction, str] = ScoreFunction.FREE_SPACE,
) -> Direction:
    if depth < 0:
        raise ValueError("depth must be non-negative")
    score_fn = get_score_function(score_function)

    frontier = [SearchNode(None, board, 0)]
    for _ in range(depth):
        expanded = expand_scenarios(player, frontier, score_fn)
        if not expanded:
            break   # every node is terminal; keep the last non-empty frontier
        frontier = expanded

    best = best_node(frontier)
    if best is None or best.direction is None:
        return FALLBACK_DIRECTION
    return best.direction
