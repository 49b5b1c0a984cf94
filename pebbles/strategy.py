from __future__ import annotations

from collections.abc import Callable

from pebbles.api.models import DifficultyLevel, GameState
from pebbles.randomness import RandomSource


Strategy = Callable[[GameState, RandomSource], int]


def _legal_cap(state: GameState) -> int:
    return min(state.max_pebbles_per_turn, state.pebbles_remaining)


def easy_move(state: GameState, rng: RandomSource) -> int:
    """Any legal amount, uniformly at random."""

    return rng.next_in_range(_legal_cap(state))


def hard_move(state: GameState, rng: RandomSource) -> int:
    """Take the whole pile when possible, otherwise leave the opponent on a losing residue.

    When the pile already sits on that residue the formula yields 0, which is
    not a legal move; take a single pebble instead.
    """

    if state.pebbles_remaining <= state.max_pebbles_per_turn:
        return state.pebbles_remaining

    move = (state.pebbles_remaining - 1) % (state.max_pebbles_per_turn + 1)
    return move or 1


STRATEGIES: dict[DifficultyLevel, Strategy] = {
    DifficultyLevel.easy: easy_move,
    DifficultyLevel.hard: hard_move,
}


def strategy_for(difficulty: DifficultyLevel) -> Strategy:
    strategy = STRATEGIES.get(difficulty)
    if strategy is None:
        raise ValueError(f"Unknown difficulty: {difficulty}")
    return strategy


def program_move(*, state: GameState, rng: RandomSource) -> int:
    """Number of pebbles the computer removes this turn.

    Always within [1, min(max_pebbles_per_turn, pebbles_remaining)].
    """

    if state.pebbles_remaining < 1:
        raise ValueError("No pebbles left to take")

    move = strategy_for(state.difficulty)(state, rng)
    if not 1 <= move <= _legal_cap(state):
        raise ValueError(f"Strategy produced an illegal move: {move}")
    return move
