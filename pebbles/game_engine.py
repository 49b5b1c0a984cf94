"""Session state machine: move validation, turn execution, win detection.

Functions here mutate the GameState they are handed and never touch the store.
The dispatcher works on a freshly loaded copy and only commits it once the
whole action succeeded, so an exception part-way through leaves nothing behind.
"""

from __future__ import annotations

from pebbles.api.models import GameState, PebblesEvent, PebblesInit, Player
from pebbles.fsm import SessionFSM
from pebbles.randomness import RandomSource
from pebbles.strategy import program_move


def new_session(*, config: PebblesInit) -> GameState:
    # Implicitly created sessions always start with the user; only restart rolls.
    return GameState(
        pebbles_count=config.pebbles_count,
        max_pebbles_per_turn=config.max_pebbles_per_turn,
        pebbles_remaining=config.pebbles_count,
        difficulty=config.difficulty,
        first_player=Player.user,
        winner=None,
    )


def is_valid_move(*, state: GameState, pebbles: int) -> bool:
    return 1 <= pebbles <= state.max_pebbles_per_turn and pebbles <= state.pebbles_remaining


def _take(*, state: GameState, pebbles: int, player: Player) -> bool:
    """Remove pebbles for `player`; returns True if that emptied the pile."""

    if pebbles > state.pebbles_remaining:
        raise ValueError("Cannot take more pebbles than remain")
    state.pebbles_remaining -= pebbles
    if state.pebbles_remaining == 0:
        SessionFSM(state).conclude(player)
        return True
    return False


def program_turn(*, state: GameState, rng: RandomSource) -> int:
    """Play the computer's move and return how many pebbles it took."""

    pebbles = program_move(state=state, rng=rng)
    _take(state=state, pebbles=pebbles, player=Player.program)
    return pebbles


def apply_turn(*, state: GameState, pebbles: int, rng: RandomSource) -> PebblesEvent:
    if not is_valid_move(state=state, pebbles=pebbles):
        return PebblesEvent.counter_turn(0)

    if _take(state=state, pebbles=pebbles, player=Player.user):
        return PebblesEvent.won(Player.user)

    taken = program_turn(state=state, rng=rng)
    if state.winner == Player.program:
        return PebblesEvent.won(Player.program)
    return PebblesEvent.counter_turn(taken)


def give_up(*, state: GameState) -> PebblesEvent:
    SessionFSM(state).conclude(Player.program)
    return PebblesEvent.won(Player.program)


def restart(*, state: GameState, config: PebblesInit, rng: RandomSource) -> GameState:
    """Reset the session to `config` and roll who moves first.

    If the computer wins the roll it moves immediately, which may already end
    the game.
    """

    state.pebbles_count = config.pebbles_count
    state.max_pebbles_per_turn = config.max_pebbles_per_turn
    state.pebbles_remaining = config.pebbles_count
    state.difficulty = config.difficulty
    state.winner = None
    state.first_player = rng.coin_flip()

    if state.first_player == Player.program:
        program_turn(state=state, rng=rng)
    return state
