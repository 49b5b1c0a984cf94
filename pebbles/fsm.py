from __future__ import annotations

from enum import StrEnum

from statemachine import State, StateMachine

from pebbles.api.models import GameState, Player


class SessionPhase(StrEnum):
    in_progress = "in_progress"
    concluded = "concluded"


def phase_of(game: GameState) -> SessionPhase:
    return SessionPhase.concluded if game.winner is not None else SessionPhase.in_progress


class SessionFSM(StateMachine):
    """FSM wrapper around a single player's GameState.

    - phases: in_progress -> concluded
    - concluded is final; the dispatcher drops the session once it gets there.
    """

    in_progress = State(
        SessionPhase.in_progress.value,
        value=SessionPhase.in_progress.value,
        initial=True,
    )
    concluded = State(
        SessionPhase.concluded.value,
        value=SessionPhase.concluded.value,
        final=True,
    )

    finish = in_progress.to(concluded)

    def __init__(self, game: GameState):
        self.game = game
        super().__init__(start_value=phase_of(game).value)

    def conclude(self, winner: Player) -> None:
        # Raises TransitionNotAllowed if a winner was already recorded.
        self.finish()
        self.game.winner = winner
