from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal, Self

from pydantic import BaseModel, Field, TypeAdapter, model_validator


U32_MAX = 2**32 - 1


class DifficultyLevel(StrEnum):
    easy = "easy"
    hard = "hard"


class Player(StrEnum):
    user = "user"
    program = "program"


class PebblesInit(BaseModel):
    """Game configuration, fixed until an explicit restart."""

    difficulty: DifficultyLevel
    pebbles_count: int = Field(..., ge=1, le=U32_MAX)
    max_pebbles_per_turn: int = Field(..., ge=1, le=U32_MAX)

    @model_validator(mode="after")
    def check_max_within_pile(self) -> Self:
        if self.max_pebbles_per_turn > self.pebbles_count:
            raise ValueError("max_pebbles_per_turn must not exceed pebbles_count")
        return self


class GameState(BaseModel):
    pebbles_count: int = Field(..., ge=1, le=U32_MAX)
    max_pebbles_per_turn: int = Field(..., ge=1, le=U32_MAX)
    pebbles_remaining: int = Field(..., ge=0, le=U32_MAX)
    difficulty: DifficultyLevel

    first_player: Player = Player.user

    # Set exactly once, when the pile is emptied or the user gives up.
    winner: Player | None = None


class PebblesEventType(StrEnum):
    counter_turn = "counter_turn"
    won = "won"


class PebblesEvent(BaseModel):
    type: PebblesEventType
    pebbles: int | None = None
    winner: Player | None = None

    @staticmethod
    def counter_turn(pebbles: int) -> "PebblesEvent":
        return PebblesEvent(type=PebblesEventType.counter_turn, pebbles=pebbles)

    @staticmethod
    def won(winner: Player) -> "PebblesEvent":
        return PebblesEvent(type=PebblesEventType.won, winner=winner)


class TurnRequest(BaseModel):
    # 0 is accepted here on purpose; the engine answers it with counter_turn(0).
    pebbles: int = Field(..., ge=0, le=U32_MAX)


class TurnAction(TurnRequest):
    action: Literal["turn"] = "turn"


class GiveUpAction(BaseModel):
    action: Literal["give_up"] = "give_up"


class RestartAction(PebblesInit):
    action: Literal["restart"] = "restart"

    def to_config(self) -> PebblesInit:
        return PebblesInit(
            difficulty=self.difficulty,
            pebbles_count=self.pebbles_count,
            max_pebbles_per_turn=self.max_pebbles_per_turn,
        )


PebblesAction = Annotated[TurnAction | GiveUpAction | RestartAction, Field(discriminator="action")]


class PlayerSession(BaseModel):
    player_id: str
    state: GameState


class SessionListResponse(BaseModel):
    sessions: list[PlayerSession]


_ACTION_ADAPTER: TypeAdapter[PebblesAction] = TypeAdapter(PebblesAction)


def parse_action(payload: dict[str, Any]) -> PebblesAction:
    """Validate a raw `{"action": ..., ...}` payload; raises ValidationError (a ValueError)."""

    return _ACTION_ADAPTER.validate_python(payload)
