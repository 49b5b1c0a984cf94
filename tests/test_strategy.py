from __future__ import annotations

import pytest

from pebbles.api.models import DifficultyLevel, GameState
from pebbles.strategy import easy_move, hard_move, program_move, strategy_for


def _state(*, remaining: int, max_per_turn: int, count: int = 50, difficulty: DifficultyLevel = DifficultyLevel.hard) -> GameState:
    return GameState(
        pebbles_count=count,
        max_pebbles_per_turn=max_per_turn,
        pebbles_remaining=remaining,
        difficulty=difficulty,
    )


def test_hard_takes_whole_pile_when_it_can(make_rng) -> None:
    assert hard_move(_state(remaining=4, max_per_turn=4), make_rng()) == 4
    assert hard_move(_state(remaining=2, max_per_turn=4), make_rng()) == 2


@pytest.mark.parametrize(
    ("remaining", "max_per_turn", "expected"),
    [
        (10, 4, 4),
        (8, 3, 3),
        (7, 4, 1),
        (9, 2, 2),
    ],
)
def test_hard_leaves_losing_residue(remaining: int, max_per_turn: int, expected: int, make_rng) -> None:
    assert hard_move(_state(remaining=remaining, max_per_turn=max_per_turn), make_rng()) == expected


@pytest.mark.parametrize(("remaining", "max_per_turn"), [(6, 4), (11, 4), (5, 3), (3, 1)])
def test_hard_takes_one_when_formula_gives_zero(remaining: int, max_per_turn: int, make_rng) -> None:
    assert (remaining - 1) % (max_per_turn + 1) == 0
    assert hard_move(_state(remaining=remaining, max_per_turn=max_per_turn), make_rng()) == 1


def test_hard_move_is_always_legal(make_rng) -> None:
    for max_per_turn in range(1, 11):
        for remaining in range(1, 41):
            state = _state(remaining=remaining, max_per_turn=max_per_turn)
            move = program_move(state=state, rng=make_rng())
            assert 1 <= move <= min(max_per_turn, remaining)


def test_easy_draws_within_max(make_rng) -> None:
    state = _state(remaining=10, max_per_turn=4, difficulty=DifficultyLevel.easy)
    assert easy_move(state, make_rng(7)) == 4


def test_easy_never_exceeds_remaining(make_rng) -> None:
    state = _state(remaining=2, max_per_turn=4, difficulty=DifficultyLevel.easy)
    moves = [program_move(state=state, rng=make_rng(v)) for v in range(8)]
    assert set(moves) == {1, 2}


def test_program_move_requires_pebbles(make_rng) -> None:
    with pytest.raises(ValueError):
        program_move(state=_state(remaining=0, max_per_turn=4), rng=make_rng())


def test_unknown_difficulty_raises() -> None:
    with pytest.raises(ValueError) as e:
        strategy_for("medium")  # type: ignore[arg-type]
    assert "Unknown difficulty" in str(e.value)
