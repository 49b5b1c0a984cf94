from __future__ import annotations

from collections.abc import Generator, Iterable

import fakeredis
import pytest
from fastapi.testclient import TestClient

from pebbles.api.deps import get_redis, get_rng
from pebbles.api.models import DifficultyLevel, PebblesInit
from pebbles.config import init_config, reset_config_for_tests
from pebbles.context import GameContext
from pebbles.main import app
from pebbles.randomness import EntropySource, RandomSource


INIT = PebblesInit(difficulty=DifficultyLevel.easy, pebbles_count=10, max_pebbles_per_turn=4)


def _scripted_entropy(values: Iterable[int]) -> EntropySource:
    it = iter(values)

    def _next() -> int:
        # StopIteration once exhausted; RandomSource reports it as unavailable.
        return next(it)

    return _next


@pytest.fixture(autouse=True)
def _init_config_for_tests() -> Generator[PebblesInit, None, None]:
    reset_config_for_tests()
    yield init_config(init=INIT)
    reset_config_for_tests()


@pytest.fixture()
def r() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def make_rng():
    """RandomSource replaying the given 32-bit values, then failing."""

    def _make(*values: int) -> RandomSource:
        return RandomSource(_scripted_entropy(values))

    return _make


@pytest.fixture()
def make_ctx(r: fakeredis.FakeRedis, make_rng):
    """Build a GameContext whose randomness replays the given values."""

    def _make(*values: int, init: PebblesInit = INIT) -> GameContext:
        return GameContext(r=r, init=init, rng=make_rng(*values))

    return _make


@pytest.fixture()
def script_rng(make_rng):
    """Every request gets a fresh RandomSource replaying the given values."""

    def _script(*values: int) -> None:
        app.dependency_overrides[get_rng] = lambda: make_rng(*values)

    return _script


@pytest.fixture()
def client_and_redis(r: fakeredis.FakeRedis) -> Generator[tuple[TestClient, fakeredis.FakeRedis], None, None]:
    def _override() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    app.dependency_overrides[get_redis] = _override
    with TestClient(app) as c:
        yield c, r
    app.dependency_overrides.clear()


@pytest.fixture()
def client(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> TestClient:
    return client_and_redis[0]
