"""Unit tests for /src/chess/clock.py"""

import asyncio

from src.chess.clock import DEFAULT_START, GameClock
from src.core.shared_types import TeamType


# -- BASICS (no event loop: driven by tick) --
def test_initial_remaining() -> None:
    clock = GameClock()
    assert clock.remaining(TeamType.OUR) == DEFAULT_START == 600
    assert clock.remaining(TeamType.OPPONENT) == 600


def test_not_running_initially() -> None:
    clock = GameClock()
    assert not clock.is_running
    assert clock.tick() is None
    assert clock.remaining(TeamType.OUR) == 600


def test_only_active_side_ticks() -> None:
    clock = GameClock(start=10)
    clock.start(TeamType.OUR)
    clock.tick()
    clock.tick()
    assert clock.remaining(TeamType.OUR) == 8
    assert clock.remaining(TeamType.OPPONENT) == 10

    clock.start(TeamType.OPPONENT)
    clock.tick()
    assert clock.active_team == TeamType.OPPONENT
    assert clock.remaining(TeamType.OUR) == 8
    assert clock.remaining(TeamType.OPPONENT) == 9


def test_stop_pauses() -> None:
    clock = GameClock(start=10)
    clock.start(TeamType.OUR)
    clock.stop()
    assert not clock.is_running
    clock.tick()
    assert clock.remaining(TeamType.OUR) == 10


def test_reset_restores_both_sides() -> None:
    clock = GameClock(start=5)
    clock.start(TeamType.OUR)
    clock.tick()
    clock.start(TeamType.OPPONENT)
    clock.tick()
    clock.reset()
    assert not clock.is_running
    assert clock.remaining(TeamType.OUR) == 5
    assert clock.remaining(TeamType.OPPONENT) == 5


# -- TIMEOUT --
def test_timeout_reports_flagged_team_and_stops() -> None:
    flagged: list[TeamType] = []
    clock = GameClock(start=2, on_timeout=flagged.append)
    clock.start(TeamType.OPPONENT)

    assert clock.tick() is None
    assert clock.tick() == TeamType.OPPONENT
    assert flagged == [TeamType.OPPONENT]
    assert clock.remaining(TeamType.OPPONENT) == 0
    assert not clock.is_running

    # stopped: no second timeout
    assert clock.tick() is None
    assert flagged == [TeamType.OPPONENT]


def test_set_remaining() -> None:
    clock = GameClock()
    clock.set_remaining(TeamType.OUR, 1)
    clock.start(TeamType.OUR)
    assert clock.tick() == TeamType.OUR


# -- TICKER TASK (event loop running) --
def test_ticker_counts_down_and_times_out() -> None:
    async def scenario() -> list[TeamType]:
        flagged: list[TeamType] = []
        timed_out = asyncio.Event()

        def on_timeout(team: TeamType) -> None:
            flagged.append(team)
            timed_out.set()

        clock = GameClock(start=3, interval=0.01, on_timeout=on_timeout)
        clock.start(TeamType.OUR)
        await asyncio.wait_for(timed_out.wait(), timeout=2)
        assert not clock.is_running
        return flagged

    assert asyncio.run(scenario()) == [TeamType.OUR]


def test_switching_sides_tears_down_old_ticker() -> None:
    """After a switch only the new side loses time."""

    async def scenario() -> GameClock:
        clock = GameClock(start=1000, interval=0.01)
        clock.start(TeamType.OUR)
        await asyncio.sleep(0.05)
        clock.start(TeamType.OPPONENT)
        frozen = clock.remaining(TeamType.OUR)
        await asyncio.sleep(0.05)
        assert clock.remaining(TeamType.OUR) == frozen
        clock.stop()
        return clock

    clock = asyncio.run(scenario())
    assert clock.remaining(TeamType.OPPONENT) < 1000


def test_stop_cancels_ticker() -> None:
    async def scenario() -> int:
        clock = GameClock(start=1000, interval=0.01)
        clock.start(TeamType.OUR)
        await asyncio.sleep(0.03)
        clock.stop()
        stopped_at = clock.remaining(TeamType.OUR)
        await asyncio.sleep(0.05)
        assert clock.remaining(TeamType.OUR) == stopped_at
        return stopped_at

    assert asyncio.run(scenario()) <= 1000
