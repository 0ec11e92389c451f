"""
Two countdown clocks, one per team.

Only the side to move is ticking. The ticking is a self-rescheduling asyncio task on the same event loop
as the rest of the game, so a timeout can land while a move is waiting on the oracle.
"""

import asyncio
import logging
from typing import Callable, Optional

from src.core.shared_types import TeamType

logger = logging.getLogger(__name__)

DEFAULT_START = 600

TimeoutCallback = Callable[[TeamType], None]  # the team whose time ran out


class GameClock:
    """
    Countdown per team, in whole time units.
    ----

    * start(team): tear down any running ticker and start a fresh one for `team`
    * stop(): pause
    * tick(): one unit off the active side. Called by the ticker every `interval` seconds.

    NOTE: Without a running event loop no ticker is scheduled and the clock only moves on explicit tick() calls.
    """

    def __init__(
        self,
        start: int = DEFAULT_START,
        interval: float = 1.0,
        on_timeout: Optional[TimeoutCallback] = None,
    ) -> None:
        self.start_value = start
        self.interval = interval
        self.on_timeout = on_timeout
        self._remaining: dict[TeamType, int] = {team: start for team in TeamType}
        self._active_team: Optional[TeamType] = None
        self._task: Optional[asyncio.Task[None]] = None

    # --- STATE ---
    @property
    def active_team(self) -> Optional[TeamType]:
        return self._active_team

    @property
    def is_running(self) -> bool:
        return self._active_team is not None

    def remaining(self, team: TeamType) -> int:
        return self._remaining[team]

    def set_remaining(self, team: TeamType, units: int) -> None:
        """Manually override remaining time (for testing / adjourned games)."""
        self._remaining[team] = units

    # --- CONTROL ---
    def start(self, team: TeamType) -> None:
        self._cancel_ticker()
        self._active_team = team
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # no event loop: driven by tick() calls
            return
        self._task = loop.create_task(self._run())

    def stop(self) -> None:
        self._cancel_ticker()
        self._active_team = None

    def reset(self) -> None:
        """Both sides back to the starting time, nothing running."""
        self.stop()
        self._remaining = {team: self.start_value for team in TeamType}

    def tick(self) -> Optional[TeamType]:
        """Count down the active side. Returns the team whose time just ran out, if any."""
        team = self._active_team
        if team is None:
            return None

        self._remaining[team] = max(0, self._remaining[team] - 1)
        if self._remaining[team] > 0:
            return None

        logger.info("Time is up for %s", team.display_name)
        self.stop()
        if self.on_timeout is not None:
            self.on_timeout(team)
        return team

    # --- INTERNAL ---
    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            if self.tick() is not None:
                return

    def _cancel_ticker(self) -> None:
        # the ticker may be the one calling stop() (through tick), it must not cancel itself
        if self._task is not None and self._task is not _current_task():
            self._task.cancel()
        self._task = None


def _current_task() -> Optional[asyncio.Task]:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None
