"""View state controller for the weather dashboard.

The controller owns a single ViewState and is its only writer. Every search
starts a new fetch cycle tagged with a generation number; when a cycle
finishes, its result is committed only if no newer search has been issued in
the meantime, so a slow response for an old location can never overwrite the
dashboard for the current one.
"""

import asyncio
import logging
from enum import Enum
from typing import Optional, Protocol

from pydantic import BaseModel, ConfigDict

from app.core.exceptions import WeatherFetchError
from app.models.weather import DashboardData, WeatherAdvisory, WeatherSnapshot

logger = logging.getLogger(__name__)

DEFAULT_LOCATION = "New Delhi"


class DashboardPipeline(Protocol):
    """Anything that can run a full dashboard cycle for a location."""

    async def run(self, location: str) -> DashboardData: ...


class DashboardStatus(str, Enum):
    """Lifecycle of the dashboard: idle -> loading -> ready | failed."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ViewState(BaseModel):
    """Render-ready state read by the presentation layer."""

    model_config = ConfigDict(frozen=True)

    location: str
    status: DashboardStatus = DashboardStatus.IDLE
    snapshot: Optional[WeatherSnapshot] = None
    advisory: Optional[WeatherAdvisory] = None
    error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.status is DashboardStatus.LOADING


class DashboardController:
    """Drives fetch cycles and commits their results into the ViewState."""

    def __init__(
        self,
        pipeline: DashboardPipeline,
        default_location: str = DEFAULT_LOCATION,
        cycle_timeout: Optional[float] = None,
    ):
        self._pipeline = pipeline
        self._cycle_timeout = cycle_timeout
        self._state = ViewState(location=default_location)
        self._generation = 0

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def generation(self) -> int:
        """Number of the latest issued cycle."""
        return self._generation

    def set_location(self, location: str) -> ViewState:
        """Record the location the user typed, without fetching."""
        self._state = self._state.model_copy(update={"location": location})
        return self._state

    async def mount(self) -> ViewState:
        """First load with the default location. Later calls do nothing."""
        if self._state.status is not DashboardStatus.IDLE:
            return self._state
        return await self.search()

    async def search(self, location: Optional[str] = None) -> ViewState:
        """
        Run a full cycle for `location` (or the current location).

        Re-enters loading from any state. Returns the state after the cycle,
        which is the newer cycle's state if this one was superseded.
        """
        if location is not None:
            self.set_location(location)
        location = self._state.location
        if not location or not location.strip():
            raise ValueError("Location must not be empty")

        self._generation += 1
        generation = self._generation
        self._state = self._state.model_copy(
            update={"status": DashboardStatus.LOADING, "error": None}
        )
        logger.info(f"Dashboard cycle {generation} started for '{location}'")

        try:
            data = await asyncio.wait_for(
                self._pipeline.run(location), timeout=self._cycle_timeout
            )
        except asyncio.CancelledError:
            self._fail(generation, f"Loading weather for '{location}' was cancelled")
            raise
        except asyncio.TimeoutError:
            return self._fail(
                generation, f"Timed out loading weather for '{location}'"
            )
        except WeatherFetchError as e:
            return self._fail(generation, str(e))
        except Exception as e:
            logger.error(f"Dashboard cycle {generation} crashed: {e}", exc_info=True)
            return self._fail(generation, "Unexpected error while loading weather")

        if self._is_stale(generation):
            return self._state

        self._state = ViewState(
            location=self._state.location,
            status=DashboardStatus.READY,
            snapshot=data.snapshot,
            advisory=data.advisory,
        )
        logger.info(f"Dashboard cycle {generation} ready for '{location}'")
        return self._state

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.info(
                f"Discarding result of cycle {generation}, cycle {self._generation} is current"
            )
            return True
        return False

    def _fail(self, generation: int, message: str) -> ViewState:
        if self._is_stale(generation):
            return self._state
        logger.warning(f"Dashboard cycle {generation} failed: {message}")
        # No stale data next to an error
        self._state = ViewState(
            location=self._state.location,
            status=DashboardStatus.FAILED,
            error=message,
        )
        return self._state
