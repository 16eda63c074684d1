"""Asyncio driver for a live run.

Runs three activities on one event loop against a single LiveRunTracker:
- GPS consumer (irregular fixes)
- heart-rate consumer (irregular readings, may be absent)
- fixed-interval tick (elapsed time and smoothed pace)

Tracker methods are synchronous, so the loop itself serializes every
mutation of the session.
"""

import asyncio
import time
from collections.abc import Callable

from loguru import logger

from marathon_coach.config.settings import settings
from marathon_coach.stores import SensorStream
from marathon_coach.tracking.errors import SensorUnavailableError
from marathon_coach.tracking.heart_rate import decode_heart_rate_measurement
from marathon_coach.tracking.session import GeoFix, HeartRateReading, RunSession
from marathon_coach.tracking.tracker import LiveRunTracker


class RunSessionRunner:
    """Own the tasks and sensor connections of one live run.

    Args:
        tracker: Tracker receiving every event
        gps: Optional GPS stream
        heart_rate: Optional heart-rate stream of readings or raw BLE
            Heart Rate Measurement payloads (stamped with the clock on arrival)
        clock: Epoch-seconds clock
        tick_interval_seconds: Tick period (defaults to settings)
    """

    def __init__(
        self,
        tracker: LiveRunTracker,
        gps: SensorStream[GeoFix] | None = None,
        heart_rate: SensorStream[HeartRateReading | bytes] | None = None,
        *,
        clock: Callable[[], float] = time.time,
        tick_interval_seconds: float | None = None,
    ) -> None:
        self.tracker = tracker
        self._gps = gps
        self._heart_rate = heart_rate
        self._clock = clock
        self._tick_interval = tick_interval_seconds or settings.tick_interval_seconds
        self._tasks: list[asyncio.Task[None]] = []
        self.gps_enabled = False
        self.heart_rate_enabled = False

    async def _connect(self, stream: SensorStream | None, name: str) -> bool:
        if stream is None:
            return False
        try:
            await stream.connect()
        except SensorUnavailableError as e:
            logger.warning("Sensor unavailable, continuing without it", sensor=name, reason=str(e))
            return False
        return True

    async def start(self) -> None:
        """Start tracking, connect sensors and launch the consumer tasks."""
        self.tracker.start(self._clock())

        self.gps_enabled = await self._connect(self._gps, "gps")
        self.heart_rate_enabled = await self._connect(self._heart_rate, "heart_rate")

        if self.gps_enabled:
            self._tasks.append(asyncio.create_task(self._consume_gps(), name="run-gps"))
        if self.heart_rate_enabled:
            self._tasks.append(asyncio.create_task(self._consume_heart_rate(), name="run-heart-rate"))
        self._tasks.append(asyncio.create_task(self._tick_loop(), name="run-tick"))

        logger.info("Run session started", gps=self.gps_enabled, heart_rate=self.heart_rate_enabled)

    async def _consume_gps(self) -> None:
        try:
            async for fix in self._gps.events():
                self.tracker.ingest_fix(fix)
        except SensorUnavailableError as e:
            logger.warning("GPS lost, continuing without distance", reason=str(e))
            self.gps_enabled = False

    async def _consume_heart_rate(self) -> None:
        try:
            async for reading in self._heart_rate.events():
                if isinstance(reading, bytes | bytearray):
                    try:
                        bpm = decode_heart_rate_measurement(reading)
                    except ValueError as e:
                        logger.warning("Skipping malformed heart rate payload", reason=str(e))
                        continue
                    self.tracker.ingest_heart_rate(bpm, self._clock())
                else:
                    self.tracker.ingest_heart_rate(reading.bpm, reading.timestamp)
        except SensorUnavailableError as e:
            logger.warning("Heart rate monitor lost, continuing without heart rate", reason=str(e))
            self.heart_rate_enabled = False

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self._tick_interval)
            self.tracker.tick(self._clock())

    async def _stop(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for task, result in zip(tasks, results, strict=True):
            if isinstance(result, Exception):
                logger.opt(exception=result).error("Run task failed", task=task.get_name())

        for stream, name in ((self._gps, "gps"), (self._heart_rate, "heart_rate")):
            if stream is None:
                continue
            try:
                await stream.close()
            except Exception as e:
                logger.warning("Failed to close sensor", sensor=name, error_message=str(e))

    async def finish(self) -> RunSession:
        """Stop all activities and return the finalized session.

        Raises:
            TrackerStateError: If the tracker is not tracking
        """
        await self._stop()
        return self.tracker.finish(self._clock())

    async def cancel(self) -> None:
        """Stop all activities, release sensors and discard the session."""
        await self._stop()
        self.tracker.cancel()
