# src/ephemeral_exporter/core/manager.py
"""
Background polling of a single node's stats summary.

The manager owns one asyncio task that fetches, decodes and projects the
node's stats summary every interval, and publishes the result as an
immutable snapshot. Readers (scrape handlers, usually on other threads)
only ever swap in or copy out a reference under a short-held lock, so
they never wait on network I/O.
"""

import asyncio
import logging
import threading
import time
from datetime import datetime, timezone
from typing import List, Optional

from ..collectors.base_collector import BaseCollector
from ..models.stats import PodEphemeralStorageStat, Snapshot, build_snapshot
from ..models.summary import parse_summary
from .exceptions import AlreadyRunningError, DecodeError, FetchError

logger = logging.getLogger(__name__)


def compute_next_delay(interval: float, duration: float) -> float:
    """Returns the wait before the next poll, never negative."""
    return max(0.0, interval - duration)


class EphemeralStorageManager:
    """
    Periodically polls a node's stats summary and keeps the latest
    per-pod ephemeral storage snapshot.
    """

    def __init__(
        self,
        collector: BaseCollector,
        node_name: str,
        interval_seconds: float,
        fetch_timeout: Optional[float] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if not node_name:
            logger.warning("Current node name is not set; stats summary fetches will fail.")

        self.node_name = node_name
        self.interval_seconds = interval_seconds
        # A fetch never outlives one interval
        self.fetch_timeout = min(fetch_timeout or interval_seconds, interval_seconds)
        self._collector = collector

        self._snapshot = Snapshot(node_name=node_name)
        self._snapshot_lock = threading.Lock()
        self._last_poll_failed = False

        self._lifecycle_lock = asyncio.Lock()
        self._stop_event: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def last_poll_failed(self) -> bool:
        """True when the most recent completed poll cycle could not refresh the snapshot."""
        return self._last_poll_failed

    @property
    def snapshot(self) -> Snapshot:
        with self._snapshot_lock:
            return self._snapshot

    def recent_stats(self) -> List[PodEphemeralStorageStat]:
        """Returns a copy of the most recently published per-pod stats. Never performs I/O."""
        with self._snapshot_lock:
            snapshot = self._snapshot
        return list(snapshot.stats)

    async def start(self) -> None:
        """
        Starts the polling loop as a background task and returns immediately.

        Raises:
            AlreadyRunningError: If the polling loop is already running.
        """
        async with self._lifecycle_lock:
            if self._running:
                raise AlreadyRunningError("ephemeral storage manager is already running")

            self._stop_event = asyncio.Event()
            self._task = asyncio.create_task(self._run(self._stop_event), name=f"stats-poller-{self.node_name}")
            self._running = True
            logger.info(f"Started polling node '{self.node_name}' every {self.interval_seconds}s.")

    async def stop(self) -> None:
        """
        Signals the polling loop to exit and waits until it has finished.
        Stopping a manager that is not running only logs a warning.
        """
        async with self._lifecycle_lock:
            if not self._running:
                logger.warning("Ephemeral storage manager already stopped.")
                return

            try:
                self._stop_event.set()
                await self._task
            finally:
                self._running = False
                self._task = None
                self._stop_event = None
            logger.info(f"Stopped polling node '{self.node_name}'.")

    async def _wait_for_stop(self, stop_event: asyncio.Event, timeout: float) -> bool:
        """Waits up to `timeout` seconds; returns True if a stop was requested."""
        if stop_event.is_set():
            return True
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True

    async def _run(self, stop_event: asyncio.Event):
        """Polling loop. The first cycle runs immediately."""
        delay = 0.0
        while not await self._wait_for_stop(stop_event, delay):
            start = time.monotonic()
            try:
                await self.poll_once()
            except Exception as e:
                self._last_poll_failed = True
                logger.error(f"Unexpected error polling node '{self.node_name}': {e}", exc_info=True)
            duration = time.monotonic() - start
            delay = compute_next_delay(self.interval_seconds, duration)
            logger.debug(f"Stats summary cycle took {duration:.3f}s; next poll in {delay:.3f}s.")

    async def poll_once(self) -> bool:
        """
        Runs one fetch/decode/build/publish cycle.

        Fetch and decode failures are logged and leave the published snapshot
        untouched. Returns True if a new snapshot was published.
        """
        try:
            content = await asyncio.wait_for(self._collector.fetch(self.node_name), timeout=self.fetch_timeout)
        except asyncio.TimeoutError:
            self._last_poll_failed = True
            logger.error(f"Fetching stats summary from node '{self.node_name}' timed out after {self.fetch_timeout}s.")
            return False
        except FetchError as e:
            self._last_poll_failed = True
            logger.error(f"Failed to fetch stats summary: {e}")
            return False

        try:
            summary = parse_summary(content)
        except DecodeError as e:
            self._last_poll_failed = True
            logger.error(f"Failed to decode stats summary from node '{self.node_name}': {e}")
            return False

        snapshot = build_snapshot(summary, captured_at=datetime.now(timezone.utc))
        self._publish(snapshot)
        self._last_poll_failed = False
        logger.debug(f"Published {len(snapshot)} pod ephemeral storage stats for node '{snapshot.node_name}'.")
        return True

    def _publish(self, snapshot: Snapshot):
        with self._snapshot_lock:
            self._snapshot = snapshot
