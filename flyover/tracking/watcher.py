"""
Flyover Flight Watcher
Runs detection cycles on a fixed cadence and hands results to the alerters.
"""

import logging
import threading
import time
from datetime import datetime
from typing import Optional

from ..config import Config, Settings
from .airports import AirportResolver
from .detector import DetectionCycle
from .models import ReferenceLocation
from .seen import SeenSet
from .source import FlightRadarSource
from .utils import format_coordinates

logger = logging.getLogger("flyover.tracking.watcher")


class FlightWatcher:
    """Polls for aircraft overhead and notifies about each one once."""

    def __init__(
        self,
        config: Config,
        source=None,
        notifier=None,
        narrator=None,
        resolver: Optional[AirportResolver] = None,
        seen: Optional[SeenSet] = None,
    ):
        """
        Initialize flight watcher.

        Args:
            config: Flyover configuration object
            source: Flight source (Flightradar24 feed if None)
            notifier: Object with dispatch(detections); None disables alerts
            narrator: Optional Narrator for spoken summaries
            resolver: Airport resolver (airportsdata if None)
            seen: Seen set (bounded per config if None)
        """
        self.config = config
        self.location = ReferenceLocation.from_config(config)
        self.check_interval = config.check_interval
        self.source = source or FlightRadarSource(timeout=config.api_timeout)
        self.notifier = notifier
        self.narrator = narrator
        self.seen = seen if seen is not None else SeenSet(
            max_size=config.seen_max_size,
            forget_after_seconds=config.forget_after_seconds,
        )
        self.cycle = DetectionCycle(
            self.source, self.location, self.seen, resolver or AirportResolver()
        )

        self._stop_event = threading.Event()
        self.iteration_count = 0
        self.consecutive_empty_scans = 0
        self.total_empty_scans = 0
        self.failed_scans = 0
        self.total_detections = 0
        self.notified_batches = 0

    def run_single_iteration(self) -> int:
        """
        Run one detection cycle and dispatch its results.

        Returns:
            Number of new detections
        """
        self.iteration_count += 1
        logger.debug("Scan #%d...", self.iteration_count)

        detections = self.cycle.run()

        if self.cycle.last_fetch_failed:
            self.failed_scans += 1

        if not detections:
            self.consecutive_empty_scans += 1
            self.total_empty_scans += 1
            if self.consecutive_empty_scans > 1:
                logger.debug(
                    "No new aircraft (%d consecutive)", self.consecutive_empty_scans
                )
            return 0

        self.consecutive_empty_scans = 0
        self.total_detections += len(detections)
        logger.info(
            "Found %d new aircraft: %s",
            len(detections),
            ", ".join(d.callsign for d in detections),
        )

        # Narration is queued first so a slow Telegram call never delays it
        if self.narrator is not None:
            self.narrator.enqueue(detections)

        if self.notifier is not None:
            try:
                if self.notifier.dispatch(detections):
                    self.notified_batches += 1
            except Exception as e:
                logger.error("❌ Notification dispatch failed: %s", e)

        return len(detections)

    def print_header(self) -> None:
        """Print watcher header information."""
        print("\n" + "=" * 70)
        print("🛩️  Flyover - Aircraft Proximity Alerts")
        print("=" * 70)
        print(
            "Location:   "
            f"{format_coordinates(self.location.latitude, self.location.longitude)}, "
            f"{self.config.location_name}"
        )
        print(f"Radius:     {self.location.radius_km:g} km")
        print(f"Interval:   {self.check_interval:g}s")

        if self.notifier is not None and getattr(self.notifier, "enabled", True):
            print("Telegram:   enabled")
        else:
            print("Telegram:   disabled (set TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID)")

        print(f"Narration:  {'enabled' if self.narrator is not None else 'disabled'}")
        print("=" * 70)

    def log_statistics(self) -> None:
        """Log running totals."""
        empty_rate = (self.total_empty_scans / max(self.iteration_count, 1)) * 100
        logger.info(
            "📈 Stats after %d scans: %d aircraft detected | %d tracked | "
            "Empty scans: %.1f%% | Failed fetches: %d",
            self.iteration_count,
            self.total_detections,
            len(self.seen),
            empty_rate,
            self.failed_scans,
        )

    def stop(self) -> None:
        """Ask a running loop to exit after the current cycle."""
        self._stop_event.set()

    def run(self, max_iterations: Optional[int] = None) -> None:
        """
        Run detection cycles until stopped.

        The first cycle runs immediately. Each following cycle starts one
        interval after the previous one started, or straight away if the
        previous cycle took longer. Cycles never overlap.

        Args:
            max_iterations: Stop after this many cycles (None = forever)
        """
        self.print_header()
        logger.info("🔄 Starting to watch the sky... (Press Ctrl+C to stop)")

        if self.narrator is not None:
            self.narrator.start()

        try:
            while not self._stop_event.is_set():
                started = time.monotonic()
                try:
                    self.run_single_iteration()
                except Exception:
                    logger.exception(
                        "⚠️  Error in iteration %d, continuing with next scan",
                        self.iteration_count,
                    )

                if self.iteration_count % Settings.STATS_EVERY_N_SCANS == 0:
                    self.log_statistics()

                if max_iterations is not None and self.iteration_count >= max_iterations:
                    break

                elapsed = time.monotonic() - started
                self._stop_event.wait(max(0.0, self.check_interval - elapsed))

        except KeyboardInterrupt:
            pass
        finally:
            self._handle_shutdown()

    def _handle_shutdown(self) -> None:
        """Handle graceful shutdown."""
        print("\n\n👋 Stopping flight watcher...")

        if self.narrator is not None:
            self.narrator.stop()

        print("\n📊 Final Statistics:")
        print(f"   Stopped at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        print(f"   Total scans: {self.iteration_count:,}")
        print(
            f"   Empty scans: {self.total_empty_scans:,} "
            f"({(self.total_empty_scans / max(self.iteration_count, 1) * 100):.1f}%)"
        )
        print(f"   Failed fetches: {self.failed_scans:,}")
        print(f"   Aircraft detected: {self.total_detections:,}")
        print(f"   Notifications sent: {self.notified_batches:,}")
