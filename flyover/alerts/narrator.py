"""
Flyover Narrator
Reads new detections aloud, one at a time, on a background worker thread.

Each queued detection is summarised by the text summarizer and the result is
spoken by the speech synthesizer. Items are separated by a fixed delay to
respect the summarizer's rate limits. A failure only skips the affected
item; the worker keeps draining the queue until stopped.
"""

import logging
import queue
import threading
from typing import Iterable, Optional

from ..config import Settings
from ..errors import SummarizerError, SpeechError
from ..tracking.models import Detection

logger = logging.getLogger("flyover.alerts.narrator")


class Narrator:
    """Queue-backed, cancellable narration worker."""

    def __init__(
        self,
        summarizer,
        speech,
        delay_seconds: float = Settings.NARRATION_DELAY_SECONDS,
    ):
        """
        Initialize narrator.

        Args:
            summarizer: Object with summarize(detection) -> str
            speech: Object with speak(text)
            delay_seconds: Pause after each narrated item
        """
        self.summarizer = summarizer
        self.speech = speech
        self.delay_seconds = delay_seconds
        self._queue: "queue.Queue[Detection]" = queue.Queue()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self.spoken_count = 0
        self.failed_count = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def start(self) -> None:
        """
        Start the worker thread (no-op if already running).

        A worker that is still finishing an item after stop() is kept
        running instead of starting a second one.
        """
        with self._lock:
            self._stop_event.clear()
            if self.running:
                return
            self._thread = threading.Thread(
                target=self._worker, name="flyover-narrator", daemon=True
            )
            self._thread.start()

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """
        Stop the worker, abandoning queued items.

        A summary or speech call already in progress finishes first; the
        inter-item delay is interrupted immediately. If the worker does not
        exit within ``timeout`` it stays referenced until it does.
        """
        self._stop_event.set()
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Narrator still busy after %ss, leaving it to finish", timeout)

        dropped = 0
        while True:
            try:
                self._queue.get_nowait()
                dropped += 1
            except queue.Empty:
                break
        if dropped:
            logger.info("Narrator stopped, %d item(s) not narrated", dropped)

    def enqueue(self, detections: Iterable[Detection]) -> None:
        """Queue detections for narration without blocking."""
        for detection in detections:
            self._queue.put_nowait(detection)

    def narrate_one(self, detection: Detection) -> bool:
        """
        Summarise and speak a single detection.

        Returns:
            True if the text was spoken, False if the item was skipped
        """
        try:
            text = self.summarizer.summarize(detection)
        except SummarizerError as e:
            logger.warning("⚠️  Could not summarise %s: %s", detection.callsign, e)
            self.failed_count += 1
            return False

        if not text:
            logger.warning("⚠️  Empty summary for %s, skipping", detection.callsign)
            self.failed_count += 1
            return False

        try:
            self.speech.speak(text)
        except SpeechError as e:
            logger.warning("⚠️  Could not speak %s: %s", detection.callsign, e)
            self.failed_count += 1
            return False

        self.spoken_count += 1
        return True

    def _worker(self) -> None:
        while True:
            # Checked under the lock start() holds
            with self._lock:
                if self._stop_event.is_set():
                    if self._thread is threading.current_thread():
                        self._thread = None
                    return

            try:
                detection = self._queue.get(timeout=0.5)
            except queue.Empty:
                continue

            try:
                self.narrate_one(detection)
            except Exception:
                logger.exception("Unexpected narration error for %s", detection.id)
                self.failed_count += 1
            finally:
                self._queue.task_done()

            # Rate limit spacing, cut short by stop()
            self._stop_event.wait(self.delay_seconds)
