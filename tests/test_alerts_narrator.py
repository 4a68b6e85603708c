"""
Tests for the Flyover narrator.
"""

import threading
from dataclasses import replace
from unittest.mock import Mock

import pytest

from flyover.alerts.narrator import Narrator
from flyover.errors import SummarizerError, SpeechError
from flyover.tracking.models import Detection


@pytest.fixture
def detection():
    return Detection(
        id="A1", callsign="TK123", aircraft="B77W", registration="TC-JJA",
        airline="TK", from_iata="IST", to_iata="JFK", from_country="Istanbul",
        to_country="New York", distance=4, altitude=3500, speed=210,
        direction="North",
    )


@pytest.fixture
def summarizer():
    summarizer = Mock()
    summarizer.summarize.side_effect = lambda d: f"{d.callsign}: Turkey to USA"
    return summarizer


class TestNarrateOne:
    """Tests for Narrator.narrate_one."""

    def test_speaks_summary(self, summarizer, detection):
        speech = Mock()
        narrator = Narrator(summarizer, speech)

        assert narrator.narrate_one(detection) is True
        speech.speak.assert_called_once_with("TK123: Turkey to USA")
        assert narrator.spoken_count == 1

    def test_summarizer_failure_skips(self, detection):
        summarizer = Mock()
        summarizer.summarize.side_effect = SummarizerError("quota exceeded")
        speech = Mock()
        narrator = Narrator(summarizer, speech)

        assert narrator.narrate_one(detection) is False
        speech.speak.assert_not_called()
        assert narrator.failed_count == 1

    def test_empty_summary_skips(self, detection):
        summarizer = Mock()
        summarizer.summarize.return_value = ""
        speech = Mock()
        narrator = Narrator(summarizer, speech)

        assert narrator.narrate_one(detection) is False
        speech.speak.assert_not_called()

    def test_speech_failure_skips(self, summarizer, detection):
        speech = Mock()
        speech.speak.side_effect = SpeechError("espeak-ng missing")
        narrator = Narrator(summarizer, speech)

        assert narrator.narrate_one(detection) is False
        assert narrator.failed_count == 1


class TestNarratorWorker:
    """Tests for the background narration worker."""

    def test_drains_queue_in_order_despite_failures(self, detection):
        spoken = []
        done = threading.Event()
        detections = [replace(detection, id=str(i), callsign=f"F{i}") for i in range(3)]

        def summarize(d):
            if d.callsign == "F1":
                raise SummarizerError("bad response")
            return d.callsign

        def speak(text):
            spoken.append(text)
            if text == "F2":
                done.set()

        summarizer = Mock()
        summarizer.summarize.side_effect = summarize
        speech = Mock()
        speech.speak.side_effect = speak
        narrator = Narrator(summarizer, speech, delay_seconds=0.01)

        narrator.start()
        narrator.enqueue(detections)
        try:
            assert done.wait(5)
        finally:
            narrator.stop()

        assert spoken == ["F0", "F2"]
        assert narrator.failed_count == 1
        assert not narrator.running

    def test_stop_interrupts_delay(self, summarizer, detection):
        spoken = threading.Event()
        speech = Mock()
        speech.speak.side_effect = lambda text: spoken.set()
        narrator = Narrator(summarizer, speech, delay_seconds=60)

        narrator.start()
        narrator.enqueue([detection, replace(detection, id="A2")])
        assert spoken.wait(5)
        narrator.stop(timeout=5)

        assert not narrator.running
        assert speech.speak.call_count == 1
        assert narrator.pending == 0

    def test_restart_while_speaking_keeps_one_worker(self, summarizer, detection):
        lock = threading.Lock()
        active = []
        peak = []
        speaking = threading.Event()
        release = threading.Event()
        done = threading.Event()

        def speak(text):
            with lock:
                active.append(text)
                peak.append(len(active))
            speaking.set()
            release.wait(5)
            with lock:
                active.remove(text)
            if text.startswith("PC456"):
                done.set()

        speech = Mock()
        speech.speak.side_effect = speak
        narrator = Narrator(summarizer, speech, delay_seconds=0.01)

        narrator.start()
        narrator.enqueue([detection])
        assert speaking.wait(5)

        narrator.stop(timeout=0.05)
        assert narrator.running

        narrator.start()
        narrator.enqueue([replace(detection, id="A2", callsign="PC456")])
        release.set()
        try:
            assert done.wait(5)
        finally:
            narrator.stop()

        assert max(peak) == 1
        assert speech.speak.call_count == 2
        assert not narrator.running

    def test_enqueue_before_start_is_kept(self, summarizer, detection):
        narrator = Narrator(summarizer, Mock())
        narrator.enqueue([detection])

        assert narrator.pending == 1
        summarizer.summarize.assert_not_called()
