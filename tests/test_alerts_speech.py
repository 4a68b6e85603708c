"""
Tests for Flyover speech synthesis.
"""

import subprocess
from unittest.mock import patch

import pytest

from flyover.alerts.speech import SpeechSynthesizer, build_command
from flyover.errors import SpeechError


class TestBuildCommand:
    """Tests for build_command function."""

    def test_espeak(self):
        cmd = build_command("espeak-ng", "Turkey to USA", None, 0.8)
        assert cmd == ["espeak-ng", "-s", "140", "Turkey to USA"]

    def test_say_with_voice(self):
        cmd = build_command("say", "Türkiye'den ABD'ye", "Yelda", 0.8)
        assert cmd == ["say", "-r", "140", "-v", "Yelda", "Türkiye'den ABD'ye"]

    def test_unknown_engine(self):
        with pytest.raises(ValueError):
            build_command("festival", "hi", None, 1.0)


class TestSpeechSynthesizer:
    """Tests for SpeechSynthesizer class."""

    @patch("flyover.alerts.speech.subprocess.run")
    def test_speak(self, mock_run):
        SpeechSynthesizer(engine="espeak-ng", voice="en", rate=1.0).speak("hello")

        args, kwargs = mock_run.call_args
        assert args[0] == ["espeak-ng", "-s", "175", "-v", "en", "hello"]
        assert kwargs["check"] is True

    @patch("flyover.alerts.speech.subprocess.run", side_effect=FileNotFoundError())
    def test_engine_missing(self, mock_run):
        with pytest.raises(SpeechError, match="not installed"):
            SpeechSynthesizer().speak("hello")

    @patch("flyover.alerts.speech.subprocess.run")
    def test_engine_failure(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(1, ["say"], stderr=b"no voice")

        with pytest.raises(SpeechError, match="no voice"):
            SpeechSynthesizer(engine="say").speak("hello")

    def test_invalid_engine(self):
        with pytest.raises(ValueError):
            SpeechSynthesizer(engine="festival")

    def test_from_config(self, config):
        config.set("narration.engine", "say")
        config.set("narration.voice", "Yelda")

        speech = SpeechSynthesizer.from_config(config)

        assert speech.engine == "say"
        assert speech.voice == "Yelda"
        assert speech.rate == 0.8
