"""
Flyover Speech Synthesis
Speaks text through a local command-line TTS engine.
"""

import logging
import subprocess
from typing import List, Optional

from ..config import Settings
from ..errors import SpeechError

logger = logging.getLogger("flyover.alerts.speech")

# Base speaking rate (words per minute) each engine uses at rate 1.0
ENGINE_BASE_WPM = {
    "espeak-ng": 175,
    "say": 175,
}


def build_command(engine: str, text: str, voice: Optional[str], rate: float) -> List[str]:
    """
    Build the argument list for a TTS engine.

    Args:
        engine: "espeak-ng" or "say"
        text: Text to speak
        voice: Voice name, engine default if None
        rate: Multiplier of the engine's base speed

    Returns:
        Command argument list

    Raises:
        ValueError: For an unsupported engine
    """
    if engine not in ENGINE_BASE_WPM:
        raise ValueError(f"Unsupported speech engine: {engine}")

    wpm = str(max(1, int(ENGINE_BASE_WPM[engine] * rate)))

    if engine == "espeak-ng":
        cmd = ["espeak-ng", "-s", wpm]
        if voice:
            cmd += ["-v", voice]
    else:
        cmd = ["say", "-r", wpm]
        if voice:
            cmd += ["-v", voice]

    cmd.append(text)
    return cmd


class SpeechSynthesizer:
    """Blocking text-to-speech wrapper."""

    def __init__(
        self,
        engine: str = Settings.SPEECH_ENGINE,
        voice: Optional[str] = Settings.SPEECH_VOICE,
        rate: float = Settings.SPEECH_RATE,
        timeout: Optional[float] = 120.0,
    ):
        if engine not in ENGINE_BASE_WPM:
            raise ValueError(f"Unsupported speech engine: {engine}")
        self.engine = engine
        self.voice = voice
        self.rate = rate
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "SpeechSynthesizer":
        return cls(
            engine=config.get("narration.engine", Settings.SPEECH_ENGINE),
            voice=config.get("narration.voice", Settings.SPEECH_VOICE),
            rate=float(config.get("narration.rate", Settings.SPEECH_RATE)),
        )

    def speak(self, text: str) -> None:
        """
        Speak text, returning when playback has finished.

        Raises:
            SpeechError: If the engine is missing, fails or times out
        """
        cmd = build_command(self.engine, text, self.voice, self.rate)
        try:
            subprocess.run(
                cmd,
                check=True,
                timeout=self.timeout,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise SpeechError(f"Speech engine not installed: {self.engine}") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            raise SpeechError(
                f"{self.engine} exited with status {e.returncode}: {stderr}"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise SpeechError(f"{self.engine} timed out after {self.timeout}s") from e
