"""
Flyover Summarizer
Asks the Gemini generateContent API for a short spoken description.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

from ..config import Settings
from ..errors import SummarizerError
from ..tracking.models import Detection

logger = logging.getLogger("flyover.alerts.summarizer")

DEFAULT_INSTRUCTION = (
    "Using full country names, tell me only where this flight is coming from "
    "and where it is going. Reply with nothing else:"
)


def build_prompt(detection: Detection, instruction: Optional[str] = None) -> str:
    """Instruction followed by the detection serialised as indented JSON."""
    payload = json.dumps(detection.to_dict(), indent=2, ensure_ascii=False)
    return f"{instruction or DEFAULT_INSTRUCTION}\n\n{payload}"


def extract_text(data: Any) -> Optional[str]:
    """
    Pull the first candidate's text out of a generateContent response.

    Returns:
        Stripped text, or None if any level of the structure is missing
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str):
        return None
    return text.strip() or None


class GeminiSummarizer:
    """Opaque text-in, text-out client for the generative text API."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        instruction: Optional[str] = None,
        timeout: float = Settings.API_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.instruction = instruction
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config) -> "GeminiSummarizer":
        return cls(
            api_url=config.summarizer_api_url,
            api_key=config.summarizer_api_key,
            instruction=config.get("summarizer.instruction"),
            timeout=config.api_timeout,
        )

    def request_body(self, prompt: str) -> Dict[str, Any]:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    def summarize(self, detection: Detection) -> str:
        """
        Describe a detection in natural language.

        Raises:
            SummarizerError: On HTTP failure or a response without text
        """
        prompt = build_prompt(detection, self.instruction)

        try:
            response = self.session.post(
                self.api_url,
                params={"key": self.api_key},
                json=self.request_body(prompt),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise SummarizerError(f"Summarizer HTTP error {status}") from e
        except requests.exceptions.RequestException as e:
            raise SummarizerError(f"Summarizer request failed: {e}") from e
        except ValueError as e:
            raise SummarizerError(f"Summarizer returned invalid JSON: {e}") from e

        text = extract_text(data)
        if text is None:
            raise SummarizerError("Summarizer response contained no text")

        logger.debug("Summary for %s: %s", detection.id, text)
        return text
