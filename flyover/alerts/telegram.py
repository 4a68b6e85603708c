"""
Flyover Telegram Notifier
Delivers formatted detection batches through the Telegram Bot API.
"""

import logging
from typing import Optional, Sequence

import requests

from ..config import Settings
from ..errors import NotificationError
from ..tracking.models import Detection
from .formatter import split_message

logger = logging.getLogger("flyover.alerts.telegram")

TELEGRAM_API_URL = "https://api.telegram.org/bot{token}/sendMessage"


class TelegramNotifier:
    """
    Sends detection messages to a Telegram chat.

    Without a bot token and chat id the notifier is disabled and only logs
    what it would have sent.
    """

    def __init__(
        self,
        bot_token: Optional[str],
        chat_id: Optional[str],
        parse_mode: str = "Markdown",
        timeout: float = Settings.API_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.parse_mode = parse_mode
        self.timeout = timeout
        self.session = session or requests.Session()
        self.sent_count = 0
        self.failed_count = 0

    @property
    def enabled(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    @classmethod
    def from_config(cls, config) -> "TelegramNotifier":
        return cls(
            bot_token=config.telegram_bot_token,
            chat_id=config.telegram_chat_id,
            parse_mode=config.get("telegram.parse_mode", "Markdown"),
            timeout=config.api_timeout,
        )

    def send(self, text: str, parse_mode: Optional[str] = None) -> None:
        """
        Send one message.

        Args:
            text: Message body
            parse_mode: Telegram parse mode, defaults to the notifier's

        Raises:
            NotificationError: If the request fails or Telegram rejects it
        """
        url = TELEGRAM_API_URL.format(token=self.bot_token)
        payload = {
            "chat_id": self.chat_id,
            "text": text,
            "parse_mode": parse_mode or self.parse_mode,
            "disable_web_page_preview": True,
        }

        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise NotificationError(f"Telegram request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.status_code != 200 or not body.get("ok", False):
            description = body.get("description") or response.text
            raise NotificationError(
                f"Telegram rejected message ({response.status_code}): {description}",
                status_code=response.status_code,
            )

    def dispatch(self, detections: Sequence[Detection]) -> bool:
        """
        Format and send a batch of detections.

        Nothing is sent for an empty batch. Failures are logged and not
        retried.

        Args:
            detections: New detections of one cycle

        Returns:
            True if every message part was delivered
        """
        if not detections:
            return False

        messages = split_message(detections)

        if not self.enabled:
            for message in messages:
                logger.info("Telegram not configured, would send:\n%s", message)
            return False

        delivered = True
        for message in messages:
            try:
                self.send(message)
                self.sent_count += 1
            except NotificationError as e:
                self.failed_count += 1
                delivered = False
                logger.error("❌ Failed to send Telegram message: %s", e)

        if delivered:
            logger.info("📨 Notified %d aircraft", len(detections))
        return delivered

    def close(self) -> None:
        self.session.close()
