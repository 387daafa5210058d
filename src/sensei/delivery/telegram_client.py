"""
Telegram quiz bot client.

This module sends extracted quizzes to the study group's Telegram bot. It
handles:
- Posting one quiz payload to the bot
- Probing the bot's liveness endpoint
- Sending a batch in extraction order with a pause between quizzes

Failed sends are not retried: the first failure aborts the rest of the batch
and is raised to the caller.
"""

import logging
import time
from typing import Callable, List, Optional, Sequence

import requests
from pydantic import ValidationError

from sensei.constants import (
    QUIZ_DELIVERY_DELAY_SECONDS,
    TELEGRAM_BOT_URL,
    TELEGRAM_TIMEOUT_SECONDS,
)
from sensei.models.lesson import DeliveryPayload, DeliveryReceipt

logger = logging.getLogger(__name__)


class QuizDeliveryError(Exception):
    """Raised when the bot rejects a quiz or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TelegramQuizClient:
    """Client for the quiz bot HTTP API."""

    SEND_QUIZ_PATH = "/send-quiz"
    HEALTH_PATH = "/test"

    def __init__(
        self,
        base_url: str = TELEGRAM_BOT_URL,
        timeout: float = TELEGRAM_TIMEOUT_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the quiz bot client.

        Args:
            base_url: Bot base URL (default: TELEGRAM_BOT_URL)
            timeout: Request timeout in seconds
            sleep: Sleep function used between batch sends
        """
        if not base_url:
            raise ValueError("Telegram bot URL is not configured (set TELEGRAM_BOT_URL)")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.sleep = sleep
        self.headers = {"Content-Type": "application/json"}

    def send_quiz(self, payload: DeliveryPayload) -> DeliveryReceipt:
        """
        Send one quiz to the bot.

        Args:
            payload: Quiz payload

        Returns:
            Bot acknowledgment

        Raises:
            QuizDeliveryError: On connection failure or non-success status
        """
        url = f"{self.base_url}{self.SEND_QUIZ_PATH}"

        try:
            response = requests.post(
                url,
                json=payload.model_dump(),
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Error sending quiz to Telegram: {e}")
            raise QuizDeliveryError(f"Connection to quiz bot failed: {e}") from e

        if not response.ok:
            logger.error(
                f"Quiz bot returned HTTP {response.status_code}",
                extra={"status_code": response.status_code, "body": response.text[:200]},
            )
            raise QuizDeliveryError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return DeliveryReceipt.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise QuizDeliveryError(
                f"Invalid response from quiz bot: {str(e)[:200]}",
                status_code=response.status_code,
            ) from e

    def test_connection(self) -> bool:
        """
        Check that the bot is up.

        Returns:
            True if the health endpoint reports status "ok"
        """
        url = f"{self.base_url}{self.HEALTH_PATH}"
        try:
            response = requests.get(url, timeout=self.timeout)
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Bot connection failed: {e}")
            return False

        return isinstance(data, dict) and data.get("status") == "ok"

    def send_quizzes(
        self,
        payloads: Sequence[DeliveryPayload],
        delay_seconds: float = QUIZ_DELIVERY_DELAY_SECONDS,
    ) -> List[DeliveryReceipt]:
        """
        Send quizzes one at a time in the given order.

        Waits delay_seconds between consecutive sends (not after the last one)
        to stay under the bot's rate limit.

        Args:
            payloads: Quiz payloads in extraction order
            delay_seconds: Pause between sends

        Returns:
            Receipts for every quiz sent

        Raises:
            QuizDeliveryError: On the first failed send; remaining quizzes are not sent
        """
        receipts = []
        for i, payload in enumerate(payloads):
            receipts.append(self.send_quiz(payload))
            logger.info(
                f"Quiz {i + 1}/{len(payloads)} sent",
                extra={"quiz_index": i + 1, "quiz_total": len(payloads)},
            )
            if i < len(payloads) - 1:
                self.sleep(delay_seconds)
        return receipts
