"""Quiz delivery to the Telegram study group."""

from sensei.delivery.telegram_client import QuizDeliveryError, TelegramQuizClient

__all__ = ["QuizDeliveryError", "TelegramQuizClient"]
