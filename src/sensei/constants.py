import os

from dotenv import load_dotenv

load_dotenv(os.getenv("ENV_FILE"), override=True)

# General
PRODUCT = os.getenv("PRODUCT", "nihongo-sensei")
ENV = os.getenv("ENV", "stg")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")

# Quiz parsing
QUIZ_PARSER_MODE = os.getenv("QUIZ_PARSER_MODE", "display")

# Telegram quiz bot
TELEGRAM_BOT_URL = os.getenv("TELEGRAM_BOT_URL", "")
TELEGRAM_TIMEOUT_SECONDS = float(os.getenv("TELEGRAM_TIMEOUT_SECONDS", "10"))
QUIZ_DELIVERY_MAX = int(os.getenv("QUIZ_DELIVERY_MAX", "3"))
QUIZ_DELIVERY_DELAY_SECONDS = float(os.getenv("QUIZ_DELIVERY_DELAY_SECONDS", "6"))

# Speech synthesis settings used by the lesson reader
SPEECH_LANG = os.getenv("SPEECH_LANG", "es-ES")
SPEECH_RATE = float(os.getenv("SPEECH_RATE", "0.9"))
