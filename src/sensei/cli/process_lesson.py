"""CLI for processing generated lessons.

Usage:
    python -m sensei.cli.process_lesson \
        --input lessons/neko.txt lessons/inu.txt \
        --output output/views \
        --raw-response \
        --parallel 4 \
        --send-telegram

Features:
- Quizzes, kanji, HTML, Telegram text and speech text per lesson
- Image prompts split from raw generative responses
- Parallel processing with ThreadPoolExecutor
- Progress bar with tqdm
- Optional quiz delivery to the Telegram bot
"""

import argparse
import logging
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv
from tqdm import tqdm

from sensei.constants import (
    ENV,
    LOG_FORMAT,
    LOG_LEVEL,
    PRODUCT,
    QUIZ_DELIVERY_DELAY_SECONDS,
    QUIZ_DELIVERY_MAX,
    QUIZ_PARSER_MODE,
    TELEGRAM_BOT_URL,
)
from sensei.delivery.telegram_client import QuizDeliveryError, TelegramQuizClient
from sensei.lesson import process_lesson
from sensei.parsers.quiz_parser import PARSER_MODES, build_delivery_payloads
from sensei.parsers.sections import LessonFormatError, split_lesson_response
from sensei.utils.file_io import read_text, write_views
from sensei.utils.logging_config import configure_logging, lesson_stage_logger

logger = logging.getLogger(__name__)

load_dotenv()


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Build quiz, kanji, HTML and Telegram views from generated lessons",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Render one lesson
  python -m sensei.cli.process_lesson \\
      --input lessons/neko.txt --output output/views

  # Raw generative responses (lesson + "--- PROMPTS ---" section), 4 workers
  python -m sensei.cli.process_lesson \\
      --input responses/*.txt --output output/views \\
      --raw-response --parallel 4

  # Preview the Telegram quizzes without sending them
  python -m sensei.cli.process_lesson \\
      --input lessons/neko.txt --output output/views \\
      --send-telegram --dry-run
        """,
    )

    parser.add_argument(
        "--input",
        required=True,
        nargs="+",
        type=Path,
        help="Lesson text file(s)",
    )

    parser.add_argument(
        "--output",
        required=True,
        type=Path,
        help="Output directory for <name>.views.json files",
    )

    parser.add_argument(
        "--raw-response",
        action="store_true",
        help="Inputs are raw generative responses containing the prompts separator",
    )

    parser.add_argument(
        "--parallel",
        type=positive_int,
        default=1,
        help="Number of parallel workers (default: 1)",
    )

    parser.add_argument(
        "--send-telegram",
        action="store_true",
        help="Send the lesson quizzes to the Telegram quiz bot",
    )

    parser.add_argument(
        "--bot-url",
        default=TELEGRAM_BOT_URL,
        help="Quiz bot base URL (default: TELEGRAM_BOT_URL)",
    )

    parser.add_argument(
        "--max-quizzes",
        type=positive_int,
        default=QUIZ_DELIVERY_MAX,
        help=f"Maximum quizzes sent per lesson (default: {QUIZ_DELIVERY_MAX})",
    )

    parser.add_argument(
        "--quiz-mode",
        default=QUIZ_PARSER_MODE,
        choices=sorted(PARSER_MODES),
        help=f"Quiz parser mode for the written views (default: {QUIZ_PARSER_MODE})",
    )

    parser.add_argument(
        "--delay",
        type=float,
        default=QUIZ_DELIVERY_DELAY_SECONDS,
        help=f"Seconds between quiz sends (default: {QUIZ_DELIVERY_DELAY_SECONDS})",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the quiz payloads without sending them",
    )

    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=LOG_FORMAT == "json",
        help="Write logs as JSON",
    )

    return parser.parse_args(argv)


def process_file(
    path: Path, output_dir: Path, raw_response: bool, quiz_mode: Optional[str] = None
) -> Dict:
    """Process one lesson file and write its views.

    Returns:
        Result dict with the source path, lesson text, prompts and output path

    Raises:
        LessonFormatError: If a raw response has no prompts separator
        FileNotFoundError: If the input file doesn't exist
    """
    with lesson_stage_logger("process_lesson", str(path)) as counts:
        text = read_text(path)

        prompts: List[str] = []
        if raw_response:
            response = split_lesson_response(text)
            text, prompts = response.lesson, response.prompts

        views = process_lesson(text, quiz_mode=quiz_mode)
        output_path = write_views(views, path, output_dir, prompts)

        counts["quizzes"] = len(views.quizzes)
        counts["kanji"] = len(views.kanji)
        counts["prompts"] = len(prompts)

    return {"source": path, "lesson": text, "prompts": prompts, "output": output_path}


def send_lesson_quizzes(
    lesson: str,
    client: Optional[TelegramQuizClient],
    max_quizzes: int,
    delay: float,
) -> int:
    """Send a lesson's quizzes to the bot (or log them when client is None).

    Returns:
        Number of quizzes sent or previewed
    """
    payloads = build_delivery_payloads(lesson, max_questions=max_quizzes)
    if not payloads:
        logger.warning("No quizzes could be extracted from this lesson")
        return 0

    if client is None:
        for i, payload in enumerate(payloads, 1):
            logger.info(f"Quiz {i}: {payload.model_dump_json()}")
        return len(payloads)

    client.send_quizzes(payloads, delay_seconds=delay)
    return len(payloads)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)

    configure_logging(level=args.log_level, json_format=args.json_logs)

    logger.info("=" * 80)
    logger.info(f"Lesson Processing ({PRODUCT}, env={ENV})")
    logger.info("=" * 80)
    logger.info(f"Inputs: {len(args.input)} file(s)")
    logger.info(f"Output: {args.output}")
    logger.info(f"Raw responses: {args.raw_response}")
    logger.info(f"Quiz mode: {args.quiz_mode}")
    if args.parallel > 1:
        logger.info(f"Parallel Workers: {args.parallel}")
    if args.send_telegram:
        logger.info(f"Telegram delivery: {'dry run' if args.dry_run else args.bot_url}")
    logger.info("=" * 80)

    client = None
    if args.send_telegram and not args.dry_run:
        try:
            client = TelegramQuizClient(base_url=args.bot_url)
        except ValueError as e:
            logger.error(str(e))
            return 1
        if not client.test_connection():
            logger.error(f"Quiz bot is not reachable at {args.bot_url}")
            return 1

    start_time = time.time()
    results = []
    failed_count = 0

    with ThreadPoolExecutor(max_workers=max(1, args.parallel)) as executor:
        future_to_path = {
            executor.submit(
                process_file, path, args.output, args.raw_response, args.quiz_mode
            ): path
            for path in args.input
        }

        with tqdm(total=len(future_to_path), desc="Processing", unit="lesson") as pbar:
            for future in as_completed(future_to_path):
                path = future_to_path[future]
                try:
                    results.append(future.result())
                except LessonFormatError as e:
                    logger.error(f"{path}: {e}")
                    failed_count += 1
                except (OSError, ValueError) as e:
                    logger.error(f"Failed to process {path}: {e}")
                    failed_count += 1
                pbar.update(1)

    # Deliveries go out one lesson at a time in input order
    sent_count = 0
    if args.send_telegram:
        order = {path: i for i, path in enumerate(args.input)}
        for result in sorted(results, key=lambda r: order[r["source"]]):
            try:
                sent_count += send_lesson_quizzes(
                    result["lesson"], client, args.max_quizzes, args.delay
                )
            except QuizDeliveryError as e:
                logger.error(f"Quiz delivery failed for {result['source']}: {e}")
                failed_count += 1

    elapsed = time.time() - start_time

    logger.info("\n" + "=" * 80)
    logger.info("PROCESSING SUMMARY")
    logger.info("=" * 80)
    logger.info(f"Lessons processed: {len(results)}")
    logger.info(f"Failed: {failed_count}")
    if args.send_telegram:
        logger.info(f"Quizzes {'previewed' if args.dry_run else 'sent'}: {sent_count}")
    logger.info(f"Elapsed time: {elapsed:.2f}s")
    logger.info("=" * 80)

    return 1 if failed_count else 0


if __name__ == "__main__":
    sys.exit(main())
