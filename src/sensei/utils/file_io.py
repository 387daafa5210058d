"""File I/O utilities for lesson files and rendered views."""

import json
import logging
from pathlib import Path
from typing import Sequence, Union

from sensei.constants import SPEECH_LANG, SPEECH_RATE
from sensei.models.lesson import LessonViews

logger = logging.getLogger(__name__)

VIEWS_SUFFIX = ".views.json"


def read_text(file_path: Union[str, Path]) -> str:
    """Read a UTF-8 text file, dropping a leading BOM.

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    file_path = Path(file_path)
    logger.debug(f"Reading text from {file_path}")

    content = file_path.read_text(encoding="utf-8")
    if content.startswith("\ufeff"):
        content = content[1:]
    return content


def views_path(source: Union[str, Path], output_dir: Union[str, Path]) -> Path:
    """Return the ``<stem>.views.json`` path for a lesson file."""
    return Path(output_dir) / f"{Path(source).stem}{VIEWS_SUFFIX}"


def write_views(
    views: LessonViews,
    source: Union[str, Path],
    output_dir: Union[str, Path],
    prompts: Sequence[str] = (),
) -> Path:
    """Write every view of one lesson to ``<output_dir>/<stem>.views.json``.

    The document carries the source path, the image prompts split off the raw
    response, the speech voice settings and the serialized views. Kanji and
    Spanish text are written as-is (not ASCII-escaped).

    Args:
        views: Views built from the lesson
        source: Lesson file the views came from
        output_dir: Directory for the views file (created if missing)
        prompts: Image prompts of the lesson

    Returns:
        Path of the written file
    """
    output_path = views_path(source, output_dir)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    document = {
        "source": str(source),
        "prompts": list(prompts),
        "speech": {"lang": SPEECH_LANG, "rate": SPEECH_RATE},
        "views": views.model_dump(mode="json"),
    }
    output_path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")

    logger.info(
        f"Wrote {len(views.quizzes)} quizzes and {len(views.kanji)} kanji to {output_path}",
        extra={"output": str(output_path), "quiz_count": len(views.quizzes)},
    )
    return output_path
