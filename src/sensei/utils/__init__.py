"""Utility modules for file I/O and logging."""

from sensei.utils.file_io import read_text, views_path, write_views
from sensei.utils.logging_config import configure_logging, lesson_stage_logger

__all__ = ["read_text", "views_path", "write_views", "configure_logging", "lesson_stage_logger"]
