"""Renderers producing display and channel-specific views of a lesson."""

from sensei.renderers.html_renderer import render_html
from sensei.renderers.speech import clean_for_speech
from sensei.renderers.telegram_formatter import DIVIDER_LINE, format_for_telegram

__all__ = ["render_html", "clean_for_speech", "DIVIDER_LINE", "format_for_telegram"]
