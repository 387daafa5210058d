"""Plain text for reading a lesson aloud with speech synthesis."""

import re

# Heading emojis and divider glyphs added by the Telegram formatter
_DECORATION_RE = re.compile(r"[━\U0001F4D5\U0001F4D6\U0001F236\U0001F4A1]|✍\ufe0f?")
_LONG_RULE_RE = re.compile(r"-{10,}")


def clean_for_speech(document: str) -> str:
    """Remove markup that a speech engine would read out literally.

    Example:
        >>> clean_for_speech("### Palabra a estudiar:\\n**猫** (neko)")
        'Palabra a estudiar:\\n猫 (neko)'
    """
    text = _DECORATION_RE.sub("", document or "")
    text = _LONG_RULE_RE.sub("", text)
    text = text.replace("**", "").replace("###", "")
    return text.strip()
