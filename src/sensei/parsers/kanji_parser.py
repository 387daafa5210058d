"""Kanji list extraction from the "Desglose de Kanjis" section.

Each kanji entry in the breakdown section opens with "Kanji N:" followed by the
character itself:

    ### Desglose de Kanjis:
    *   **Kanji 1: 猫** (neko)
    *   **Significado:** gato
    *   **Kanji 2: 犬** (inu)

Only characters in the CJK Unified Ideographs block (U+4E00 to U+9FFF) are
collected. Extension-block kanji outside the Basic Multilingual Plane are not
matched.
"""

import logging
from typing import List

from sensei.parsers.markers import MarkerKind, tokenize
from sensei.parsers.sections import find_kanji_section

logger = logging.getLogger(__name__)


def extract_kanji_from_section(section_text: str) -> List[str]:
    """Collect the kanji following every "Kanji N:" marker in a section.

    Args:
        section_text: Text of the kanji breakdown section

    Returns:
        Kanji characters in document order (duplicates kept)

    Example:
        >>> extract_kanji_from_section("Kanji 1: 猫 (neko)\\nKanji 2: 犬 (inu)")
        ['猫', '犬']
    """
    kanji = []
    for token in tokenize(section_text, [MarkerKind.KANJI_ENTRY]):
        if token.value is None:
            logger.debug(f"No CJK character after marker {token.text.strip()!r}, skipping")
            continue
        kanji.append(token.value)
    return kanji


def extract_kanji(document: str) -> List[str]:
    """Extract the kanji list from a lesson document.

    Returns an empty list when the lesson has no kanji breakdown section.
    """
    section = find_kanji_section(document)
    if section is None:
        logger.debug("No kanji breakdown section found")
        return []

    kanji = extract_kanji_from_section(section.text)
    logger.info(f"Extracted {len(kanji)} kanji", extra={"kanji_count": len(kanji)})
    return kanji
