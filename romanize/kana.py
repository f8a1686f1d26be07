"""Kana to romaji conversion.

Hepburn romanization through pykakasi. The prolonged sound mark is kept
as "-" so callers can decide how to render long vowels.
"""

from functools import lru_cache
import re

import pykakasi

PROLONGED_SOUND_MARK = "ー"

KATAKANA_PATTERN = re.compile(r"^[゠-ヿ]+$")


def is_katakana(text: str) -> bool:
    """Check if every character of a non-empty string is katakana."""
    return bool(KATAKANA_PATTERN.match(text))


@lru_cache(maxsize=None)
def _kakasi() -> "pykakasi.kakasi":
    return pykakasi.kakasi()


def _hepburn(text: str) -> str:
    if not text:
        return ""
    return "".join(item["hepburn"] for item in _kakasi().convert(text))


def to_romaji(text: str) -> str:
    """Convert kana to romaji.

    Args:
        text: Katakana and/or hiragana.

    Returns:
        Hepburn romaji, with "-" for the prolonged sound mark.
    """
    return "-".join(_hepburn(part) for part in text.split(PROLONGED_SOUND_MARK))
