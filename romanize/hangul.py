"""Hangul romanization.

Revised Romanization of Korean through korean-romanizer, applied to runs
of precomposed Hangul syllables (U+AC00..U+D7A3) only. Everything else
passes through unchanged.
"""

import re

from korean_romanizer.romanizer import Romanizer as KoreanRomanizer

HANGUL_RUN = re.compile(r"[가-힣]+")


def _romanize_run(match: re.Match) -> str:
    return KoreanRomanizer(match.group()).romanize()


def romanize(text: str) -> str:
    """Romanize Hangul syllables in text.

    Args:
        text: Any text.

    Returns:
        Text with each Hangul run replaced by its Revised Romanization.
    """
    return HANGUL_RUN.sub(_romanize_run, text)
