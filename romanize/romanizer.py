"""Japanese and Korean text romanization.

Japanese is tagged morpheme by morpheme and each morpheme with a katakana
pronunciation is replaced by its romaji; Hangul is transliterated first.

Example:
    "U&I ～夕日の綺麗なあの丘で～ U&I"
    → "U&I ~Yūhi no Kirei na ano Oka de~ U&I"
"""

from pathlib import Path
from typing import Optional
import logging
import tempfile
import unicodedata

from . import hangul
from .dictionary.archive import extract_flat
from .kana import is_katakana, to_romaji
from .tagger import Tagger, get_tagger

logger = logging.getLogger(__name__)

SYMBOL_POS = "記号"
NOUN_POS = "名詞"
COMBINING_MACRON = "\u0304"


def uppercase_first(text: str) -> str:
    """Upper-case the first character only."""
    return text[:1].upper() + text[1:]


class Romanizer:
    """Romanizes Japanese and Korean text.

    With an ``archive``, the compiled dictionary zip is extracted into a
    temporary directory that lives as long as the romanizer, and an igo
    tagger is loaded from it. Use ``close()`` or a ``with`` block to remove
    the directory.
    """

    def __init__(
        self,
        tagger: Optional[Tagger] = None,
        archive: Path | str | bytes | None = None,
        backend: Optional[str] = None,
    ):
        """Initialize romanizer.

        Args:
            tagger: Ready tagger instance.
            archive: Compiled dictionary zip (path or bytes) for the igo backend.
            backend: Registered tagger name (default from config).
        """
        self._tempdir: Optional[tempfile.TemporaryDirectory] = None

        if tagger is not None:
            self.tagger = tagger
        elif archive is not None:
            self._tempdir = tempfile.TemporaryDirectory(prefix="romanize-dic-")
            try:
                files = extract_flat(archive, self._tempdir.name)
                logger.debug("Extracted %d dictionary files to %s", len(files), self._tempdir.name)
                self.tagger = get_tagger(backend or "igo", dictionary=self._tempdir.name)
            except BaseException:
                self.close()
                raise
        else:
            self.tagger = get_tagger(backend)

    @property
    def dictionary_dir(self) -> Optional[Path]:
        """Directory of the extracted dictionary, if one was extracted."""
        return Path(self._tempdir.name) if self._tempdir else None

    def close(self) -> None:
        """Remove the extracted dictionary, if any."""
        if self._tempdir is not None:
            self._tempdir.cleanup()
            self._tempdir = None

    def __enter__(self) -> "Romanizer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def romanize(self, text: str) -> str:
        """Romanize text.

        Args:
            text: Japanese, Korean or mixed text.

        Returns:
            NFKC-normalized romanized text.
        """
        romanized = hangul.romanize(text)

        insert_space = False
        # Position of the last replaced surface; never moves backwards
        last_idx = 0

        for part in self.tagger.parse(text):
            surface = part.surface
            if not surface:
                continue

            # Punctuation stays; last_idx is kept since later matches can lie before it
            if part.part_of_speech == SYMBOL_POS:
                insert_space = False
                continue

            idx = romanized.find(surface)
            if idx < 0:
                logger.debug("Surface %r not found, skipping", surface)
                insert_space = False
                continue

            katakana = part.pronunciation
            if katakana is None and is_katakana(surface):
                katakana = surface

            if katakana:
                replacement = to_romaji(katakana)

                if part.part_of_speech == NOUN_POS:
                    replacement = uppercase_first(replacement)

                replacement = replacement.replace("-", COMBINING_MACRON)

                if insert_space:
                    replacement = " " + replacement

                romanized = romanized[:idx] + replacement + romanized[idx + len(surface):]
                insert_space = True
            else:
                # Only insert space if another word comes afterwards
                if insert_space and surface[0].isalnum():
                    pos = romanized.find(surface, last_idx)
                    if pos >= 0:
                        romanized = romanized[:pos] + " " + romanized[pos:]
                insert_space = False

            last_idx = idx

        return unicodedata.normalize("NFKC", romanized)
