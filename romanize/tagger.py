"""Pluggable morphological analyzer backends.

Every backend yields Morpheme objects whose feature string follows the
IPA dictionary layout:

    0 Part-of-speech
    1 Part-of-speech subdivision 1
    2 Part-of-speech subdivision 2
    3 Part-of-speech subdivision 3
    4 Conjugation type
    5 Conjugation form
    6 Base form
    7 Reading
    8 Pronunciation

Unknown words carry only the first seven fields.

Backends:
    - igo: igo-python over a compiled dictionary directory (what
      ``romanize build-dict`` packages)
    - janome: pure Python, bundles its own IPA dictionary

Usage:
    from romanize.tagger import get_tagger
    tagger = get_tagger("janome")
    for m in tagger.parse("太陽のKiss"):
        print(m.surface, m.pronunciation)

    # Register custom backend
    from romanize.tagger import register_tagger
    register_tagger("custom", MyTaggerClass)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
import logging

from . import config as cfg

logger = logging.getLogger(__name__)

UNKNOWN_FIELD = "*"
PRONUNCIATION_FIELD = 8

# Registry of available taggers
_TAGGERS: dict[str, type["Tagger"]] = {}
_DEFAULT_TAGGER: Optional[str] = None


@dataclass
class Morpheme:
    """One analyzed token."""

    surface: str
    feature: str
    start: int = 0

    @property
    def features(self) -> list[str]:
        return self.feature.split(",")

    @property
    def part_of_speech(self) -> str:
        return self.features[0]

    @property
    def pronunciation(self) -> Optional[str]:
        """Katakana pronunciation, or None when the dictionary has none."""
        features = self.features
        if len(features) > PRONUNCIATION_FIELD:
            return features[PRONUNCIATION_FIELD]
        return None


class Tagger(ABC):
    """Base class for morphological analyzer backends."""

    name: str = "base"

    @abstractmethod
    def parse(self, text: str) -> list[Morpheme]:
        """Split text into morphemes.

        Args:
            text: Text to analyze.

        Returns:
            Morphemes in text order.
        """
        pass


# =============================================================================
# Igo Backend
# =============================================================================

class IgoTagger(Tagger):
    """igo-python tagger over a compiled dictionary directory.

    Install: pip install igo-python
    """

    name = "igo"

    def __init__(self, dictionary: Path | str | None = None):
        """Load the tagger.

        Args:
            dictionary: Directory of a compiled igo dictionary.
        """
        try:
            from igo.tagger import Tagger as _IgoTagger
        except ImportError as e:
            raise ImportError(
                "igo-python required. Install: pip install igo-python"
            ) from e

        if dictionary is None:
            self._tagger = _IgoTagger()
        else:
            self._tagger = _IgoTagger(str(dictionary))
        logger.debug("Loaded igo dictionary from %s", dictionary or "package data")

    def parse(self, text: str) -> list[Morpheme]:
        return [
            Morpheme(surface=m.surface, feature=m.feature, start=m.start)
            for m in self._tagger.parse(text)
        ]


# =============================================================================
# Janome Backend
# =============================================================================

class JanomeTagger(Tagger):
    """Janome tagger with its bundled IPA dictionary.

    Install: pip install janome
    """

    name = "janome"

    def __init__(self):
        try:
            from janome.tokenizer import Tokenizer
        except ImportError as e:
            raise ImportError(
                "janome required. Install: pip install janome"
            ) from e
        self._tokenizer = Tokenizer()

    @staticmethod
    def feature_of(token: Any) -> str:
        """Fold a janome token into an IPA dictionary feature string."""
        fields = [
            token.part_of_speech,
            token.infl_type,
            token.infl_form,
            token.base_form,
        ]
        if token.reading != UNKNOWN_FIELD:
            fields.extend([token.reading, token.phonetic])
        return ",".join(fields)

    def parse(self, text: str) -> list[Morpheme]:
        morphemes = []
        start = 0
        for token in self._tokenizer.tokenize(text):
            start = text.find(token.surface, start)
            morphemes.append(
                Morpheme(surface=token.surface, feature=self.feature_of(token), start=start)
            )
            start += len(token.surface)
        return morphemes


# =============================================================================
# Registry Functions
# =============================================================================

def _init_registry():
    """Initialize the tagger registry with built-in backends."""
    global _TAGGERS
    _TAGGERS = {
        "igo": IgoTagger,
        "janome": JanomeTagger,
    }


_init_registry()

# Cached option-less instances
_INSTANCES: dict[str, Tagger] = {}


def get_tagger(name: Optional[str] = None, **options: Any) -> Tagger:
    """Get a tagger instance by name.

    Args:
        name: Tagger name (uses default if None).
        **options: Backend constructor arguments, e.g. ``dictionary`` for igo.

    Returns:
        Tagger instance (cached when no options are given).
    """
    name = name or get_default_tagger()
    if name not in _TAGGERS:
        raise ValueError(
            f"Unknown tagger: {name}. "
            f"Available: {list(_TAGGERS.keys())}"
        )

    if options:
        return _TAGGERS[name](**options)

    if name not in _INSTANCES:
        _INSTANCES[name] = _TAGGERS[name]()

    return _INSTANCES[name]


def register_tagger(name: str, cls: type[Tagger]) -> None:
    """Register a custom tagger.

    Args:
        name: Name to register under.
        cls: Tagger class.
    """
    _TAGGERS[name] = cls
    # Clear cached instance if exists
    if name in _INSTANCES:
        del _INSTANCES[name]


def unregister_tagger(name: str) -> None:
    """Remove a tagger from the registry."""
    _TAGGERS.pop(name, None)
    _INSTANCES.pop(name, None)


def list_taggers() -> list[str]:
    """List available tagger names."""
    return list(_TAGGERS.keys())


def get_default_tagger() -> str:
    """Get the default tagger name."""
    return _DEFAULT_TAGGER or cfg.default_backend()


def set_default_tagger(name: Optional[str]) -> None:
    """Set the default tagger (None restores the configured default)."""
    global _DEFAULT_TAGGER
    if name is not None and name not in _TAGGERS:
        raise ValueError(f"Unknown tagger: {name}")
    _DEFAULT_TAGGER = name
