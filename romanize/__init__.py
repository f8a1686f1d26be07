"""romanize - Japanese and Korean romanizer.

Romanizes Japanese text morpheme by morpheme using an IPA dictionary
tagger, and transliterates Hangul with Revised Romanization.

Core concepts:
    - The IPA dictionary is compiled by the igo Java tool and shipped zipped
    - Each morpheme's katakana pronunciation becomes Hepburn romaji
    - Nouns are capitalized and long vowels get macrons

Example:
    "空の境界" → "Sora no Kyōkai"

Usage:
    from romanize import Romanizer

    # Bundled janome dictionary
    romanizer = Romanizer()
    romanizer.romanize("太陽のKiss")  # "Taiyō no Kiss"

    # Dictionary built with `romanize build-dict`
    with Romanizer(archive="ipadic.zip") as romanizer:
        romanizer.romanize("エブリデイワールド")  # "Eburideiwārudo"
"""

from .romanizer import Romanizer

__version__ = "0.1.0"

__all__ = ["Romanizer"]
