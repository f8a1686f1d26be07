"""Pytest configuration and fixtures."""

import pytest
import subprocess
import sys
import types
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from romanize import config as cfg
from romanize.kana import is_katakana
from romanize.tagger import Morpheme, Tagger, register_tagger, unregister_tagger

# IPA dictionary features for the words used in tests
LEXICON = {
    "太陽": "名詞,一般,*,*,*,*,太陽,タイヨウ,タイヨー",
    "の": "助詞,連体化,*,*,*,*,の,ノ,ノ",
    "夕日": "名詞,一般,*,*,*,*,夕日,ユウヒ,ユーヒ",
    "綺麗": "名詞,形容動詞語幹,*,*,*,*,綺麗,キレイ,キレイ",
    "な": "助動詞,*,*,*,特殊・ダ,体言接続,だ,ナ,ナ",
    "あの": "連体詞,*,*,*,*,*,あの,アノ,アノ",
    "丘": "名詞,一般,*,*,*,*,丘,オカ,オカ",
    "で": "助詞,格助詞,一般,*,*,*,で,デ,デ",
    "空": "名詞,一般,*,*,*,*,空,ソラ,ソラ",
    "境界": "名詞,一般,*,*,*,*,境界,キョウカイ,キョーカイ",
    "殺人": "名詞,サ変接続,*,*,*,*,殺人,サツジン,サツジン",
    "考察": "名詞,サ変接続,*,*,*,*,考察,コウサツ,コーサツ",
    "後": "名詞,一般,*,*,*,*,後,ゴ,ゴ",
    "ふ": "動詞,自立,*,*,五段・カ行イ音便,連用タ接続,ふく,フ,フ",
    "ペン": "名詞,一般,*,*,*,*,ペン,ペン,ペン",
    "ボールペン": "名詞,一般,*,*,*,*,ボールペン,ボールペン,ボールペン",
}

UNKNOWN_NOUN = "名詞,固有名詞,組織,*,*,*,*"
SYMBOL = "記号,一般,*,*,*,*,{0},{0},{0}"


def _run_length(text: str, start: int, predicate) -> int:
    end = start
    while end < len(text) and predicate(text[end]):
        end += 1
    return end - start


class LexiconTagger(Tagger):
    """Longest-match tagger over LEXICON.

    Katakana, ASCII alphanumeric and Hangul runs become unknown nouns,
    whitespace is dropped and any other character is a symbol.
    """

    name = "lexicon"

    def __init__(self, dictionary=None):
        self.dictionary = Path(dictionary) if dictionary else None
        self.dictionary_files = (
            sorted(p.name for p in self.dictionary.iterdir()) if self.dictionary else []
        )

    def parse(self, text):
        morphemes = []
        longest = max(len(w) for w in LEXICON)
        i = 0
        while i < len(text):
            char = text[i]
            if char.isspace():
                i += 1
                continue

            for size in range(min(longest, len(text) - i), 0, -1):
                if text[i:i + size] in LEXICON:
                    surface = text[i:i + size]
                    feature = LEXICON[surface]
                    break
            else:
                size = (
                    _run_length(text, i, is_katakana)
                    or _run_length(text, i, lambda c: c.isascii() and c.isalnum())
                    or _run_length(text, i, lambda c: "가" <= c <= "힣")
                )
                if size:
                    surface = text[i:i + size]
                    feature = UNKNOWN_NOUN
                else:
                    size = 1
                    surface = char
                    feature = SYMBOL.format(char)

            morphemes.append(Morpheme(surface=surface, feature=feature, start=i))
            i += size
        return morphemes


@pytest.fixture
def lexicon_tagger():
    """Register LexiconTagger as the "lexicon" backend."""
    register_tagger("lexicon", LexiconTagger)
    yield LexiconTagger()
    unregister_tagger("lexicon")


@pytest.fixture
def fresh_config():
    """Drop cached configuration before and after the test."""
    cfg.reset()
    yield cfg
    cfg.reset()


@pytest.fixture
def dictionary_sources(tmp_path):
    """Build directory with a small MeCab-style lexicon."""
    source = tmp_path / "mecab" / "mecab-ipadic"
    source.mkdir(parents=True)
    (source / "Noun.csv").write_text(
        "太陽,1285,1285,5000,名詞,一般,*,*,*,*,太陽,タイヨウ,タイヨー\n",
        encoding="utf-8",
    )
    (source / "char.def").write_text("DEFAULT 0 1 0\n", encoding="utf-8")
    return tmp_path


class FakeBuilder:
    """Stands in for subprocess.run on the igo BuildDic command."""

    def __init__(self, returncode=0, stderr="", produce=True, error=None):
        self.returncode = returncode
        self.stderr = stderr
        self.produce = produce
        self.error = error
        self.calls = []

    def __call__(self, command, cwd=None, **kwargs):
        self.calls.append((list(command), Path(cwd) if cwd else None, kwargs))
        if self.error is not None:
            raise self.error

        if self.produce and self.returncode == 0:
            output = Path(cwd) / command[4]
            output.mkdir(parents=True, exist_ok=True)
            for name in ("char.category", "code2category", "word.dat", "word.ary.idx"):
                (output / name).write_bytes(name.encode("ascii") * 64)

        return subprocess.CompletedProcess(
            command, self.returncode, stdout="", stderr=self.stderr
        )


@pytest.fixture
def fake_builder(monkeypatch):
    """Patch the builder subprocess call; returns the fake for inspection."""
    from romanize.dictionary import build

    builder = FakeBuilder()
    monkeypatch.setattr(build.subprocess, "run", builder)
    return builder


class FakeIgoMorpheme:
    def __init__(self, surface, feature, start):
        self.surface = surface
        self.feature = feature
        self.start = start


class FakeIgoTagger:
    """Mimics igo.tagger.Tagger over LEXICON."""

    instances = []

    def __init__(self, dataDir=None):
        self.data_dir = dataDir
        self.files = sorted(p.name for p in Path(dataDir).iterdir()) if dataDir else []
        FakeIgoTagger.instances.append(self)

    def parse(self, text):
        return [
            FakeIgoMorpheme(m.surface, m.feature, m.start)
            for m in LexiconTagger().parse(text)
        ]


@pytest.fixture
def fake_igo(monkeypatch):
    """Install a stand-in igo package; returns its Tagger class."""
    package = types.ModuleType("igo")
    module = types.ModuleType("igo.tagger")
    module.Tagger = FakeIgoTagger
    package.tagger = module
    monkeypatch.setitem(sys.modules, "igo", package)
    monkeypatch.setitem(sys.modules, "igo.tagger", module)
    FakeIgoTagger.instances = []
    return FakeIgoTagger
