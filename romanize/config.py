"""Configuration loader for romanize.

Loads defaults from config.json at project root, with hardcoded fallbacks.
"""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Hardcoded fallback defaults
FALLBACK_DEFAULTS = {
    "java": "java",
    "jar": "igo-0.4.5.jar",
    "main_class": "net.reduls.igo.bin.BuildDic",
    "source_dir": "mecab/mecab-ipadic",
    "output_dir": "ipadic",
    "encoding": "EUC-JP",
    "archive": "ipadic.zip",
    "backend": "janome",
    "timeout": None,
}

_config: dict[str, Any] | None = None


def _find_config() -> Path | None:
    """Find config.json by walking up from current file."""
    paths = [
        Path(__file__).parent.parent / "config.json",  # romanize/ -> root
        Path.cwd() / "config.json",
        Path.cwd().parent / "config.json",
    ]
    for path in paths:
        if path.exists():
            return path
    return None


def load() -> dict[str, Any]:
    """Load configuration from config.json or use fallbacks."""
    global _config
    if _config is not None:
        return _config

    config_path = _find_config()
    if config_path:
        try:
            with open(config_path, encoding="utf-8") as f:
                _config = json.load(f)
                return _config
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable config %s: %s", config_path, e)

    # Fallback
    _config = {"defaults": FALLBACK_DEFAULTS}
    return _config


def reset() -> None:
    """Drop the cached configuration so the next load() re-reads it."""
    global _config
    _config = None


def get_default(key: str, fallback: Any = None) -> Any:
    """Get a default value from config."""
    cfg = load()
    return cfg.get("defaults", {}).get(key, fallback)


# Convenience accessors
def default_java() -> str:
    return get_default("java", FALLBACK_DEFAULTS["java"])


def default_jar() -> str:
    return get_default("jar", FALLBACK_DEFAULTS["jar"])


def default_main_class() -> str:
    return get_default("main_class", FALLBACK_DEFAULTS["main_class"])


def default_source_dir() -> str:
    return get_default("source_dir", FALLBACK_DEFAULTS["source_dir"])


def default_output_dir() -> str:
    return get_default("output_dir", FALLBACK_DEFAULTS["output_dir"])


def default_encoding() -> str:
    return get_default("encoding", FALLBACK_DEFAULTS["encoding"])


def default_archive() -> str:
    return get_default("archive", FALLBACK_DEFAULTS["archive"])


def default_backend() -> str:
    return get_default("backend", FALLBACK_DEFAULTS["backend"])


def default_timeout() -> float | None:
    return get_default("timeout", FALLBACK_DEFAULTS["timeout"])
