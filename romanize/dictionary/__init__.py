"""Dictionary packaging module.

Compiles the MeCab IPA lexicon with the igo Java tool and packages the
result as a zip archive that the romanizer unpacks at runtime.
"""

from .archive import archive_directory, extract_flat
from .build import (
    BuildConfig,
    BuildError,
    BuildResult,
    build_command,
    build_dictionary,
    remove_directory,
    remove_stale_archive,
    run_builder,
)

__all__ = [
    "BuildConfig",
    "BuildError",
    "BuildResult",
    "archive_directory",
    "build_command",
    "build_dictionary",
    "extract_flat",
    "remove_directory",
    "remove_stale_archive",
    "run_builder",
]
