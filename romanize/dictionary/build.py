"""Dictionary build: compile the IPA lexicon with igo and package it.

Steps, in order:
    1. Remove the stale archive (absence is fine).
    2. Run the igo ``BuildDic`` tool (Java) over the MeCab IPA sources.
    3. Zip the compiled dictionary directory.
    4. Remove the compiled dictionary directory.

Output structure (relative to the build directory):
    ipadic.zip
    └── ipadic/
        ├── char.category
        ├── code2category
        ├── word.dat
        └── ...

Any failing step raises BuildError; nothing is archived after a failed
builder run.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging
import shutil
import subprocess

from .. import config as cfg
from .archive import archive_directory

logger = logging.getLogger(__name__)

# Lines of builder stderr kept in error messages
STDERR_TAIL_LINES = 20


class BuildError(RuntimeError):
    """A dictionary build step failed."""


@dataclass
class BuildConfig:
    """Inputs for a dictionary build.

    Relative paths are resolved against ``workdir``, which is also the
    working directory of the builder process.
    """

    workdir: Path = field(default_factory=Path.cwd)
    java: str = field(default_factory=cfg.default_java)
    jar: str = field(default_factory=cfg.default_jar)
    main_class: str = field(default_factory=cfg.default_main_class)
    source_dir: str = field(default_factory=cfg.default_source_dir)
    output_dir: str = field(default_factory=cfg.default_output_dir)
    encoding: str = field(default_factory=cfg.default_encoding)
    archive: str = field(default_factory=cfg.default_archive)
    keep_output: bool = False
    timeout: Optional[float] = field(default_factory=cfg.default_timeout)

    def __post_init__(self):
        self.workdir = Path(self.workdir)

    def resolve(self, path: str | Path) -> Path:
        """Resolve a configured path against the build directory."""
        path = Path(path)
        return path if path.is_absolute() else self.workdir / path

    @property
    def archive_path(self) -> Path:
        return self.resolve(self.archive)

    @property
    def output_path(self) -> Path:
        return self.resolve(self.output_dir)

    @property
    def source_path(self) -> Path:
        return self.resolve(self.source_dir)


@dataclass
class BuildResult:
    """Outcome of a successful build."""

    archive: Path
    archive_size: int = 0
    files_archived: int = 0
    command: list[str] = field(default_factory=list)
    removed_stale: bool = False


def build_command(config: BuildConfig) -> list[str]:
    """Command line for the igo dictionary builder."""
    return [
        config.java,
        "-cp",
        config.jar,
        config.main_class,
        config.output_dir,
        config.source_dir,
        config.encoding,
    ]


def remove_stale_archive(archive: Path | str) -> bool:
    """Delete a previously built archive.

    Returns:
        True if a file was removed, False if there was none.
    """
    archive = Path(archive)
    try:
        archive.unlink()
    except FileNotFoundError:
        return False
    logger.info("Removed stale archive %s", archive)
    return True


def _tail(text: str, lines: int = STDERR_TAIL_LINES) -> str:
    return "\n".join(text.strip().splitlines()[-lines:])


def run_builder(config: BuildConfig) -> list[str]:
    """Run the external dictionary builder.

    Returns:
        The command line that was run.

    Raises:
        BuildError: Sources missing, builder missing or failing, or no
            output directory produced.
    """
    if not config.source_path.is_dir():
        raise BuildError(f"Dictionary sources not found: {config.source_path}")

    # A leftover directory must not pass for fresh builder output
    if config.output_path.exists():
        remove_directory(config.output_path)

    command = build_command(config)
    logger.info("Running %s", " ".join(command))

    try:
        proc = subprocess.run(
            command,
            cwd=config.workdir,
            capture_output=True,
            text=True,
            timeout=config.timeout,
        )
    except FileNotFoundError as e:
        raise BuildError(f"Cannot run {config.java!r}: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise BuildError(f"Builder timed out after {e.timeout}s") from e

    if proc.stdout:
        logger.debug("Builder output:\n%s", proc.stdout.rstrip())

    if proc.returncode != 0:
        message = f"Builder exited with status {proc.returncode}"
        if proc.stderr:
            message += ":\n" + _tail(proc.stderr)
        raise BuildError(message)

    if not config.output_path.is_dir():
        raise BuildError(f"Builder produced no directory at {config.output_path}")

    return command


def remove_directory(directory: Path | str) -> None:
    """Delete the intermediate dictionary directory."""
    try:
        shutil.rmtree(directory)
    except OSError as e:
        raise BuildError(f"Cannot remove {directory}: {e}") from e
    logger.info("Removed %s", directory)


def build_dictionary(config: Optional[BuildConfig] = None) -> BuildResult:
    """Build and package the dictionary.

    Args:
        config: Build inputs (defaults from config.json).

    Returns:
        BuildResult with the archive path and counts.
    """
    config = config or BuildConfig()
    archive = config.archive_path
    output = config.output_path

    removed = remove_stale_archive(archive)
    command = run_builder(config)

    try:
        files = archive_directory(output, archive)
    except OSError as e:
        archive.unlink(missing_ok=True)
        raise BuildError(f"Cannot archive {output}: {e}") from e

    if not config.keep_output:
        remove_directory(output)

    try:
        size = archive.stat().st_size
    except OSError as e:
        raise BuildError(f"Cannot read {archive}: {e}") from e

    return BuildResult(
        archive=archive,
        archive_size=size,
        files_archived=files,
        command=command,
        removed_stale=removed,
    )
