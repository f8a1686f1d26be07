"""Zip packing and unpacking for compiled dictionaries.

Packing mirrors ``zip -r9 ipadic.zip ipadic``: entries keep the directory
name as their prefix and use maximum deflate compression.

Unpacking is flat: every file entry lands directly in the destination,
which is the layout the igo tagger expects for a dictionary directory.
"""

import io
import logging
import shutil
import zipfile
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)


def archive_directory(
    directory: Path | str,
    archive: Path | str,
    compresslevel: int = 9,
) -> int:
    """Recursively zip a directory.

    Args:
        directory: Directory to pack.
        archive: Zip file to write (overwritten if present).
        compresslevel: Deflate level, 0-9.

    Returns:
        Number of files written to the archive.
    """
    directory = Path(directory)
    archive = Path(archive)
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")

    base = directory.parent
    files = 0
    with zipfile.ZipFile(
        archive, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=compresslevel
    ) as zf:
        zf.write(directory, directory.relative_to(base).as_posix() + "/")
        for path in sorted(directory.rglob("*")):
            arcname = path.relative_to(base).as_posix()
            if path.is_dir():
                zf.write(path, arcname + "/")
            else:
                zf.write(path, arcname)
                files += 1

    logger.debug("Archived %d files from %s into %s", files, directory, archive)
    return files


def _open(source: Path | str | bytes) -> zipfile.ZipFile:
    if isinstance(source, (bytes, bytearray)):
        return zipfile.ZipFile(io.BytesIO(source))
    return zipfile.ZipFile(source)


def extract_flat(source: Path | str | bytes, destination: Path | str) -> list[Path]:
    """Extract every file of a zip directly into ``destination``.

    Directory entries are skipped and directory components of file entries
    are dropped, so ``ipadic/word.dat`` becomes ``destination/word.dat``.

    Args:
        source: Zip file path, or the raw zip bytes.
        destination: Existing directory to extract into.

    Returns:
        Paths of the extracted files.
    """
    destination = Path(destination)
    extracted: list[Path] = []

    with _open(source) as zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            name = PurePosixPath(info.filename.replace("\\", "/")).name
            if not name or name in (".", ".."):
                continue

            target = destination / name
            with zf.open(info) as src, open(target, "wb") as dst:
                shutil.copyfileobj(src, dst)
            extracted.append(target)

    return extracted
