"""romanize CLI - dictionary packaging and text romanization.

Usage:
    python -m romanize.main build-dict
    python -m romanize.main build-dict --workdir ipadic --encoding EUC-JP
    python -m romanize.main romanize "太陽のKiss"
    echo "空の境界" | python -m romanize.main romanize --archive ipadic/ipadic.zip
"""

import argparse
import logging
import sys
from pathlib import Path

from . import config as cfg
from .dictionary.build import BuildConfig, BuildError, build_dictionary
from .romanizer import Romanizer


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="romanize",
        description="romanize - Japanese/Korean romanizer and dictionary packager",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress progress output",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    build = commands.add_parser(
        "build-dict",
        help="Compile the IPA dictionary with igo and zip it",
    )
    build.add_argument(
        "--workdir",
        "-w",
        type=Path,
        default=Path.cwd(),
        help="Build directory (default: current directory)",
    )
    build.add_argument(
        "--java",
        default=cfg.default_java(),
        help=f"Java executable (default: {cfg.default_java()})",
    )
    build.add_argument(
        "--jar",
        default=cfg.default_jar(),
        help=f"igo jar (default: {cfg.default_jar()})",
    )
    build.add_argument(
        "--main-class",
        default=cfg.default_main_class(),
        help=f"Builder entry point (default: {cfg.default_main_class()})",
    )
    build.add_argument(
        "--source",
        default=cfg.default_source_dir(),
        help=f"MeCab dictionary sources (default: {cfg.default_source_dir()})",
    )
    build.add_argument(
        "--output-dir",
        "-o",
        default=cfg.default_output_dir(),
        help=f"Compiled dictionary directory (default: {cfg.default_output_dir()})",
    )
    build.add_argument(
        "--encoding",
        "-e",
        default=cfg.default_encoding(),
        help=f"Source encoding (default: {cfg.default_encoding()})",
    )
    build.add_argument(
        "--archive",
        "-a",
        default=cfg.default_archive(),
        help=f"Archive to write (default: {cfg.default_archive()})",
    )
    build.add_argument(
        "--keep-output",
        action="store_true",
        help="Don't delete the compiled directory after archiving",
    )
    build.add_argument(
        "--timeout",
        "-t",
        type=float,
        default=cfg.default_timeout(),
        help="Seconds to wait for the builder (default: no limit)",
    )

    roman = commands.add_parser("romanize", help="Romanize text")
    roman.add_argument(
        "text",
        nargs="*",
        help="Text to romanize (default: read lines from stdin)",
    )
    roman.add_argument(
        "--backend",
        "-b",
        help=f"Tagger backend (default: {cfg.default_backend()})",
    )
    roman.add_argument(
        "--archive",
        "-a",
        type=Path,
        help="Compiled dictionary zip to load with igo",
    )

    return parser


def run_build(args: argparse.Namespace) -> int:
    """Run the build-dict command."""
    config = BuildConfig(
        workdir=args.workdir,
        java=args.java,
        jar=args.jar,
        main_class=args.main_class,
        source_dir=args.source,
        output_dir=args.output_dir,
        encoding=args.encoding,
        archive=args.archive,
        keep_output=args.keep_output,
        timeout=args.timeout,
    )

    if not args.quiet:
        print("=" * 60)
        print("romanize - Dictionary Build")
        print("=" * 60)
        print(f"Sources: {config.source_path} ({config.encoding})")
        print(f"Archive: {config.archive_path}")
        print()
        print("[1/1] Compiling and archiving dictionary...")

    result = build_dictionary(config)

    if not args.quiet:
        print(f"  Command: {' '.join(result.command)}")
        print(f"  Files archived: {result.files_archived:,}")
        print(f"  Archive size: {result.archive_size:,} bytes")
        print("\n" + "=" * 60)
        print("Done!")
        print("=" * 60)

    return 0


def run_romanize(args: argparse.Namespace) -> int:
    """Run the romanize command."""
    lines = args.text or (line.rstrip("\n") for line in sys.stdin)

    with Romanizer(archive=args.archive, backend=args.backend) as romanizer:
        for line in lines:
            print(romanizer.romanize(line))

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    handlers = {
        "build-dict": run_build,
        "romanize": run_romanize,
    }

    try:
        return handlers[args.command](args)
    except (BuildError, ValueError, ImportError, OSError) as e:
        print(f"ERROR - {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
