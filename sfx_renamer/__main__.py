"""
SFX Renamer - Command Line Entry Point

Previews (and with --apply performs) the renaming of the audio files in a
directory against a term catalogue, using the offline glossary translator.

Usage:
    python -m sfx_renamer catalogue.csv ./incoming
    python -m sfx_renamer catalogue.csv ./incoming --engine fuzzy --apply

Exit codes:
    0  success
    1  catalogue or configuration could not be loaded
    2  at least one file failed
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sfx_renamer import __version__

EXIT_OK = 0
EXIT_LOAD_FAILED = 1
EXIT_FILES_FAILED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfx_renamer",
        description="Classify and rename sound effect files against a bilingual term catalogue",
    )
    parser.add_argument("catalogue", type=Path, help="Catalogue CSV (SubCategory, CatID, ...)")
    parser.add_argument("directory", type=Path, help="Directory holding the audio files")
    parser.add_argument(
        "--engine",
        choices=("token", "fuzzy"),
        default=None,
        help="Matching engine (default: from config, token)",
    )
    parser.add_argument("--config", type=Path, metavar="PROFILE", help="JSON settings profile")
    parser.add_argument("--apply", action="store_true", help="Rename the files instead of previewing")
    parser.add_argument("--log-file", type=Path, metavar="PATH", help="Write a rotating debug log")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug output on the console")
    parser.add_argument("--version", action="version", version=f"SFX Renamer v{__version__}")
    return parser


async def run(args: argparse.Namespace) -> int:
    from sfx_renamer.application.catalogue import TermCatalogue
    from sfx_renamer.application.pipeline import FileProcessor, records_from_items
    from sfx_renamer.application.translation import GlossaryTranslator
    from sfx_renamer.core.config import ConfigManager
    from sfx_renamer.domain.exceptions import CatalogueLoadError
    from sfx_renamer.infrastructure.file_system import LocalFileHost

    config = ConfigManager(args.config)
    if args.config is not None and not config.load():
        print(f"Failed to load configuration: {args.config}", file=sys.stderr)
        return EXIT_LOAD_FAILED
    try:
        settings = config.settings()
    except ValueError as e:
        print(e, file=sys.stderr)
        return EXIT_LOAD_FAILED
    if args.engine:
        settings = settings.with_value("matching.engine", args.engine)

    try:
        catalogue = TermCatalogue.from_csv(args.catalogue)
    except CatalogueLoadError as e:
        print(f"Failed to load catalogue: {e}", file=sys.stderr)
        return EXIT_LOAD_FAILED

    extensions = settings.pipeline.audio_extensions
    host = LocalFileHost(args.directory, extensions=extensions)
    records = records_from_items(await host.get_selected(), extensions)
    if not records:
        print(f"No audio files found in {args.directory}")
        return EXIT_OK

    processor = FileProcessor.create(catalogue, GlossaryTranslator(catalogue), settings)
    try:
        result = await processor.process_files(records)
        for record in result.records:
            if record.error_message:
                print(f"{record.original_name} -> ERROR: {record.error_message}")
            else:
                print(f"{record.original_name} -> {record.formatted_name}")

        failed = result.failed_files
        if args.apply:
            outcomes = await processor.execute_rename(result.records, host)
            for outcome in outcomes:
                if not outcome.success and not outcome.skipped:
                    print(f"rename failed: {outcome.id}: {outcome.message}", file=sys.stderr)
                    failed += 1
    finally:
        await processor.cleanup()

    print(f"{result.successful_files}/{result.total_files} files processed")
    return EXIT_FILES_FAILED if failed else EXIT_OK


def run_cli(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line interface.

    Returns:
        int: Exit code.
    """
    args = build_parser().parse_args(argv)

    from sfx_renamer.runtime import setup_logging
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(run_cli())
