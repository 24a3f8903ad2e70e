"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from tagnorm.config.config import Config
from tagnorm.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from tagnorm.ui.cli.args.options import BeatGridArgs, CLIArgs, NormalizeArgs, ShowArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            description="tagnorm - Inspect and normalize audio file tags and Serato beat grids.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        show_parser = subparsers.add_parser(
            "show",
            help="Show the canonical metadata read from a file",
        )
        ArgumentParser._add_common_arguments(show_parser)

        normalize_parser = subparsers.add_parser(
            "normalize",
            help="Read a file's tags and write them back normalized",
        )
        ArgumentParser._add_common_arguments(normalize_parser)
        _ = normalize_parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be written without saving",
        )

        beatgrid_parser = subparsers.add_parser(
            "beatgrid",
            help="Decode the Serato beat grid of a file and list beat positions",
        )
        ArgumentParser._add_common_arguments(beatgrid_parser)
        _ = beatgrid_parser.add_argument(
            "--offset",
            type=float,
            default=0.0,
            metavar="MS",
            help="Timing offset in milliseconds added to every beat",
        )
        _ = beatgrid_parser.add_argument(
            "--limit",
            type=int,
            help="List only the first N beat positions",
        )

        return parser

    @staticmethod
    def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "file_path",
            type=str,
            help="Path to the audio file",
            metavar="FILE",
        )
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show debug diagnostics",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If the file does not exist or other validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        file_path = Path(parsed_args.file_path)
        if not file_path.is_file():
            logger.error("File does not exist: %s", file_path)
            sys.exit(1)

        command: str = parsed_args.command

        if command == "show":
            return ShowArgs(
                command="show",
                file_path=file_path,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "normalize":
            return NormalizeArgs(
                command="normalize",
                file_path=file_path,
                dry_run=parsed_args.dry_run,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "beatgrid":
            limit = parsed_args.limit
            if limit is not None and limit <= 0:
                logger.error("Limit must be a positive integer; received %s", limit)
                sys.exit(1)
            return BeatGridArgs(
                command="beatgrid",
                file_path=file_path,
                offset_ms=parsed_args.offset,
                limit=limit,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        logger.error("Unsupported command: %s", command)
        sys.exit(2)
