"""Command line interface for tagnorm."""

import sys
from typing import final

from tagnorm.platform.logging import logger
from tagnorm.ui.cli.args import ArgumentParser
from tagnorm.ui.cli.args.options import BeatGridArgs, CLIArgs, NormalizeArgs, ShowArgs
from tagnorm.ui.cli.commands import BeatGridCommand, NormalizeCommand, ShowCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, ShowArgs):
                succeeded = ShowCommand(args).execute()
            elif isinstance(args, NormalizeArgs):
                succeeded = NormalizeCommand(args).execute()
            else:
                assert isinstance(args, BeatGridArgs)
                succeeded = BeatGridCommand(args).execute()

            if not succeeded:
                sys.exit(1)

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures call ``sys.exit``.
    """
    CommandProcessor.process_command()
    return 0
