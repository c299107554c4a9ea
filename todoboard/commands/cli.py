"""
CLI command - Run the command-line client.

This wraps the click-based client in ``todoboard.cli``.
"""
import argparse
import logging
from todoboard.__main__ import Command

logger = logging.getLogger(__name__)


class CLICommand(Command):
    """Command-line client for a running Todoboard server."""

    @classmethod
    def add_arguments(cls, parser):
        # click parses the rest
        parser.add_argument(
            "cli_args",
            nargs=argparse.REMAINDER,
            help="Arguments to pass to the CLI tool"
        )

    def run(self) -> int:
        from todoboard.cli import cli

        click_args = getattr(self.args, "cli_args", None) or []
        try:
            cli.main(args=click_args, prog_name="todoboard cli")
            return 0
        except SystemExit as e:
            return e.code if e.code is not None else 0
        except Exception as e:
            logger.exception(f"CLI error: {e}")
            return 1
