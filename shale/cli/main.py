"""Main CLI entry point for Shale."""

import os
import sys

import click
from colorama import init
from loguru import logger

from shale import __version__
from shale.cli.output import BANNER
from shale.cli.commands import (init_cmd, hash_object_cmd, cat_file_cmd,
                                ls_tree_cmd, write_tree_cmd, commit_tree_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)

LOG_FORMAT = "<level>{level: <8}</level> | {message}"


def configure_logging(verbose: bool) -> None:
    """Send shale's log records to stderr (DEBUG with --verbose, else SHALE_LOG_LEVEL or WARNING)."""
    level = 'DEBUG' if verbose else os.environ.get('SHALE_LOG_LEVEL', 'WARNING').upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    logger.enable('shale')


class ShaleGroup(click.Group):
    """Custom Group class to display banner before help."""
    
    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=ShaleGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log object store activity to stderr')
def cli(verbose):
    configure_logging(verbose)


# Register commands
cli.add_command(init_cmd)
cli.add_command(hash_object_cmd)
cli.add_command(cat_file_cmd)
cli.add_command(ls_tree_cmd)
cli.add_command(write_tree_cmd)
cli.add_command(commit_tree_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
