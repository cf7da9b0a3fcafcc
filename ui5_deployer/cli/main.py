# ui5_deployer/cli/main.py
"""Main CLI entry point for ui5-deployer"""

import logging
import os
import sys

import click
from rich.logging import RichHandler

from ..__version__ import __version__
from ..constants import APP_NAME, ENV_LOG_LEVEL, LOG_FORMAT
from .commands import deploy
from .utils.output import console


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.getLevelName(os.environ.get(ENV_LOG_LEVEL, "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


class Context:
    """CLI context object"""

    def __init__(self, verbose: bool = False, debug: bool = False):
        self.verbose = verbose
        self.debug = debug


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """UI5 Deployer - Deploy UI5 applications to SAP systems

    Uploads the build output of a UI5 project to an ABAP repository, or
    hands it to the Cloud Foundry or Neo command line tools.
    """
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        logging.disable(logging.NOTSET)
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context(verbose=verbose, debug=debug)


# Register commands
cli.add_command(deploy.deploy)


def main():
    """Main entry point for the CLI application"""
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
