# store_tool/cli/main.py
"""Main CLI entry point for store-tool"""

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..api.project import StoreProject
from ..constants import APP_NAME, ENV_LOG_LEVEL, LOG_FORMAT
from ..services.config_service import ConfigService
from .utils.output import console
from .utils.progress import RichStatusReporter

# Import all commands
from .commands import (
    detect,
    configure,
    package,
    publish,
    init,
)


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
        level = logging.WARNING

    # Environment override, e.g. STORE_TOOL_LOG_LEVEL=DEBUG
    env_level = os.environ.get(ENV_LOG_LEVEL)
    if env_level:
        named_level = logging.getLevelName(env_level.upper())
        if isinstance(named_level, int):
            level = named_level

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
        ]
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiofiles").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


class Context:
    """CLI context object

    Projects are created on demand by the commands that need one.
    """

    def __init__(self):
        """Initialize CLI context"""
        self.verbose: bool = False
        self.debug: bool = False
        self.config_path: Optional[Path] = None

    def load_project(self, project_path: Path) -> StoreProject:
        """Load configuration and bind a project directory

        Args:
            project_path: Project root directory

        Returns:
            StoreProject reporting progress on the console

        Raises:
            ConfigError: If the configuration file is invalid
        """
        config = ConfigService(project_path, self.config_path).load_config()
        if self.debug:
            console.print(f"[dim]Project root: {project_path}[/dim]")

        return StoreProject(
            project_path,
            config=config,
            status_reporter=RichStatusReporter(console),
        )


@click.group(name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.option('-c', '--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              default=None, help='Configuration file (default: .store-tool.yaml in the project)')
@click.pass_context
def cli(ctx, verbose, debug, quiet, config_path):
    """Store Tool - Configure, package and publish apps to the Microsoft Store

    Supports UWP projects (Package.appxmanifest) and Flutter projects
    (pubspec.yaml). The project type is detected from the files in the
    project directory.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context()
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.config_path = config_path


# Register commands
cli.add_command(detect.detect)
cli.add_command(configure.configure)
cli.add_command(package.package)
cli.add_command(publish.publish)
cli.add_command(init.init)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
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
