"""Project context decorators for CLI commands"""

from functools import wraps
from pathlib import Path
from typing import Callable

import click
from rich.markup import escape

from ..utils.output import console, print_error
from ...api.exceptions import ConfigError, ProjectNotFoundError, StoreToolError
from ...constants import EMOJI_ERROR


def handle_errors(func: Callable) -> Callable:
    """Decorator that turns store-tool errors into exit code 1"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        try:
            return func(*args, **kwargs)
        except StoreToolError as e:
            code = f" [dim]({e.error_code})[/dim]" if e.error_code else ""
            console.print(f"{EMOJI_ERROR} [red]{escape(str(e))}[/red]{code}")
            if ctx.obj is not None and ctx.obj.debug:
                console.print_exception()
            ctx.exit(1)

    return wrapper


def require_project(func: Callable) -> Callable:
    """Decorator that resolves the PROJECT_PATH argument into a project

    This decorator:
    1. Loads the configuration for the project directory
    2. Detects the project type
    3. Passes a ``project`` keyword argument to the command

    Args:
        func: Command function to decorate

    Returns:
        Decorated function
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        project_path = Path(kwargs.pop('project_path', None) or Path.cwd()).resolve()

        try:
            project = ctx.obj.load_project(project_path)
        except ConfigError as e:
            print_error("Failed to load configuration", e)
            ctx.exit(1)

        if project.detect() is None:
            console.print(f"{EMOJI_ERROR} {escape(str(ProjectNotFoundError(str(project_path))))}")
            ctx.exit(1)

        kwargs['project'] = project
        return func(*args, **kwargs)

    return wrapper


def app_identity_options(func: Callable) -> Callable:
    """Add the store application identity options to a command"""
    options = [
        click.option('--app-id', '-a', default=None,
                     help='Store application id'),
        click.option('--package-identity-name', default=None,
                     help='Package identity name assigned by the store'),
        click.option('--publisher-name', default=None,
                     help='Publisher (CN=...) assigned by the store'),
        click.option('--display-name', 'primary_name', default=None,
                     help='Application display name'),
        click.option('--publisher-display-name', default=None,
                     help='Publisher name shown in the store'),
    ]
    for option in reversed(options):
        func = option(func)
    return func
