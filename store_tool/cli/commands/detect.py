"""Detect command implementation"""

from pathlib import Path

import click
from rich.markup import escape

from ..decorators import handle_errors
from ..utils.output import console, print_warning


@click.command()
@click.argument('project_path', required=False,
                type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
@handle_errors
def detect(ctx, project_path):
    """Show which kind of project a directory holds

    Examples:
        store-tool detect

        store-tool detect path/to/MyApp
    """
    project_path = (project_path or Path.cwd()).resolve()
    project = ctx.obj.load_project(project_path)
    configurator = project.detect()

    if configurator is None:
        print_warning(f"No supported project found at {project_path}")
        ctx.exit(1)

    console.print(f"[bold]{configurator.name}[/bold] project at {escape(str(project_path))}")
