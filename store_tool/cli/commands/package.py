"""Package command implementation"""

from pathlib import Path

import click

from ..decorators import handle_errors, require_project
from ..utils.output import format_operation_result
from ...utils.async_utils import run_async


@click.command()
@click.argument('project_path', required=False,
                type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(path_type=Path), default=None,
              help='Directory to write the store package to')
@handle_errors
@require_project
def package(project, output):
    """Build the store package for a configured project

    Examples:
        store-tool package

        store-tool package path/to/app --output dist
    """
    result = run_async(project.package(None, output))
    format_operation_result("Package", result, "Store package built successfully!")

    if not result.is_success:
        click.get_current_context().exit(1)
