"""Publish command implementation"""

from pathlib import Path

import click

from ..decorators import handle_errors, require_project
from ..utils.output import format_publish_result
from ...utils.async_utils import run_async


@click.command()
@click.argument('project_path', required=False,
                type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option('--input-dir', '-i', type=click.Path(path_type=Path), default=None,
              help='Directory holding the packages (defaults to the build output)')
@click.option('--app-id', '-a', default=None,
              help='Store application id (read from the manifest when omitted)')
@handle_errors
@require_project
def publish(project, input_dir, app_id):
    """Submit the project's packages to the store

    The application id is read from the project manifest written by
    'configure' unless given explicitly.

    Examples:
        store-tool publish

        store-tool publish path/to/app --input-dir AppPackages
    """
    app = project.resolve_app(app_id)
    exit_code = run_async(project.publish(app, input_dir))
    format_publish_result(exit_code)

    if exit_code != 0:
        click.get_current_context().exit(1)
