"""Configure command implementation"""

from pathlib import Path

import click

from ..decorators import app_identity_options, handle_errors, require_project
from ..utils.output import format_operation_result
from ...utils.async_utils import run_async


@click.command()
@click.argument('project_path', required=False,
                type=click.Path(exists=True, file_okay=False, path_type=Path))
@app_identity_options
@click.option('--output', '-o', type=click.Path(path_type=Path), default=None,
              help='Directory the store package will be written to')
@handle_errors
@require_project
def configure(project, app_id, package_identity_name, publisher_name, primary_name,
              publisher_display_name, output):
    """Write the store identity into the project manifest

    Values not given on the command line are taken from the 'app' section
    of .store-tool.yaml.

    Examples:
        store-tool configure --app-id 9NBLGGH4R315

        store-tool configure path/to/app -a 9NBLGGH4R315 --display-name "My App"
    """
    app = project.resolve_app(
        app_id,
        package_identity_name=package_identity_name,
        publisher_name=publisher_name,
        primary_name=primary_name,
        publisher_display_name=publisher_display_name,
    )

    result = run_async(project.configure(app, output))
    format_operation_result("Configure", result, "Project configured successfully!")

    if not result.is_success:
        click.get_current_context().exit(1)
