"""Init command implementation"""

from pathlib import Path

import click

from ..decorators import app_identity_options, handle_errors, require_project
from ..utils.output import console, format_publish_result, print_error, print_success
from ...utils.async_utils import run_async


@click.command()
@click.argument('project_path', required=False,
                type=click.Path(exists=True, file_okay=False, path_type=Path))
@app_identity_options
@click.option('--output', '-o', type=click.Path(path_type=Path), default=None,
              help='Directory to write the store package to')
@click.option('--no-publish', is_flag=True,
              help='Stop after packaging')
@handle_errors
@require_project
def init(project, app_id, package_identity_name, publisher_name, primary_name,
         publisher_display_name, output, no_publish):
    """Configure, package and publish a project in one go

    Examples:
        store-tool init --app-id 9NBLGGH4R315

        store-tool init path/to/app -a 9NBLGGH4R315 --no-publish
    """
    app = project.resolve_app(
        app_id,
        package_identity_name=package_identity_name,
        publisher_name=publisher_name,
        primary_name=primary_name,
        publisher_display_name=publisher_display_name,
    )

    console.print(f"[bold]Initializing {project.configurator.name} project[/bold] {project.project_path}")
    exit_code = run_async(project.init(app, output, publish=not no_publish))

    if exit_code != 0:
        print_error(f"Initialization failed with exit code {exit_code}")
        click.get_current_context().exit(1)

    if no_publish:
        print_success("Project configured and packaged")
    else:
        format_publish_result(exit_code)
