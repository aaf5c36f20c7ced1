# store_tool/api/project.py
"""Project API for the configure, package and publish flow"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from ..configurators import ConfiguratorRegistry, ProjectConfigurator, create_default_registry
from ..constants import ReturnCode
from ..core.command_runner import CommandRunner
from ..core.status import StatusReporter
from ..models import AppIdentity, OperationResult, ToolConfig
from ..services.config_service import ConfigService
from ..services.store_api import PublishCollaborators, StoreAPI, create_store_api
from .exceptions import AppIdentityError

logger = logging.getLogger(__name__)


class StoreProject:
    """A project directory bound to the configurator that recognises it"""

    def __init__(self,
                 project_path: Union[str, Path],
                 config: Optional[ToolConfig] = None,
                 status_reporter: Optional[StatusReporter] = None,
                 command_runner: Optional[CommandRunner] = None,
                 store_api: Optional[StoreAPI] = None,
                 collaborators: Optional[PublishCollaborators] = None,
                 registry: Optional[ConfiguratorRegistry] = None):
        """
        Initialize project

        Args:
            project_path: Project root directory
            config: Tool configuration (loaded from the project when omitted)
            status_reporter: Observer for long-running steps
            command_runner: Runner for external build tools
            store_api: Store API client (built from configuration when omitted)
            collaborators: Helpers passed through to the store API
            registry: Configurator registry (built-in configurators when omitted)
        """
        self.project_path = Path(project_path)
        self.config = config or ConfigService(self.project_path).config
        self.store_api = store_api or create_store_api(self.config.store)
        self.registry = registry or create_default_registry(
            command_runner=command_runner,
            store_api=self.store_api,
            status_reporter=status_reporter,
            collaborators=collaborators,
            flutter_executable=self.config.flutter_executable,
        )
        self._configurator: Optional[ProjectConfigurator] = None

    def detect(self) -> Optional[ProjectConfigurator]:
        """Find the configurator for this project, or None"""
        return self.registry.find_configurator(self.project_path)

    @property
    def configurator(self) -> ProjectConfigurator:
        """Configurator for this project

        Raises:
            ProjectNotFoundError: If no configurator recognises the project
        """
        if self._configurator is None:
            self._configurator = self.registry.require_configurator(self.project_path)
        return self._configurator

    def resolve_app(self, app_id: Optional[str] = None, **fields) -> AppIdentity:
        """
        Build the application identity from arguments and configuration

        Explicit values win over the configured ``app`` section.
        """
        explicit = AppIdentity(id=app_id, **fields)
        return explicit.merged_with(self.config.app)

    @property
    def publisher_display_name(self) -> Optional[str]:
        return self.config.publisher_display_name or self.config.app.publisher_display_name

    async def configure(self,
                        app: AppIdentity,
                        output: Optional[Union[str, Path]] = None) -> OperationResult:
        """Embed the store identity into the project"""
        if not app.is_resolved:
            raise AppIdentityError("An application id is required, pass --app-id or set app.id in the configuration")

        logger.info(f"Configuring {self.configurator.name} project at {self.project_path}")
        return await self.configurator.configure(
            self.project_path,
            app,
            app.publisher_display_name or self.publisher_display_name,
            output,
        )

    async def package(self,
                      app: Optional[AppIdentity] = None,
                      output: Optional[Union[str, Path]] = None) -> OperationResult:
        """Build the store package"""
        logger.info(f"Packaging {self.configurator.name} project at {self.project_path}")
        return await self.configurator.package(self.project_path, app, output)

    async def publish(self,
                      app: Optional[AppIdentity] = None,
                      input_dir: Optional[Union[str, Path]] = None) -> int:
        """Submit the packages to the store"""
        logger.info(f"Publishing {self.configurator.name} project at {self.project_path}")
        return await self.configurator.publish(self.project_path, app, input_dir)

    async def init(self,
                   app: AppIdentity,
                   output: Optional[Union[str, Path]] = None,
                   publish: bool = True) -> int:
        """
        Configure, package and publish in one go

        Each step runs only when the previous one succeeded.

        Args:
            app: Store application identity
            output: Package output directory
            publish: Whether to publish after packaging

        Returns:
            Result code of the last step that ran
        """
        result = await self.configure(app, output)
        if not result.is_success:
            return result.exit_code

        result = await self.package(app, output)
        if not result.is_success or not publish:
            return result.exit_code

        return await self.publish(app, result.output_dir)


# Convenience functions
def detect(project_path: Union[str, Path]) -> Optional[str]:
    """
    Detect the project type of a directory

    Args:
        project_path: Candidate project root

    Returns:
        Project type name, or None if no configurator recognises it
    """
    configurator = create_default_registry().find_configurator(project_path)
    return configurator.name if configurator else None


def init(project_path: Union[str, Path], app_id: str, **options) -> int:
    """
    Configure, package and publish a project (convenience function)

    Args:
        project_path: Project root directory
        app_id: Store application id
        **options: Options
            - output: Package output directory
            - publish: Whether to publish (default True)
            - config: ToolConfig instance

    Returns:
        Result code, 0 on success
    """
    project = StoreProject(project_path, config=options.get('config'))
    app = project.resolve_app(app_id)
    if not app.is_resolved:
        return ReturnCode.NO_APP_IDENTITY
    return asyncio.run(project.init(app, options.get('output'), options.get('publish', True)))
