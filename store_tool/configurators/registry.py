"""Project configurator registry"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Type, Union

from ..api.exceptions import ProjectNotFoundError
from ..constants import DEFAULT_FLUTTER_EXECUTABLE, ProjectType
from ..core.command_runner import CommandRunner
from ..core.status import StatusReporter
from ..services.image_converter import ImageConverter
from ..services.store_api import FilesystemStoreAPI, PublishCollaborators, StoreAPI
from .base import ProjectConfigurator
from .flutter import FlutterProjectConfigurator
from .uwp import UWPProjectConfigurator

logger = logging.getLogger(__name__)

# Built-in configurators, in detection order
CONFIGURATOR_CLASSES: Dict[ProjectType, Type[ProjectConfigurator]] = {
    ProjectType.UWP: UWPProjectConfigurator,
    ProjectType.FLUTTER: FlutterProjectConfigurator,
}


class ConfiguratorRegistry:
    """Ordered set of configurators, one per project type"""

    def __init__(self, configurators: Iterable[ProjectConfigurator] = ()):
        self._configurators: Dict[ProjectType, ProjectConfigurator] = {}
        for configurator in configurators:
            self.register(configurator)

    def register(self, configurator: ProjectConfigurator) -> None:
        """Register a configurator

        A configurator for an already registered project type replaces the
        previous one and keeps its detection position.

        Args:
            configurator: Configurator instance
        """
        project_type = configurator.project_type
        if project_type in self._configurators:
            logger.warning(f"Replacing configurator for project type {project_type.value}")
        self._configurators[project_type] = configurator

    def get(self, project_type: ProjectType) -> Optional[ProjectConfigurator]:
        """Get the configurator registered for a project type"""
        return self._configurators.get(project_type)

    def list_configurators(self) -> List[ProjectConfigurator]:
        """Get registered configurators in detection order"""
        return list(self._configurators.values())

    def find_configurator(self, path_or_url: Union[str, Path, None]) -> Optional[ProjectConfigurator]:
        """Find the first configurator that recognises a project

        Args:
            path_or_url: Candidate project root

        Returns:
            Matching configurator, or None
        """
        for configurator in self._configurators.values():
            if configurator.can_configure(path_or_url):
                logger.debug(f"Detected {configurator.name} project at {path_or_url}")
                return configurator

        logger.debug(f"No configurator recognises {path_or_url}")
        return None

    def require_configurator(self, path_or_url: Union[str, Path]) -> ProjectConfigurator:
        """Like find_configurator, but raise when nothing matches

        Raises:
            ProjectNotFoundError: If no configurator recognises the project
        """
        configurator = self.find_configurator(path_or_url)
        if configurator is None:
            raise ProjectNotFoundError(str(path_or_url))
        return configurator

    def __len__(self) -> int:
        return len(self._configurators)


def create_default_registry(command_runner: Optional[CommandRunner] = None,
                            store_api: Optional[StoreAPI] = None,
                            status_reporter: Optional[StatusReporter] = None,
                            collaborators: Optional[PublishCollaborators] = None,
                            image_converter: Optional[ImageConverter] = None,
                            flutter_executable: str = DEFAULT_FLUTTER_EXECUTABLE) -> ConfiguratorRegistry:
    """Create a registry holding the built-in configurators

    All configurators share the same runner, store client and reporter.

    Returns:
        Registry with UWP checked before Flutter
    """
    command_runner = command_runner or CommandRunner()
    store_api = store_api or FilesystemStoreAPI()
    collaborators = collaborators or PublishCollaborators()

    registry = ConfiguratorRegistry()
    for project_type, configurator_class in CONFIGURATOR_CLASSES.items():
        kwargs = {}
        if configurator_class is FlutterProjectConfigurator:
            kwargs = {
                'image_converter': image_converter,
                'flutter_executable': flutter_executable,
            }
        registry.register(configurator_class(
            command_runner=command_runner,
            store_api=store_api,
            status_reporter=status_reporter,
            collaborators=collaborators,
            **kwargs,
        ))
    return registry
