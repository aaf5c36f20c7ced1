# store_tool/configurators/base.py
"""Project configurator abstract base class"""

import fnmatch
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..api.exceptions import ManifestError
from ..constants import ProjectType
from ..core.command_runner import CommandRunner
from ..core.publish_pipeline import PublishPipeline
from ..core.status import NullStatusReporter, StatusReporter
from ..models import AppIdentity, OperationResult, SubmissionData
from ..services.store_api import AppIdRecovery, PublishCollaborators, StoreAPI

PathLike = Union[str, Path]


class ProjectConfigurator(ABC):
    """Abstract base class for all project configurators

    A configurator recognises one kind of project and knows how to
    configure, package and publish it. Subclasses set the class attributes
    below and implement the three lifecycle operations.
    """

    project_type: ProjectType
    supported_project_patterns: Tuple[str, ...] = ()
    package_extension: str = ""
    submission_description: str = ""

    def __init__(self,
                 command_runner: Optional[CommandRunner] = None,
                 store_api: Optional[StoreAPI] = None,
                 status_reporter: Optional[StatusReporter] = None,
                 collaborators: Optional[PublishCollaborators] = None):
        """
        Initialize configurator

        Args:
            command_runner: Runner for external build tools
            store_api: Store API client used by publish
            status_reporter: Observer for long-running steps
            collaborators: Helpers passed through to the store API
        """
        self.command_runner = command_runner or CommandRunner()
        self.store_api = store_api
        self.status = status_reporter or NullStatusReporter()
        self.collaborators = collaborators or PublishCollaborators()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def name(self) -> str:
        return self.project_type.value

    def _matching_files(self, directory: PathLike) -> List[str]:
        with os.scandir(directory) as entries:
            names = sorted(entry.name for entry in entries if entry.is_file())
        return [
            name for name in names
            if any(fnmatch.fnmatch(name, pattern) for pattern in self.supported_project_patterns)
        ]

    def can_configure(self, path_or_url: Optional[PathLike]) -> bool:
        """
        Check whether a directory holds a project of this kind

        Only the top level of the directory is inspected. Never raises.

        Args:
            path_or_url: Candidate project root

        Returns:
            True if a file matching one of the patterns exists
        """
        if not path_or_url:
            return False

        try:
            return bool(self._matching_files(path_or_url))
        except (OSError, ValueError) as e:
            self.logger.debug(f"Cannot inspect {path_or_url}: {e}")
            return False

    def get_info(self, path_or_url: PathLike) -> Tuple[Path, Path]:
        """
        Locate the project root and manifest file

        Args:
            path_or_url: Project root directory

        Returns:
            Tuple of (project root, manifest file)

        Raises:
            ManifestError: If no manifest is found at the top level
        """
        project_root = Path(path_or_url)
        patterns = ", ".join(f"'{p}'" for p in self.supported_project_patterns)

        try:
            matches = self._matching_files(project_root)
        except OSError as e:
            raise ManifestError(f"Cannot read project directory {project_root}: {e}", str(project_root)) from e

        if not matches:
            raise ManifestError(
                f"No {patterns} file found in the project root directory.",
                str(project_root),
            )

        return project_root, project_root / matches[0]

    @abstractmethod
    async def configure(self,
                        path_or_url: PathLike,
                        app: AppIdentity,
                        publisher_display_name: Optional[str] = None,
                        output: Optional[PathLike] = None) -> OperationResult:
        """
        Embed the store identity into the project

        Args:
            path_or_url: Project root directory
            app: Store application record
            publisher_display_name: Publisher name shown in the store
            output: Desired package output directory

        Returns:
            Result code with the output directory
        """
        pass

    @abstractmethod
    async def package(self,
                      path_or_url: PathLike,
                      app: Optional[AppIdentity] = None,
                      output: Optional[PathLike] = None) -> OperationResult:
        """
        Build the store package

        Args:
            path_or_url: Project root directory
            app: Identity from a preceding configure, if any
            output: Package output directory

        Returns:
            Result code with the directory holding the package
        """
        pass

    @abstractmethod
    async def publish(self,
                      path_or_url: PathLike,
                      app: Optional[AppIdentity] = None,
                      input_dir: Optional[PathLike] = None) -> int:
        """
        Submit packages to the store

        Args:
            path_or_url: Project root directory
            app: Identity from a preceding configure, if any
            input_dir: Directory holding the packages

        Returns:
            Result code, 0 on success
        """
        pass

    async def get_first_submission_data(self, listing_language: str) -> SubmissionData:
        """Listing content for a first submission"""
        return SubmissionData(description=self.submission_description, images=[])

    async def _publish_packages(self,
                                app: Optional[AppIdentity],
                                recover_app_id: AppIdRecovery,
                                input_dir: Optional[PathLike],
                                default_input_dir: Path,
                                work_dir: Path) -> int:
        if self.store_api is None:
            raise ValueError(f"{self.name} configurator has no store API client")

        pipeline = PublishPipeline(self.store_api, self.collaborators)
        return await pipeline.run(
            app,
            recover_app_id,
            Path(input_dir) if input_dir else None,
            default_input_dir,
            work_dir,
            self.package_extension,
            self.get_first_submission_data,
        )
