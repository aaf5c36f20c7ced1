"""Publish pipeline shared by all configurators"""

import logging
from pathlib import Path
from typing import List, Optional

from ..api.exceptions import PackageNotFoundError
from ..constants import ReturnCode
from ..models import AppIdentity
from ..services.store_api import (
    AppIdRecovery,
    PublishCollaborators,
    StoreAPI,
    SubmissionDataProvider,
)
from ..utils.file_utils import find_files_by_extension

logger = logging.getLogger(__name__)


def find_package_artifacts(directory: Path, extension: str) -> List[Path]:
    """
    List package artifacts in a directory

    Only the top level is searched and the suffix must match exactly.
    The listing is taken fresh from disk on every call.

    Raises:
        PackageNotFoundError: If the directory does not exist
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise PackageNotFoundError(str(directory))
    return find_files_by_extension(directory, extension)


class PublishPipeline:
    """Resolves the application identity and hands packages to the store"""

    def __init__(self, store_api: StoreAPI, collaborators: Optional[PublishCollaborators] = None):
        """
        Initialize publish pipeline

        Args:
            store_api: Store API client
            collaborators: Helpers passed through to the store API
        """
        self.store_api = store_api
        self.collaborators = collaborators or PublishCollaborators()

    async def run(self,
                  app: Optional[AppIdentity],
                  recover_app_id: AppIdRecovery,
                  input_dir: Optional[Path],
                  default_input_dir: Path,
                  work_dir: Path,
                  extension: str,
                  submission_data: SubmissionDataProvider) -> int:
        """
        Publish the packages of a project

        Args:
            app: Identity supplied by the caller, if any
            recover_app_id: Reads the id from the project manifest
            input_dir: Directory holding the packages
            default_input_dir: Used when ``input_dir`` is not given
            work_dir: Working directory for the store API
            extension: Package file extension
            submission_data: Listing content supplier

        Returns:
            Store API result code, or -1 when no identity is available
        """
        resolved = await self.store_api.ensure_app_initialized(app, recover_app_id)
        if resolved is None or not resolved.is_resolved:
            logger.error("No application identity: pass an app id or configure the project first")
            return ReturnCode.NO_APP_IDENTITY

        logger.info(f"AppId: {resolved.id}")

        input_dir = Path(input_dir) if input_dir else Path(default_input_dir)
        package_files = find_package_artifacts(input_dir, extension)
        logger.info(f"Found {len(package_files)} '{extension}' package(s) in {input_dir}")

        work_dir = Path(work_dir)
        work_dir.mkdir(parents=True, exist_ok=True)

        return await self.store_api.publish(
            resolved,
            submission_data,
            work_dir,
            package_files,
            self.collaborators,
        )
