# store_tool/services/store_api.py
"""Store API collaborator interface"""

import importlib
import json
import logging
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..api.exceptions import ConfigError, PublishError
from ..constants import ReturnCode, StoreApiType
from ..models import AppIdentity, SubmissionData
from ..models.config import StoreConfig
from ..utils.async_utils import sync_to_async
from ..utils.file_utils import atomic_write

# Reads the application id back from a project's own manifest
AppIdRecovery = Callable[[], Awaitable[Optional[str]]]

# Builds listing content for a listing language
SubmissionDataProvider = Callable[[str], Awaitable[SubmissionData]]


@dataclass
class PublishCollaborators:
    """Opaque helpers handed through to the store API untouched"""

    browser_launcher: Any = None
    console_reader: Any = None
    zip_file_manager: Any = None
    file_downloader: Any = None
    blob_manager: Any = None


class StoreAPI(ABC):
    """Abstract base class for store API clients"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize store API client

        Args:
            config: Client-specific configuration
        """
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    async def ensure_app_initialized(self,
                                     app: Optional[AppIdentity],
                                     recover_app_id: AppIdRecovery) -> Optional[AppIdentity]:
        """
        Resolve the application a publish targets

        Args:
            app: Identity known by the caller, if any
            recover_app_id: Reads the id from the project manifest

        Returns:
            The resolved identity, or None if it cannot be determined
        """
        pass

    @abstractmethod
    async def publish(self,
                      app: AppIdentity,
                      submission_data: SubmissionDataProvider,
                      output_dir: Path,
                      package_files: List[Path],
                      collaborators: PublishCollaborators) -> int:
        """
        Upload packages and submit them

        Args:
            app: Resolved application identity
            submission_data: Listing content supplier
            output_dir: Working directory for intermediate files
            package_files: Package artifacts to upload
            collaborators: Pass-through helpers

        Returns:
            Result code, 0 on success
        """
        pass


class FilesystemStoreAPI(StoreAPI):
    """Offline store drop

    Copies the package files into ``<drop>/<app id>/`` next to a
    ``submission.json`` describing the submission. The drop directory is
    ``config['path']`` or the publish working directory.
    """

    SUBMISSION_FILE = "submission.json"

    async def ensure_app_initialized(self,
                                     app: Optional[AppIdentity],
                                     recover_app_id: AppIdRecovery) -> Optional[AppIdentity]:
        if app is not None and app.is_resolved:
            return app

        app_id = await recover_app_id()
        if not app_id:
            return None

        return AppIdentity(id=app_id).merged_with(app)

    async def publish(self,
                      app: AppIdentity,
                      submission_data: SubmissionDataProvider,
                      output_dir: Path,
                      package_files: List[Path],
                      collaborators: PublishCollaborators) -> int:
        if not package_files:
            self.logger.error("No package files to publish")
            return ReturnCode.NO_PACKAGE_FILES

        drop_root = Path(self.config['path']) if self.config.get('path') else Path(output_dir)
        target_dir = drop_root / app.id
        target_dir.mkdir(parents=True, exist_ok=True)

        listing_language = self.config.get('listing_language', 'en-us')
        data = await submission_data(listing_language)

        copied = []
        for package_file in package_files:
            try:
                await _copy_file(package_file, target_dir / package_file.name)
            except OSError as e:
                raise PublishError(f"Failed to copy {package_file} to {target_dir}: {e}") from e
            copied.append(package_file.name)
            self.logger.info(f"Uploaded {package_file.name} to {target_dir}")

        submission = {
            'app': app.to_dict(),
            'listing_language': listing_language,
            'submission': data.to_dict(),
            'packages': copied,
            'created_at': datetime.now().isoformat(),
        }
        await atomic_write(target_dir / self.SUBMISSION_FILE, json.dumps(submission, indent=2, ensure_ascii=False))

        return ReturnCode.SUCCESS


@sync_to_async
def _copy_file(source: Path, destination: Path) -> None:
    shutil.copy2(source, destination)


def load_store_api(reference: str, config: Dict[str, Any] = None) -> StoreAPI:
    """
    Instantiate a store API class from a ``module:Class`` string

    Args:
        reference: Import path of the class
        config: Configuration passed to the constructor

    Returns:
        Store API instance

    Raises:
        ConfigError: If the class cannot be imported or is not a StoreAPI
    """
    module_name, _, class_name = reference.partition(':')
    if not module_name or not class_name:
        raise ConfigError(f"Invalid store API reference '{reference}', expected 'module:Class'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Failed to import store API module {module_name}: {e}") from e

    api_class = getattr(module, class_name, None)
    if not isinstance(api_class, type) or not issubclass(api_class, StoreAPI):
        raise ConfigError(f"'{reference}' is not a StoreAPI subclass")

    return api_class(config)


def create_store_api(store_config: StoreConfig) -> StoreAPI:
    """Create the store API client described by configuration"""
    config = {
        'path': store_config.path,
        'listing_language': store_config.listing_language,
    }
    if store_config.options:
        config.update(store_config.options)

    if store_config.api_type == StoreApiType.CUSTOM:
        return load_store_api(store_config.api, config)
    return FilesystemStoreAPI(config)
