"""Store Tool - Configure, package and publish apps to the Microsoft Store.

This tool detects the kind of project in a directory (UWP or Flutter),
embeds the store application identity into its manifest, drives the
platform build tools to produce a store package and hands the package to
a store API client.
"""

from .__version__ import __version__, __version_info__, __author__, __license__

# Core API
from .api.project import StoreProject, detect, init

# Configurators
from .configurators import (
    ProjectConfigurator,
    UWPProjectConfigurator,
    FlutterProjectConfigurator,
    ConfiguratorRegistry,
    create_default_registry,
)

# Data models
from .models import AppIdentity, CommandResult, OperationResult, SubmissionData, ToolConfig

# Exceptions
from .api.exceptions import (
    StoreToolError,
    ConfigError,
    ProjectNotFoundError,
    ToolchainNotFoundError,
    OperationFailedError,
    ManifestError,
    OutputParseError,
    AppIdentityError,
    PackageNotFoundError,
    PublishError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__license__",

    # Core API
    "StoreProject",
    "detect",
    "init",

    # Configurators
    "ProjectConfigurator",
    "UWPProjectConfigurator",
    "FlutterProjectConfigurator",
    "ConfiguratorRegistry",
    "create_default_registry",

    # Data models
    "AppIdentity",
    "CommandResult",
    "OperationResult",
    "SubmissionData",
    "ToolConfig",

    # Exceptions
    "StoreToolError",
    "ConfigError",
    "ProjectNotFoundError",
    "ToolchainNotFoundError",
    "OperationFailedError",
    "ManifestError",
    "OutputParseError",
    "AppIdentityError",
    "PackageNotFoundError",
    "PublishError",
]
