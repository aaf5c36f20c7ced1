# store_tool/api/__init__.py
"""API layer for store-tool"""

from .exceptions import (
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
