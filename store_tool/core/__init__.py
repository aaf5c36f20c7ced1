"""Core functionality for store-tool"""

from .command_runner import CommandRunner
from .status import StatusReporter, StatusScope, NullStatusReporter
from .appx_manifest import AppxManifest
from .publish_pipeline import PublishPipeline, find_package_artifacts

__all__ = [
    "CommandRunner",
    "StatusReporter",
    "StatusScope",
    "NullStatusReporter",
    "AppxManifest",
    "PublishPipeline",
    "find_package_artifacts",
]
