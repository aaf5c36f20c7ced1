"""Project configurators for store-tool"""

from .base import ProjectConfigurator
from .uwp import UWPProjectConfigurator
from .flutter import FlutterProjectConfigurator
from .registry import ConfiguratorRegistry, create_default_registry

__all__ = [
    "ProjectConfigurator",
    "UWPProjectConfigurator",
    "FlutterProjectConfigurator",
    "ConfiguratorRegistry",
    "create_default_registry",
]
