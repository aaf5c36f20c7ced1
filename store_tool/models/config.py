"""Configuration data models"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..constants import CONFIG_VERSION, DEFAULT_FLUTTER_EXECUTABLE, StoreApiType
from .identity import AppIdentity


@dataclass
class StoreConfig:
    """Store API client selection"""

    type: str = StoreApiType.FILESYSTEM.value
    path: Optional[str] = None
    api: Optional[str] = None
    listing_language: str = "en-us"
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate store configuration"""
        api_type = StoreApiType(self.type)

        if api_type == StoreApiType.CUSTOM and not self.api:
            raise ValueError("Custom store requires 'api' (module:Class)")

    @property
    def api_type(self) -> StoreApiType:
        """Get StoreApiType enum"""
        return StoreApiType(self.type)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {'type': self.type, 'listing_language': self.listing_language}
        if self.path:
            data['path'] = self.path
        if self.api:
            data['api'] = self.api
        if self.options:
            data['options'] = self.options
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'StoreConfig':
        """Create from dictionary"""
        data = data or {}
        return cls(
            type=data.get('type', StoreApiType.FILESYSTEM.value),
            path=data.get('path'),
            api=data.get('api'),
            listing_language=data.get('listing_language', 'en-us'),
            options=data.get('options', {}),
        )


@dataclass
class ToolConfig:
    """Project-level store-tool configuration"""

    version: str = CONFIG_VERSION
    publisher_display_name: Optional[str] = None
    flutter_executable: str = DEFAULT_FLUTTER_EXECUTABLE
    store: StoreConfig = field(default_factory=StoreConfig)
    app: AppIdentity = field(default_factory=AppIdentity)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            'version': self.version,
            'flutter_executable': self.flutter_executable,
            'store': self.store.to_dict(),
        }
        if self.publisher_display_name:
            data['publisher_display_name'] = self.publisher_display_name
        if self.app.to_dict():
            data['app'] = self.app.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ToolConfig':
        """Create from dictionary"""
        data = data or {}
        return cls(
            version=str(data.get('version', CONFIG_VERSION)),
            publisher_display_name=data.get('publisher_display_name'),
            flutter_executable=data.get('flutter_executable', DEFAULT_FLUTTER_EXECUTABLE),
            store=StoreConfig.from_dict(data.get('store')),
            app=AppIdentity.from_dict(data.get('app')),
        )
