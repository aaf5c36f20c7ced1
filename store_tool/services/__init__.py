"""Collaborator services for store-tool"""

from .store_api import (
    StoreAPI,
    FilesystemStoreAPI,
    PublishCollaborators,
    create_store_api,
    load_store_api,
)
from .image_converter import ImageConverter
from .config_service import ConfigService

__all__ = [
    "StoreAPI",
    "FilesystemStoreAPI",
    "PublishCollaborators",
    "create_store_api",
    "load_store_api",
    "ImageConverter",
    "ConfigService",
]
