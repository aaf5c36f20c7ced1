"""Data models for store-tool"""

from .identity import AppIdentity, SubmissionData, SubmissionImage
from .result import CommandResult, OperationResult
from .config import StoreConfig, ToolConfig

__all__ = [
    # Identity models
    "AppIdentity",
    "SubmissionData",
    "SubmissionImage",

    # Result models
    "CommandResult",
    "OperationResult",

    # Config models
    "StoreConfig",
    "ToolConfig",
]
