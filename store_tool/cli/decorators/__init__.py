# store_tool/cli/decorators/__init__.py
"""CLI decorators"""

from .project import require_project, app_identity_options, handle_errors

__all__ = [
    'require_project',
    'app_identity_options',
    'handle_errors',
]
