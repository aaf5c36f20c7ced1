# store_tool/cli/commands/__init__.py
"""CLI commands"""

from . import detect
from . import configure
from . import package
from . import publish
from . import init

__all__ = [
    "detect",
    "configure",
    "package",
    "publish",
    "init",
]
