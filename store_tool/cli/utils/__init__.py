# store_tool/cli/utils/__init__.py
"""CLI utilities"""

from .output import (
    console,
    format_operation_result,
    format_publish_result,
    print_error,
    print_warning,
    print_success,
)
from .progress import RichStatusReporter

__all__ = [
    'console',
    'format_operation_result',
    'format_publish_result',
    'print_error',
    'print_warning',
    'print_success',
    'RichStatusReporter',
]
