"""Operation result models"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..constants import ReturnCode


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external process invocation"""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass
class OperationResult:
    """Return code and output directory of a configure or package step"""

    exit_code: int
    output_dir: Optional[Path] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.exit_code == ReturnCode.SUCCESS

    @classmethod
    def success(cls, output_dir: Optional[Path] = None) -> 'OperationResult':
        return cls(ReturnCode.SUCCESS, output_dir)

    @classmethod
    def failure(cls, exit_code: int) -> 'OperationResult':
        return cls(exit_code, None)
