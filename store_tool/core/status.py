"""Status reporting around long-running external calls

Reporters are observers only: they are told when a step starts and how it
ended, and never alter the step's result or swallow its exceptions.
"""

import asyncio
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional


class StatusScope:
    """Handle given to the body of a tracked step"""

    def __init__(self, message: str):
        self.message = message
        self.success_message: Optional[str] = None
        self.error_message: Optional[str] = None

    def success(self, message: str) -> None:
        """Record the message shown when the step completes"""
        self.success_message = message

    def error(self, message: str) -> None:
        """Record a failure message; the step still completes normally"""
        self.error_message = message


class StatusReporter(ABC):
    """Base class for status observers"""

    @asynccontextmanager
    async def track(self, message: str) -> AsyncIterator[StatusScope]:
        """
        Report a step while its body runs

        Args:
            message: Text shown while the step is in progress

        Yields:
            StatusScope used to set the final message
        """
        scope = StatusScope(message)
        self.on_start(message)
        try:
            yield scope
        except (Exception, asyncio.CancelledError) as e:
            if scope.error_message:
                self.on_error(scope.error_message)
            elif str(e):
                self.on_error(f"{message} failed: {e}")
            else:
                self.on_error(f"{message} failed")
            raise
        else:
            if scope.error_message:
                self.on_error(scope.error_message)
            else:
                self.on_success(scope.success_message)

    def message(self, text: str) -> None:
        """Show a standalone line of output"""
        pass

    @abstractmethod
    def on_start(self, message: str) -> None:
        pass

    @abstractmethod
    def on_success(self, message: Optional[str]) -> None:
        pass

    @abstractmethod
    def on_error(self, message: str) -> None:
        pass


class NullStatusReporter(StatusReporter):
    """Reporter that discards every notification"""

    def on_start(self, message: str) -> None:
        pass

    def on_success(self, message: Optional[str]) -> None:
        pass

    def on_error(self, message: str) -> None:
        pass
