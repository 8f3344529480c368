"""Exceptions raised by the init workflow."""
from typing import Optional


class KmucError(Exception):
    """Base class for kmuc-hoster errors."""
    pass


class UnsafeDirectoryError(KmucError):
    """Raised when the working directory is a filesystem root."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Refusing to run in filesystem root: {path}")


class StepError(KmucError):
    """Raised when a generation step fails to write its output."""

    def __init__(self, step: str, cause: Optional[BaseException] = None):
        self.step = step
        self.cause = cause
        message = f"Step '{step}' failed"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
