"""
Shared exceptions and lifecycle states for the spell-check services.
"""
from enum import Enum


class WorkerState(str, Enum):
    """Lifecycle of a spell-check worker."""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class SpellcheckError(Exception):
    """Base exception for spell-check errors."""

    pass


class LoadError(SpellcheckError):
    """Raised when a dictionary file cannot be read."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class DictionaryNotFoundError(LoadError):
    """Raised when a dictionary file does not exist."""

    def __init__(self, path: str):
        super().__init__(path, "dictionary file not found")


class ChannelClosedError(SpellcheckError):
    """Raised when a request is submitted to a worker that is not accepting requests."""

    pass
