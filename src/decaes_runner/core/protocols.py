"""Protocol definitions for dependency injection and testability."""

from typing import Dict, List, Protocol


class LauncherProtocol(Protocol):
    """Starts a child process, waits for it and returns its exit status."""

    def __call__(self, argv: List[str], env: Dict[str, str]) -> int:
        ...
