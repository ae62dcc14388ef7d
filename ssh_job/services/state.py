"""Global state management for ssh_job."""

from ssh_job.dependencies import Dependencies

# Global state (initialized on first access)
_deps: Dependencies | None = None


def get_deps() -> Dependencies:
    """Get or create the dependencies container."""
    global _deps
    if _deps is None:
        _deps = Dependencies.create()
    return _deps


def set_deps(deps: Dependencies) -> None:
    """Set the global dependencies instance.

    Allows tests to inject collaborators without modifying module internals.
    """
    global _deps
    _deps = deps


def reset_state() -> None:
    """Reset global state for testing."""
    global _deps
    _deps = None
