from __future__ import annotations

from rich.console import Console

console = Console(stderr=True)


class CccError(Exception):
    """Base exception class for ccc."""

    def __init__(self, message: str):
        self.message = message
        console.print(f"[red]Error: {self.message}[/red]")
        super().__init__(self.message)


class ConfigError(CccError, ValueError):
    """Configuration error."""

    pass


class ResourceNotFoundError(CccError, LookupError):
    """No agent or hook with the requested name exists in the catalog."""

    pass


class ProjectNotManagedError(CccError, RuntimeError):
    """The working directory has not been set up with `ccc setup`."""

    pass


class SettingsFileError(CccError, ValueError):
    """The destination settings document cannot be merged safely."""

    pass


class InstallCancelled(Exception):
    """The user cancelled an interactive decision during installation.

    Not an error: raised by prompt collaborators and caught by the command layer.
    """

    pass
