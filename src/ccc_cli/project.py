"""Layout of a destination project's `.claude` tree."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import aiofiles.os

from ccc_cli.constant import (
    AGENTS_SUBDIR,
    HOOKS_SUBDIR,
    PROJECT_DIR_VAR,
    SETTINGS_FILE_NAME,
    TOOL_DIR_NAME,
)


@dataclass(frozen=True, slots=True)
class ProjectPaths:
    """Paths where installed resources live inside a project."""

    root: Path

    @property
    def claude_dir(self) -> Path:
        return self.root / TOOL_DIR_NAME

    @property
    def agents_dir(self) -> Path:
        return self.claude_dir / AGENTS_SUBDIR

    @property
    def hooks_dir(self) -> Path:
        return self.claude_dir / HOOKS_SUBDIR

    @property
    def settings_file(self) -> Path:
        return self.claude_dir / SETTINGS_FILE_NAME

    def agent_file(self, name: str) -> Path:
        return self.agents_dir / f"{name}.md"

    def hook_script(self, script_name: str) -> Path:
        return self.hooks_dir / script_name

    @staticmethod
    def script_reference(script_name: str) -> str:
        """Project-relative reference to an installed script, as written to settings.

        Uses the `$CLAUDE_PROJECT_DIR` variable so the settings file stays valid in
        any checkout of the project.
        """
        return f"{PROJECT_DIR_VAR}/{TOOL_DIR_NAME}/{HOOKS_SUBDIR}/{script_name}"


async def is_project_managed(root: Path, *, storage_dir: Path) -> bool:
    """Whether `ccc setup` has linked the project's `.claude` into ccc storage."""
    claude_dir = root / TOOL_DIR_NAME
    if not await aiofiles.os.path.islink(claude_dir):
        return False
    target = Path(await aiofiles.os.readlink(claude_dir))
    if not target.is_absolute():
        target = claude_dir.parent / target
    return target.resolve().is_relative_to(storage_dir.resolve())
