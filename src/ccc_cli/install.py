"""Idempotent installation of agents and hooks into a project's `.claude` tree.

Every artifact goes through the same small state machine: a missing file is
created, an identical one is verified without writing, and a different one is
overwritten only when the caller's `confirm_overwrite` collaborator agrees.
"""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os
from loguru import logger

from ccc_cli.agents.models import Agent
from ccc_cli.exception import SettingsFileError
from ccc_cli.hooks.decoder import WILDCARD_MATCHER, normalize_matcher
from ccc_cli.hooks.models import Hook, event_name
from ccc_cli.project import ProjectPaths

SCRIPT_MODE = 0o755

ConfirmOverwrite = Callable[[Path], Awaitable[bool]]
"""Decides whether a differing destination file may be replaced.

Returning False keeps the existing file. Raising `InstallCancelled` aborts the rest
of the installation.
"""


class InstallOutcome(str, Enum):
    CREATED = "created"
    VERIFIED = "verified"
    OVERWRITTEN = "overwritten"
    KEPT_EXISTING = "kept_existing"


@dataclass(slots=True)
class AgentInstallResult:
    agent_file: Path
    outcome: InstallOutcome


@dataclass(slots=True)
class HookInstallResult:
    script_file: Path
    settings_file: Path
    script: InstallOutcome
    settings: InstallOutcome
    warnings: list[str] = field(default_factory=list)


async def materialize(
    path: Path,
    content: str,
    *,
    confirm_overwrite: ConfirmOverwrite,
) -> InstallOutcome:
    """Make `path` hold `content`, comparing existing text with surrounding whitespace trimmed."""
    if await aiofiles.os.path.exists(path):
        existing: str | None
        try:
            async with aiofiles.open(path, encoding="utf-8") as f:
                existing = await f.read()
        except UnicodeDecodeError:
            # undecodable text can only differ from ours
            logger.warning("Existing file is not valid UTF-8: {path}", path=path)
            existing = None
        if existing is not None and existing.strip() == content.strip():
            logger.debug("Verified existing file: {path}", path=path)
            return InstallOutcome.VERIFIED
        if not await confirm_overwrite(path):
            logger.info("Keeping existing file: {path}", path=path)
            return InstallOutcome.KEPT_EXISTING
        await _write_text(path, content)
        logger.info("Overwrote {path}", path=path)
        return InstallOutcome.OVERWRITTEN

    await _write_text(path, content)
    logger.info("Created {path}", path=path)
    return InstallOutcome.CREATED


async def install_agent(
    agent: Agent,
    project: ProjectPaths,
    *,
    confirm_overwrite: ConfirmOverwrite,
) -> AgentInstallResult:
    await aiofiles.os.makedirs(project.agents_dir, exist_ok=True)
    agent_file = project.agent_file(agent.name)
    outcome = await materialize(
        agent_file, agent.to_document(), confirm_overwrite=confirm_overwrite
    )
    return AgentInstallResult(agent_file=agent_file, outcome=outcome)


def render_hook_script(hook: Hook) -> str:
    """Shell script that runs the hook command, headed by its description as comments."""
    header = "".join(f"# {line}\n" for line in hook.description.splitlines() or [""])
    return f"#!/bin/bash\n{header}{hook.command}\n"


async def install_hook(
    hook: Hook,
    project: ProjectPaths,
    *,
    confirm_overwrite: ConfirmOverwrite,
) -> HookInstallResult:
    """Install a hook script and bind it in the project's settings document.

    The two steps are independent: a verified or kept script still goes through
    the settings merge. Nothing is rolled back when a later step fails.
    """
    warnings: list[str] = []

    await aiofiles.os.makedirs(project.hooks_dir, exist_ok=True)
    script_file = project.hook_script(hook.script_name)
    script = await materialize(
        script_file, render_hook_script(hook), confirm_overwrite=confirm_overwrite
    )
    if script is InstallOutcome.VERIFIED:
        warnings.append(f"Script {hook.script_name} already exists with correct content")
    elif script is InstallOutcome.KEPT_EXISTING:
        warnings.append(f"Using existing script file {hook.script_name}")

    try:
        await asyncio.to_thread(os.chmod, script_file, SCRIPT_MODE)
    except OSError as e:
        logger.warning(
            "Failed to make {path} executable: {error}", path=script_file, error=e
        )

    settings = await read_settings(project.settings_file)
    reference = ProjectPaths.script_reference(hook.script_name)
    if merge_hook_binding(settings, hook, reference):
        await _write_text(project.settings_file, json.dumps(settings, indent=2) + "\n")
        logger.info(
            "Bound {hook} in {path}", hook=hook.name, path=project.settings_file
        )
        settings_outcome = InstallOutcome.CREATED
    else:
        warnings.append("Hook configuration already exists in settings.json")
        settings_outcome = InstallOutcome.VERIFIED

    return HookInstallResult(
        script_file=script_file,
        settings_file=project.settings_file,
        script=script,
        settings=settings_outcome,
        warnings=warnings,
    )


async def read_settings(settings_file: Path) -> dict[str, Any]:
    """Read the destination settings document; a missing file is an empty one."""
    if not await aiofiles.os.path.exists(settings_file):
        return {}
    try:
        async with aiofiles.open(settings_file, encoding="utf-8") as f:
            text = await f.read()
        document = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SettingsFileError(f"Cannot parse {settings_file} as JSON: {e}") from e
    if not isinstance(document, dict):
        raise SettingsFileError(f"{settings_file} does not contain a JSON object")
    return document


def merge_hook_binding(settings: dict[str, Any], hook: Hook, reference: str) -> bool:
    """Bind `reference` under the hook's event in `settings`, in place.

    Hooks with a matcher go into the array-of-groups form. Matcherless hooks use
    the flat map's wildcard key unless that would replace another command or the
    event is already in array form, in which case they join a matcherless group.

    Returns:
        False when an equal binding (event, matcher and reference) already exists
    """
    section = settings.setdefault("hooks", {})
    if not isinstance(section, dict):
        raise SettingsFileError("'hooks' in settings.json is not an object")

    event = event_name(hook.event_type)
    existing = section.get(event)
    if _has_binding(existing, hook.matcher, reference):
        return False

    binding: dict[str, Any] = {
        "type": "command",
        "command": reference,
        "description": hook.description,
    }
    if hook.timeout is not None:
        binding["timeout"] = hook.timeout

    if hook.matcher is None and not isinstance(existing, list):
        mapping = existing if isinstance(existing, dict) else {}
        if mapping.get(WILDCARD_MATCHER) is None:
            mapping[WILDCARD_MATCHER] = reference
            section[event] = mapping
            return True

    groups = _as_groups(existing)
    for group in groups:
        if (
            isinstance(group, dict)
            and isinstance(group.get("hooks"), list)
            and normalize_matcher(group.get("matcher")) == hook.matcher
        ):
            group["hooks"].append(binding)
            break
    else:
        group = {"hooks": [binding]}
        if hook.matcher is not None:
            group = {"matcher": hook.matcher, **group}
        groups.append(group)
    section[event] = groups
    return True


def _has_binding(existing: Any, matcher: str | None, reference: str) -> bool:
    match existing:
        case list():
            return any(
                isinstance(group, dict)
                and isinstance(group.get("hooks"), list)
                and normalize_matcher(group.get("matcher")) == matcher
                and any(
                    isinstance(binding, dict) and binding.get("command") == reference
                    for binding in group["hooks"]
                )
                for group in existing
            )
        case dict():
            return any(
                normalize_matcher(pattern) == matcher and command == reference
                for pattern, command in existing.items()
            )
        case _:
            return False


def _as_groups(existing: Any) -> list[Any]:
    """The event's bindings in array-of-groups form, converting a flat map."""
    match existing:
        case list():
            return existing
        case dict():
            return [
                {"matcher": pattern, "hooks": [{"type": "command", "command": command}]}
                for pattern, command in existing.items()
                if isinstance(command, str)
            ]
        case _:
            return []


async def _write_text(path: Path, content: str) -> None:
    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(content)
