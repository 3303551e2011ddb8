"""Decoder for the `hooks` section of a settings document.

Each event maps either to an ordered list of matcher groups::

    {"PreToolUse": [{"matcher": "Bash", "hooks": [{"type": "command", "command": "..."}]}]}

or to a flat map of tool pattern to command::

    {"PreToolUse": {"Bash": "..."}}

Both decode to the same flat list of `Hook` bindings. Malformed input never
raises; it decodes to fewer (or zero) hooks.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import aiofiles
from loguru import logger

from ccc_cli.sources import Tier

from .models import Hook, HookEventType

WILDCARD_MATCHER = "*"


def normalize_matcher(value: Any) -> str | None:
    """Return the tool pattern, or None when the binding applies to all tools."""
    if not isinstance(value, str) or value in ("", WILDCARD_MATCHER):
        return None
    return value


def decode_hook_settings(
    source_name: str,
    document: Any,
    *,
    tier: Tier | None = None,
) -> list[Hook]:
    """Decode every command binding in a parsed settings document.

    Args:
        source_name: Name of the entry the document belongs to, used to derive hook names
        document: Parsed JSON document
        tier: Source tier to tag hooks with

    Returns:
        Hooks in declaration order
    """
    if not isinstance(document, dict):
        logger.warning("Hook settings for {name} is not a JSON object", name=source_name)
        return []
    events = document.get("hooks")
    if events is None:
        return []
    if not isinstance(events, dict):
        logger.warning("'hooks' in settings for {name} is not an object", name=source_name)
        return []

    hooks: list[Hook] = []
    for event, bindings in events.items():
        match bindings:
            case list():
                hooks.extend(_decode_groups(source_name, event, bindings, tier))
            case dict():
                hooks.extend(_decode_flat_map(source_name, event, bindings, tier))
            case _:
                logger.debug(
                    "Ignoring {event} in {name}: unsupported value {value!r}",
                    event=event,
                    name=source_name,
                    value=bindings,
                )
    return hooks


async def read_hook_settings(
    source_name: str,
    settings_path: Path,
    *,
    tier: Tier | None = None,
) -> list[Hook]:
    """Read and decode a settings file; unreadable or invalid files yield no hooks."""
    try:
        async with aiofiles.open(settings_path, encoding="utf-8") as f:
            document = json.loads(await f.read())
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error(
            "Failed to parse hooks from {path}: {error}", path=settings_path, error=e
        )
        return []
    return decode_hook_settings(source_name, document, tier=tier)


def _decode_groups(
    source_name: str,
    event: str,
    groups: list[Any],
    tier: Tier | None,
) -> list[Hook]:
    hooks: list[Hook] = []
    for i, group in enumerate(groups):
        if not isinstance(group, dict) or not isinstance(group.get("hooks"), list):
            continue
        matcher = normalize_matcher(group.get("matcher"))
        for j, binding in enumerate(group["hooks"]):
            if not isinstance(binding, dict) or binding.get("type") != "command":
                continue
            command = binding.get("command")
            if not isinstance(command, str) or not command:
                continue
            description = binding.get("description")
            hooks.append(
                Hook(
                    name=f"{source_name}-{event}-{i}-{j}",
                    description=(
                        description if isinstance(description, str) and description
                        else f"{event} hook"
                    ),
                    event_type=HookEventType.coerce(event),
                    matcher=matcher,
                    command=command,
                    timeout=_timeout(binding.get("timeout")),
                    tier=tier,
                )
            )
    return hooks


def _decode_flat_map(
    source_name: str,
    event: str,
    mapping: dict[str, Any],
    tier: Tier | None,
) -> list[Hook]:
    return [
        Hook(
            name=f"{source_name}-{event}-{pattern}",
            description=f"{event} hook for {pattern}",
            event_type=HookEventType.coerce(event),
            matcher=normalize_matcher(pattern),
            command=command,
            tier=tier,
        )
        for pattern, command in mapping.items()
        if isinstance(command, str)
    ]


def _timeout(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value
