from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ccc_cli.sources import Tier


class HookEventType(str, Enum):
    """Events Claude Code can bind hooks to."""

    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"
    NOTIFICATION = "Notification"
    USER_PROMPT_SUBMIT = "UserPromptSubmit"
    STOP = "Stop"
    SUBAGENT_STOP = "SubagentStop"
    PRE_COMPACT = "PreCompact"
    SESSION_START = "SessionStart"

    @classmethod
    def coerce(cls, value: str) -> HookEventType | str:
        """Return the enum member for a known event name, else the name itself."""
        try:
            return cls(value)
        except ValueError:
            return value


HOOK_EVENT_ICONS: dict[str, str] = {
    "PreToolUse": "🔒",
    "PostToolUse": "✅",
    "Notification": "📢",
    "UserPromptSubmit": "💬",
    "Stop": "🛑",
    "SubagentStop": "🤖",
    "PreCompact": "📦",
    "SessionStart": "🚀",
}

HOOK_EVENT_HINTS: dict[str, str] = {
    "PreToolUse": "Runs before tool execution",
    "PostToolUse": "Runs after tool execution",
    "Notification": "Triggered by system notifications",
    "UserPromptSubmit": "Runs when user submits a prompt",
    "Stop": "Runs when main agent finishes",
    "SubagentStop": "Runs when subagent finishes",
    "PreCompact": "Runs before context compaction",
    "SessionStart": "Runs at session initialization",
}

DEFAULT_HOOK_ICON = "🎣"

_HOOK_NAME_RE = re.compile(r"^[a-z0-9-]+$")


def event_name(event_type: HookEventType | str) -> str:
    """Plain event name as written in settings documents."""
    return event_type.value if isinstance(event_type, HookEventType) else event_type


def hook_event_icon(event_type: HookEventType | str) -> str:
    return HOOK_EVENT_ICONS.get(event_name(event_type), DEFAULT_HOOK_ICON)


def is_valid_hook_name(name: str) -> bool:
    """Custom hook names: lowercase letters, numbers and hyphens only."""
    return bool(_HOOK_NAME_RE.match(name))


class Hook(BaseModel):
    """A single event binding, individually addressable by its derived name."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Derived binding name, also the installed script stem")
    description: str = Field(default="", description="Human-readable summary")
    event_type: HookEventType | str = Field(description="Event the binding fires on")
    matcher: str | None = Field(
        default=None, description="Tool pattern; None means the binding applies to all tools"
    )
    command: str = Field(description="Shell command to run")
    timeout: int | float | None = Field(default=None, description="Timeout in seconds")
    tier: Tier | None = Field(default=None, description="Source tier the hook came from")

    @field_validator("event_type", mode="before")
    @classmethod
    def _known_event_as_enum(cls, value: object) -> object:
        if isinstance(value, str) and not isinstance(value, HookEventType):
            return HookEventType.coerce(value)
        return value

    @property
    def script_name(self) -> str:
        return f"{self.name}.sh"
