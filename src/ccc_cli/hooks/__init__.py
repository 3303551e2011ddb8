"""Hooks: event bindings decoded from settings documents in two tiers."""

from __future__ import annotations

from ccc_cli.hooks.decoder import decode_hook_settings, normalize_matcher, read_hook_settings
from ccc_cli.hooks.loader import HookLoader
from ccc_cli.hooks.models import (
    DEFAULT_HOOK_ICON,
    HOOK_EVENT_HINTS,
    HOOK_EVENT_ICONS,
    Hook,
    HookEventType,
    event_name,
    hook_event_icon,
    is_valid_hook_name,
)

__all__ = [
    # Models
    "Hook",
    "HookEventType",
    "HOOK_EVENT_ICONS",
    "HOOK_EVENT_HINTS",
    "DEFAULT_HOOK_ICON",
    "event_name",
    "hook_event_icon",
    "is_valid_hook_name",
    # Decoder
    "decode_hook_settings",
    "read_hook_settings",
    "normalize_matcher",
    # Loader
    "HookLoader",
]
