from __future__ import annotations

from ccc_cli.hooks.models import (
    DEFAULT_HOOK_ICON,
    Hook,
    HookEventType,
    event_name,
    hook_event_icon,
    is_valid_hook_name,
)


class TestHookEventType:
    def test_values(self):
        assert [e.value for e in HookEventType] == [
            "PreToolUse",
            "PostToolUse",
            "Notification",
            "UserPromptSubmit",
            "Stop",
            "SubagentStop",
            "PreCompact",
            "SessionStart",
        ]

    def test_coerce(self):
        assert HookEventType.coerce("Stop") is HookEventType.STOP
        assert HookEventType.coerce("FutureEvent") == "FutureEvent"


class TestHook:
    def test_known_event_becomes_enum(self):
        hook = Hook(name="x", event_type="PreToolUse", command="true")
        assert hook.event_type is HookEventType.PRE_TOOL_USE
        assert hook.matcher is None
        assert hook.timeout is None

    def test_unknown_event_kept_as_string(self):
        hook = Hook(name="x", event_type="FutureEvent", command="true")
        assert hook.event_type == "FutureEvent"
        assert not isinstance(hook.event_type, HookEventType)

    def test_script_name(self):
        assert Hook(name="fmt", event_type="Stop", command="true").script_name == "fmt.sh"


def test_event_name_and_icons():
    assert event_name(HookEventType.PRE_COMPACT) == "PreCompact"
    assert event_name("Other") == "Other"
    assert hook_event_icon(HookEventType.PRE_TOOL_USE) == "🔒"
    assert hook_event_icon("SessionStart") == "🚀"
    assert hook_event_icon("Other") == DEFAULT_HOOK_ICON


def test_is_valid_hook_name():
    assert is_valid_hook_name("lint-on-save")
    assert is_valid_hook_name("hook2")
    assert not is_valid_hook_name("")
    assert not is_valid_hook_name("Lint")
    assert not is_valid_hook_name("my_hook")
    assert not is_valid_hook_name("a b")
