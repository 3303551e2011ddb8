from __future__ import annotations

import importlib.metadata

NAME = importlib.metadata.metadata("ccc-cli")["Name"]
VERSION = importlib.metadata.version("ccc-cli")

TOOL_DIR_NAME = ".claude"
AGENTS_SUBDIR = "agents"
HOOKS_SUBDIR = "hooks"
SETTINGS_FILE_NAME = "settings.json"
HOOK_SETTINGS_FILE_NAME = "settings.json"
PROJECT_DIR_VAR = "$CLAUDE_PROJECT_DIR"
