"""Hook catalog loading from the base and override tiers."""

from __future__ import annotations

from pathlib import Path

import aiofiles.os
from loguru import logger

from ccc_cli.config import SourceDirs
from ccc_cli.constant import HOOK_SETTINGS_FILE_NAME
from ccc_cli.sources import Tier, merge_tiers

from .decoder import read_hook_settings
from .models import Hook, HookEventType, event_name


class HookLoader:
    """Discover hook bindings from settings documents in two tier roots.

    Each immediate subdirectory of a root that holds a `settings.json` is a hook
    source. Unlike agents, the tiers are merged here, after decoding, because a
    single source expands to several individually named bindings.
    """

    def __init__(self, base_dir: Path, override_dir: Path):
        self.base_dir = base_dir
        self.override_dir = override_dir
        self._cache: dict[str, Hook] = {}
        self._loaded = False

    @classmethod
    def from_dirs(cls, dirs: SourceDirs) -> HookLoader:
        return cls(dirs.base_hooks, dirs.override_hooks)

    async def load_all(self) -> list[Hook]:
        """Decode both tiers and rebuild the catalog.

        Discovery order (later overrides earlier):
        1. Base hooks (bundled with ccc)
        2. Override hooks (~/.ccc/hooks/)

        Returns:
            Hooks in catalog order
        """
        base = await self._scan_directory(self.base_dir, Tier.BASE)
        override = await self._scan_directory(self.override_dir, Tier.OVERRIDE)

        overridden = {hook.name for hook in base} & {hook.name for hook in override}
        for name in sorted(overridden):
            logger.info("Override hook '{name}' replaces the base hook", name=name)

        self._cache = {hook.name: hook for hook in merge_tiers(base, override)}
        self._loaded = True
        logger.debug(
            "Loaded {count} hooks ({base} base, {override} override)",
            count=len(self._cache),
            base=len(base),
            override=len(override),
        )
        return list(self._cache.values())

    async def get(self, name: str) -> Hook | None:
        """Get a hook by its derived name, loading the catalog on first use."""
        if not self._loaded:
            await self.load_all()
        return self._cache.get(name)

    async def list_names(self) -> list[str]:
        if not self._loaded:
            await self.load_all()
        return list(self._cache)

    async def get_by_event_type(self, event_type: HookEventType | str) -> list[Hook]:
        """Hooks bound to one event, in catalog order."""
        if not self._loaded:
            await self.load_all()
        wanted = event_name(event_type)
        return [hook for hook in self._cache.values() if event_name(hook.event_type) == wanted]

    async def reload(self) -> list[Hook]:
        self._cache.clear()
        self._loaded = False
        logger.debug("Hook catalog invalidated")
        return await self.load_all()

    async def _scan_directory(self, hooks_dir: Path, tier: Tier) -> list[Hook]:
        """Decode every hook source under one tier root, in entry name order."""
        if not await aiofiles.os.path.isdir(hooks_dir):
            logger.debug("Hooks directory does not exist: {dir}", dir=hooks_dir)
            return []

        hooks: list[Hook] = []
        try:
            entries = sorted(await aiofiles.os.listdir(hooks_dir))
        except OSError as e:
            logger.error("Failed to load hooks from {dir}: {error}", dir=hooks_dir, error=e)
            return []

        for entry in entries:
            settings_path = hooks_dir / entry / HOOK_SETTINGS_FILE_NAME
            if not await aiofiles.os.path.isfile(settings_path):
                continue
            decoded = await read_hook_settings(entry, settings_path, tier=tier)
            logger.debug(
                "Decoded {count} hook(s) from {path}", count=len(decoded), path=settings_path
            )
            hooks.extend(decoded)
        return hooks
