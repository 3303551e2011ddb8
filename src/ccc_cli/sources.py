"""Two-tier source listing.

Resources come from a base tier bundled with ccc and an override tier in the
user config directory. An override entry replaces a base entry of the same name.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TypeVar

import aiofiles.os
from loguru import logger
from pydantic import BaseModel, ConfigDict


T = TypeVar("T")


class Tier(str, Enum):
    """Precedence level of a resource source."""

    BASE = "base"
    OVERRIDE = "override"


class SourceItem(BaseModel):
    """A candidate resource entry found by scanning a tier root."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path
    tier: Tier


async def scan_tier(root: Path, tier: Tier, *, support_files: bool = False) -> list[SourceItem]:
    """List the entries of one tier root in name order.

    Directories are always entries. With `support_files`, `.md` files are entries
    too, named by their stem.
    """
    if not await aiofiles.os.path.isdir(root):
        logger.debug("Source directory does not exist: {dir}", dir=root)
        return []

    items: list[SourceItem] = []
    for entry in sorted(await aiofiles.os.listdir(root)):
        path = root / entry
        if await aiofiles.os.path.isdir(path):
            items.append(SourceItem(name=entry, path=path, tier=tier))
        elif support_files and entry.endswith(".md"):
            items.append(SourceItem(name=path.stem, path=path, tier=tier))
    return items


def merge_tiers(base: list[T], override: list[T], key: str = "name") -> list[T]:
    """Merge two ordered tiers; later entries replace earlier ones with the same key.

    A replaced entry moves to the position of its replacement, so a name found in
    both tiers is listed once, among the override entries.
    """
    merged: dict[str, T] = {}
    for item in [*base, *override]:
        name = getattr(item, key)
        merged.pop(name, None)
        merged[name] = item
    return list(merged.values())


async def list_combined_items(
    base_dir: Path,
    override_dir: Path,
    *,
    support_files: bool = False,
) -> list[SourceItem]:
    """List entries from both tiers with override precedence already applied."""
    base = await scan_tier(base_dir, Tier.BASE, support_files=support_files)
    override = await scan_tier(override_dir, Tier.OVERRIDE, support_files=support_files)
    return merge_tiers(base, override)
