"""Agent catalog loading from the base and override tiers."""

from __future__ import annotations

from pathlib import Path

import aiofiles
import aiofiles.os
from loguru import logger

from ccc_cli.config import SourceDirs
from ccc_cli.sources import SourceItem, Tier, list_combined_items, merge_tiers

from .models import Agent

AGENT_SUFFIX = ".md"


class AgentLoader:
    """Resolves agents and keeps a name-keyed catalog for one command invocation.

    Sources are listed with override precedence already applied, so each entry is
    parsed once and the catalog order is the order of the merged listing.
    """

    def __init__(self, base_dir: Path, override_dir: Path):
        self.base_dir = base_dir
        self.override_dir = override_dir
        self._cache: dict[str, Agent] = {}
        self._loaded = False

    @classmethod
    def from_dirs(cls, dirs: SourceDirs) -> AgentLoader:
        return cls(dirs.base_agents, dirs.override_agents)

    async def load_all(self) -> list[Agent]:
        """Resolve every agent entry and rebuild the catalog.

        Returns:
            Agents in catalog order
        """
        items = await list_combined_items(self.base_dir, self.override_dir, support_files=True)

        agents: list[Agent] = []
        for item in items:
            agent = await self._load_item(item)
            if agent is not None:
                agents.append(agent)

        self._cache = {agent.name: agent for agent in merge_tiers(agents, [])}
        self._loaded = True

        base_count = sum(1 for item in items if item.tier is Tier.BASE)
        logger.debug(
            "Loaded {count} agents ({base} base, {override} override)",
            count=len(agents),
            base=base_count,
            override=len(items) - base_count,
        )
        return list(self._cache.values())

    async def get(self, name: str) -> Agent | None:
        """Get an agent by name, loading the catalog on first use."""
        if not self._loaded:
            await self.load_all()
        return self._cache.get(name)

    async def list_names(self) -> list[str]:
        if not self._loaded:
            await self.load_all()
        return list(self._cache)

    async def reload(self) -> list[Agent]:
        self._cache.clear()
        self._loaded = False
        return await self.load_all()

    async def _load_item(self, item: SourceItem) -> Agent | None:
        try:
            if await aiofiles.os.path.isdir(item.path):
                document = await find_agent_document(item.path, item.name)
                if document is None:
                    logger.warning("Agent {name} has no markdown files", name=item.name)
                    return None
            elif item.path.suffix == AGENT_SUFFIX:
                document = item.path
            else:
                logger.debug("Skipping non-markdown agent entry: {path}", path=item.path)
                return None

            async with aiofiles.open(document, encoding="utf-8") as f:
                text = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to load agent {name}: {error}", name=item.name, error=e)
            return None

        return Agent.from_document(item.name, text, tier=item.tier)


async def find_agent_document(agent_dir: Path, name: str) -> Path | None:
    """Pick the markdown document describing an agent directory.

    Prefers `<name>.md`; otherwise the first markdown file in name order.
    """
    candidates = sorted(
        entry for entry in await aiofiles.os.listdir(agent_dir) if entry.endswith(AGENT_SUFFIX)
    )
    if not candidates:
        return None
    preferred = f"{name}{AGENT_SUFFIX}"
    return agent_dir / (preferred if preferred in candidates else candidates[0])
