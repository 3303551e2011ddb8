from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ccc_cli.frontmatter import parse_frontmatter, render_frontmatter
from ccc_cli.sources import Tier


class Agent(BaseModel):
    """A subagent definition installed as `.claude/agents/<name>.md`."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Agent name, also the installed file stem")
    description: str = Field(default="", description="What the agent is for")
    model: str | None = Field(default=None, description="Model override")
    color: str | None = Field(default=None, description="Display color")
    tools: str | None = Field(default=None, description="Comma-separated tool allowlist")
    content: str = Field(default="", description="Markdown body without frontmatter")
    tier: Tier | None = Field(default=None, description="Source tier the agent came from")

    @classmethod
    def from_document(cls, name: str, text: str, tier: Tier | None = None) -> Agent:
        """Build an agent from a markdown document.

        The `name` header field wins over the entry name it was discovered under.
        """
        fields, body = parse_frontmatter(text)
        return cls(
            name=fields.get("name") or name,
            description=fields.get("description", ""),
            model=fields.get("model") or None,
            color=fields.get("color") or None,
            tools=fields.get("tools") or None,
            content=body.strip(),
            tier=tier,
        )

    def to_document(self) -> str:
        """Regenerate the installed document with a fixed header field order."""
        return render_frontmatter(
            {
                "name": self.name,
                "description": self.description,
                "model": self.model,
                "color": self.color,
                "tools": self.tools,
            },
            self.content,
        )
