"""Agents: markdown subagent definitions resolved from two tiers."""

from __future__ import annotations

from ccc_cli.agents.loader import AgentLoader, find_agent_document
from ccc_cli.agents.models import Agent

__all__ = [
    "Agent",
    "AgentLoader",
    "find_agent_document",
]
