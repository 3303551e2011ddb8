from __future__ import annotations

from pathlib import Path

import pytest

from ccc_cli.agents.models import Agent
from ccc_cli.exception import InstallCancelled
from ccc_cli.install import InstallOutcome, install_agent, materialize
from ccc_cli.project import ProjectPaths


class Decider:
    """Records overwrite questions and answers them with a fixed reply."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.asked: list[Path] = []

    async def __call__(self, path: Path) -> bool:
        self.asked.append(path)
        return self.answer


async def _cancel(path: Path) -> bool:
    raise InstallCancelled("cancelled")


AGENT = Agent(name="reviewer", description="Reviews code", model="sonnet", content="Be careful.")


async def test_first_install_creates_file(project: ProjectPaths):
    decider = Decider()
    result = await install_agent(AGENT, project, confirm_overwrite=decider)

    assert result.outcome is InstallOutcome.CREATED
    assert result.agent_file == project.root / ".claude" / "agents" / "reviewer.md"
    assert result.agent_file.read_text(encoding="utf-8") == AGENT.to_document()
    assert decider.asked == []


async def test_second_install_is_verified_without_writes(project: ProjectPaths):
    decider = Decider()
    first = await install_agent(AGENT, project, confirm_overwrite=decider)
    mtime = first.agent_file.stat().st_mtime_ns

    second = await install_agent(AGENT, project, confirm_overwrite=decider)

    assert second.outcome is InstallOutcome.VERIFIED
    assert first.agent_file.stat().st_mtime_ns == mtime
    assert decider.asked == []


async def test_whitespace_only_difference_is_verified(project: ProjectPaths):
    path = project.agent_file("reviewer")
    path.parent.mkdir(parents=True)
    path.write_text("\n\n" + AGENT.to_document() + "\n\n", encoding="utf-8")

    result = await install_agent(AGENT, project, confirm_overwrite=Decider())
    assert result.outcome is InstallOutcome.VERIFIED


async def test_different_content_overwritten_when_confirmed(project: ProjectPaths):
    path = project.agent_file("reviewer")
    path.parent.mkdir(parents=True)
    path.write_text("old", encoding="utf-8")
    decider = Decider(answer=True)

    result = await install_agent(AGENT, project, confirm_overwrite=decider)

    assert result.outcome is InstallOutcome.OVERWRITTEN
    assert decider.asked == [path]
    assert path.read_text(encoding="utf-8") == AGENT.to_document()


async def test_different_content_kept_when_declined(project: ProjectPaths):
    path = project.agent_file("reviewer")
    path.parent.mkdir(parents=True)
    path.write_text("old", encoding="utf-8")

    result = await install_agent(AGENT, project, confirm_overwrite=Decider(answer=False))

    assert result.outcome is InstallOutcome.KEPT_EXISTING
    assert path.read_text(encoding="utf-8") == "old"


async def test_cancellation_propagates(project: ProjectPaths):
    path = project.agent_file("reviewer")
    path.parent.mkdir(parents=True)
    path.write_text("old", encoding="utf-8")

    with pytest.raises(InstallCancelled):
        await install_agent(AGENT, project, confirm_overwrite=_cancel)
    assert path.read_text(encoding="utf-8") == "old"


async def test_materialize_missing_parent_propagates(tmp_path: Path):
    with pytest.raises(OSError):
        await materialize(tmp_path / "missing" / "file.txt", "x", confirm_overwrite=Decider())


async def test_undecodable_existing_file_counts_as_different(project: ProjectPaths):
    path = project.agent_file("reviewer")
    path.parent.mkdir(parents=True)
    path.write_bytes(b"\xff")
    decider = Decider(answer=False)

    result = await install_agent(AGENT, project, confirm_overwrite=decider)

    assert result.outcome is InstallOutcome.KEPT_EXISTING
    assert decider.asked == [path]
    assert path.read_bytes() == b"\xff"

    replaced = await install_agent(AGENT, project, confirm_overwrite=Decider(answer=True))
    assert replaced.outcome is InstallOutcome.OVERWRITTEN
    assert path.read_text(encoding="utf-8") == AGENT.to_document()
