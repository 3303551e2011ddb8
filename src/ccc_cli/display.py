from __future__ import annotations

from pathlib import Path

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ccc_cli.agents.models import Agent
from ccc_cli.hooks.models import Hook, event_name, hook_event_icon
from ccc_cli.install import AgentInstallResult, HookInstallResult, InstallOutcome
from ccc_cli.sources import Tier

_OUTCOME_ACTIONS = {
    InstallOutcome.CREATED: "Created",
    InstallOutcome.OVERWRITTEN: "Updated",
}


def _tier_tag(tier: Tier | None) -> str:
    return f"[dim]\\[{tier.value}][/dim]" if tier is not None else ""


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def display_agents(console: Console, agents: list[Agent]) -> None:
    """Print the agent catalog."""
    if not agents:
        console.print(
            Panel(
                "No agents available. Add agents to ~/.ccc/agents or the system agents "
                "directory.",
                title="🤖 Available Agents",
                border_style="dim",
            )
        )
        return

    table = Table(title="🤖 Available Agents", header_style="bold cyan", padding=(0, 1))
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Model", style="dim")
    table.add_column("Source", no_wrap=True)
    for agent in agents:
        table.add_row(
            agent.name, escape(agent.description), agent.model or "", _tier_tag(agent.tier)
        )
    console.print(table)


def display_hooks(console: Console, hooks: list[Hook]) -> None:
    """Print the hook catalog with event icons."""
    if not hooks:
        console.print(
            Panel(
                "No hooks available. Add hooks to ~/.ccc/hooks or the system hooks directory.",
                title="🎣 Available Hooks",
                border_style="dim",
            )
        )
        return

    table = Table(title="🎣 Available Hooks", header_style="bold cyan", padding=(0, 1))
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Event", no_wrap=True)
    table.add_column("Matcher")
    table.add_column("Description")
    for hook in hooks:
        table.add_row(
            hook.name,
            f"{hook_event_icon(hook.event_type)} {event_name(hook.event_type)}",
            escape(hook.matcher) if hook.matcher else "[dim]all tools[/dim]",
            f"{escape(hook.description)} {_tier_tag(hook.tier)}".rstrip(),
        )
    console.print(table)


def display_agent_result(console: Console, result: AgentInstallResult, root: Path) -> None:
    path = _relative(result.agent_file, root)
    match result.outcome:
        case InstallOutcome.VERIFIED:
            console.print(f"[yellow]Agent already installed:[/yellow] {path}")
        case InstallOutcome.KEPT_EXISTING:
            console.print(f"[yellow]Kept existing agent file:[/yellow] {path}")
        case _:
            action = _OUTCOME_ACTIONS[result.outcome]
            console.print(f"[green]✓ {action} agent:[/green] [cyan]{path}[/cyan]")


def display_hook_result(
    console: Console, hook: Hook, result: HookInstallResult, root: Path
) -> None:
    """Print what a hook installation did, with any warnings first."""
    if result.warnings:
        console.print(
            Panel(
                "\n".join(f"⚠️  {warning}" for warning in result.warnings),
                title="Warnings",
                border_style="yellow",
            )
        )

    actions: list[str] = []
    if result.script in _OUTCOME_ACTIONS:
        actions.append(
            f"✓ {_OUTCOME_ACTIONS[result.script]} script: "
            f"[cyan]{_relative(result.script_file, root)}[/cyan]"
        )
    if result.settings is InstallOutcome.CREATED:
        actions.append(
            f"✓ Updated configuration: [cyan]{_relative(result.settings_file, root)}[/cyan]"
        )
    if not actions:
        actions.append("✓ Verified existing installation")

    details = Table(show_header=False, box=None, padding=(0, 1))
    details.add_column("Key", style="bold")
    details.add_column("Value")
    details.add_row("Hook", f"[cyan]{hook.name}[/cyan]")
    details.add_row(
        "Event", f"{hook_event_icon(hook.event_type)} {event_name(hook.event_type)}"
    )
    details.add_row("Matcher", escape(hook.matcher or "all tools"))
    details.add_row("Script", f"[dim]{result.script_file}[/dim]")
    details.add_row("Config", f"[dim]{result.settings_file}[/dim]")

    console.print(
        Panel(
            Group(details, Text(""), Text.from_markup("\n".join(actions))),
            title="🎉 Hook Installation Complete",
            border_style="green",
        )
    )
