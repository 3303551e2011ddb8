import asyncio
import sys
from collections.abc import Callable, Coroutine, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ccc_cli.constant import VERSION

if TYPE_CHECKING:
    from ccc_cli.config import SourceDirs
    from ccc_cli.hooks import Hook
    from ccc_cli.sources import Tier

_LOG_LEVEL_OPTION = "--log-level"
_DEFAULT_LOG_LEVEL_KEY = "default"
_CUSTOM_HOOK_CHOICE = "custom"

console = Console()


@dataclass(frozen=True, slots=True)
class CliContext:
    work_dir: Path
    sources: "SourceDirs"
    echo: Callable[..., None]


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(VERSION)
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Print verbose information. Default: no.",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log debug information. Default: no.",
)
@click.option(
    "--log-level",
    "-L",
    "log_level_override",
    multiple=True,
    help=(
        "Override log level per module. Use `module=LEVEL` to target a specific module "
        "(e.g. `-L ccc_cli.hooks=DEBUG`) or just `LEVEL` to change the default level."
    ),
)
@click.option(
    "--work-dir",
    "-w",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Project directory to install into. Default: current directory.",
)
@click.pass_context
def ccc(
    ctx: click.Context,
    verbose: bool,
    debug: bool,
    log_level_override: tuple[str, ...],
    work_dir: Path | None,
):
    """Install Claude Code agents and hooks into a ccc-managed project."""
    from ccc_cli.config import SourceDirs, load_config
    from ccc_cli.exception import ConfigError
    from ccc_cli.share import get_config_dir
    from ccc_cli.utils.logging import configure_file_logging

    def _noop_echo(*args: Any, **kwargs: Any):
        pass

    echo: Callable[..., None] = click.echo if verbose else _noop_echo

    try:
        config = load_config()
    except ConfigError:
        sys.exit(1)

    logger.enable("ccc_cli")
    module_levels = _resolve_log_levels(config.logging.levels, log_level_override)
    base_level = "TRACE" if debug else "INFO"
    try:
        configure_file_logging(
            get_config_dir() / "logs" / "ccc.log",
            base_level=base_level,
            module_levels=module_levels,
        )
    except ValueError as exc:
        raise click.BadOptionUsage(_LOG_LEVEL_OPTION, str(exc)) from exc

    sources = SourceDirs.resolve(config)
    echo(f"✓ Base agents: {sources.base_agents}")
    echo(f"✓ Override agents: {sources.override_agents}")
    echo(f"✓ Base hooks: {sources.base_hooks}")
    echo(f"✓ Override hooks: {sources.override_hooks}")

    ctx.obj = CliContext(
        work_dir=(work_dir or Path.cwd()).absolute(),
        sources=sources,
        echo=echo,
    )


@ccc.command("add-agent")
@click.option("--agent", "-a", "agent_name", default=None, help="Name of the agent to add.")
@click.option("--list", "-l", "list_", is_flag=True, default=False, help="List available agents.")
@click.pass_obj
def add_agent(obj: CliContext, agent_name: str | None, list_: bool):
    """Add an agent to the current project."""
    _run(_add_agent(obj, agent_name, list_))


@ccc.command("add-hook")
@click.option("--hook", "-k", "hook_name", default=None, help="Name of the hook to add.")
@click.option("--list", "-l", "list_", is_flag=True, default=False, help="List available hooks.")
@click.pass_obj
def add_hook(obj: CliContext, hook_name: str | None, list_: bool):
    """Add a hook to the current project."""
    _run(_add_hook(obj, hook_name, list_))


def _run(coro: Coroutine[Any, Any, None]) -> None:
    from ccc_cli.exception import CccError, InstallCancelled

    try:
        asyncio.run(coro)
    except InstallCancelled as e:
        console.print(f"[yellow]{e}[/yellow]")
    except CccError:
        # already reported when raised
        sys.exit(1)
    except OSError as e:
        logger.exception("Installation failed")
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


async def _ensure_managed(work_dir: Path) -> None:
    from ccc_cli.exception import ProjectNotManagedError
    from ccc_cli.project import is_project_managed
    from ccc_cli.share import get_storage_dir

    if not await is_project_managed(work_dir, storage_dir=get_storage_dir()):
        raise ProjectNotManagedError(
            'Current directory is not CCC-managed. Run "ccc setup" first.'
        )


async def _add_agent(obj: CliContext, agent_name: str | None, list_: bool) -> None:
    from ccc_cli.agents import AgentLoader
    from ccc_cli.display import display_agent_result, display_agents
    from ccc_cli.exception import ResourceNotFoundError
    from ccc_cli.install import install_agent
    from ccc_cli.project import ProjectPaths

    await _ensure_managed(obj.work_dir)
    loader = AgentLoader.from_dirs(obj.sources)

    if list_:
        display_agents(console, await loader.load_all())
        return

    if agent_name is None:
        agents = await loader.load_all()
        agent_name = _select(
            "Select an agent to add",
            [
                (agent.name, f"{agent.name}  [dim]{escape(agent.description)}[/dim]")
                for agent in agents
            ],
            empty_message="No agents available.",
        )

    agent = await loader.get(agent_name)
    if agent is None:
        raise ResourceNotFoundError(f"Agent not found: {agent_name}")

    project = ProjectPaths(obj.work_dir)
    obj.echo(
        f"✓ Installing agent {agent.name} ({_tier_label(agent.tier)}) into {project.agents_dir}"
    )
    result = await install_agent(agent, project, confirm_overwrite=_confirm_overwrite)
    display_agent_result(console, result, obj.work_dir)


async def _add_hook(obj: CliContext, hook_name: str | None, list_: bool) -> None:
    from ccc_cli.display import display_hook_result, display_hooks
    from ccc_cli.exception import ResourceNotFoundError
    from ccc_cli.hooks import HookLoader, hook_event_icon
    from ccc_cli.install import install_hook
    from ccc_cli.project import ProjectPaths

    await _ensure_managed(obj.work_dir)
    loader = HookLoader.from_dirs(obj.sources)

    if list_:
        display_hooks(console, await loader.load_all())
        return

    if hook_name is None:
        hooks = await loader.load_all()
        options = [
            (
                hook.name,
                f"{hook_event_icon(hook.event_type)} {hook.name}  "
                f"[dim]{escape(hook.description)}[/dim]",
            )
            for hook in hooks
        ]
        options.append(
            (_CUSTOM_HOOK_CHOICE, "✨ Create custom hook  [dim]Define your own hook[/dim]")
        )
        hook_name = _select("Select a hook to add", options)

    if hook_name == _CUSTOM_HOOK_CHOICE:
        hook = _prompt_custom_hook()
    else:
        hook = await loader.get(hook_name)
        if hook is None:
            raise ResourceNotFoundError(f"Hook not found: {hook_name}")

    project = ProjectPaths(obj.work_dir)
    obj.echo(
        f"✓ Installing hook {hook.name} ({_tier_label(hook.tier)}) into {project.hooks_dir}"
    )
    result = await install_hook(hook, project, confirm_overwrite=_confirm_overwrite)
    display_hook_result(console, hook, result, obj.work_dir)


def _tier_label(tier: "Tier | None") -> str:
    return f"{tier.value} tier" if tier is not None else "custom"


def _select(
    message: str, options: list[tuple[str, str]], *, empty_message: str | None = None
) -> str:
    """Print a numbered menu and return the value of the chosen option."""
    from ccc_cli.exception import InstallCancelled

    if not options:
        raise InstallCancelled(empty_message or "Nothing to select.")

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("No.", style="bold cyan", justify="right")
    table.add_column("Option")
    for index, (_, label) in enumerate(options, start=1):
        table.add_row(f"{index}.", label)
    console.print(table)

    try:
        choice = click.prompt(message, type=click.IntRange(1, len(options)))
    except click.Abort as e:
        raise InstallCancelled("Installation cancelled") from e
    return options[choice - 1][0]


async def _confirm_overwrite(path: Path) -> bool:
    from ccc_cli.exception import InstallCancelled

    try:
        return click.confirm(
            f"{path.name} already exists with different content. Overwrite?", default=False
        )
    except click.Abort as e:
        raise InstallCancelled("Installation cancelled") from e


def _prompt_custom_hook() -> "Hook":
    from ccc_cli.exception import InstallCancelled
    from ccc_cli.hooks import HOOK_EVENT_HINTS, Hook, HookEventType, hook_event_icon
    from ccc_cli.hooks.decoder import normalize_matcher

    events = Table(show_header=False, box=None, padding=(0, 1))
    events.add_column("Event")
    events.add_column("Hint", style="dim")
    for event in HookEventType:
        events.add_row(f"{hook_event_icon(event)} {event.value}", HOOK_EVENT_HINTS[event.value])

    try:
        name = click.prompt("Hook name", value_proc=_validate_hook_name)
        description = click.prompt("Hook description", default="", show_default=False)
        console.print(events)
        event_type = click.prompt(
            "Hook event type",
            type=click.Choice([event.value for event in HookEventType]),
        )
        matcher = click.prompt(
            "Tool matcher pattern (optional, e.g. Bash, Read, Bash(git *:*))",
            default="",
            show_default=False,
        )
        command = click.prompt("Hook command")
    except click.Abort as e:
        raise InstallCancelled("Hook creation cancelled") from e

    return Hook(
        name=name,
        description=description.strip() or "Custom hook",
        event_type=event_type,
        matcher=normalize_matcher(matcher.strip()),
        command=command,
    )


def _validate_hook_name(value: str) -> str:
    from ccc_cli.hooks import is_valid_hook_name

    value = value.strip()
    if not is_valid_hook_name(value):
        raise click.BadParameter("Use lowercase letters, numbers, and hyphens only")
    return value


def _resolve_log_levels(
    config_levels: Mapping[str, str], overrides: tuple[str, ...]
) -> dict[str, str]:
    """Module levels from the config file, with `--log-level` entries taking precedence.

    Keys from both sources are normalized first so `CCC_CLI.Hooks` in the config and
    `ccc_cli.hooks` on the command line address the same module.
    """
    levels = {_normalize_module_key(module): level for module, level in config_levels.items()}
    levels.update(_parse_log_level_overrides(overrides))
    return levels


def _parse_log_level_overrides(values: tuple[str, ...]) -> dict[str, str]:
    return dict(_parse_log_level_entry(raw) for raw in values)


def _parse_log_level_entry(raw: str) -> tuple[str, str]:
    entry = raw.strip()
    if not entry:
        raise click.BadOptionUsage(_LOG_LEVEL_OPTION, "Log level override cannot be empty")
    module, sep, level = entry.rpartition("=")
    if sep and not module.strip():
        raise click.BadOptionUsage(
            _LOG_LEVEL_OPTION, "Module name is required before '=' when using --log-level"
        )
    if not level.strip():
        raise click.BadOptionUsage(_LOG_LEVEL_OPTION, "Log level cannot be empty")
    return _normalize_module_key(module), level.strip()


def _normalize_module_key(module: str) -> str:
    return module.strip().rstrip(".").lower() or _DEFAULT_LOG_LEVEL_KEY


def main():
    ccc()


if __name__ == "__main__":
    main()
