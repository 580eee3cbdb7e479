# cli.py
from __future__ import annotations

import sys

import click

from taskdeck import __version__
from taskdeck.config import Settings, parse_env_pair
from taskdeck.dispatcher import Dispatcher
from taskdeck.environment import EnvironmentResolver
from taskdeck.errors import TaskdeckError, UnknownTarget
from taskdeck.loader import build_registry
from taskdeck.ui.console import Console, get_console, set_console


def _parse_env(ctx, param, values) -> list[tuple[str, str]]:
    pairs = []
    for raw in values:
        try:
            pairs.append(parse_env_pair(raw))
        except ValueError as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param)
    return pairs


_file_option = click.option(
    "--file",
    "-f",
    "targets_file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Target file path (defaults to taskdeck_targets.py if present, else the built-in rules)",
)
_env_option = click.option(
    "--env",
    "-e",
    "env_pairs",
    multiple=True,
    callback=_parse_env,
    metavar="KEY=VALUE",
    help="Add or override an overlay variable for every command (repeatable)",
)


def _setup(ctx, targets_file, env_pairs, dry_run=False):
    settings = Settings.from_env(
        extra_env=env_pairs,
        targets_file=targets_file,
        dry_run=dry_run,
        debug=ctx.obj.get("debug", False),
    )
    resolver = EnvironmentResolver(settings.overlay)
    registry = build_registry(resolver.platform(), settings.targets_file, settings.cwd)
    return settings, resolver, registry


def _fail(e: Exception, code: int = 1) -> None:
    console = get_console()
    if isinstance(e, UnknownTarget):
        console.print_taskdeck_error(e, suggestion="List available targets:\n  taskdeck list")
        sys.exit(2)
    if isinstance(e, TaskdeckError):
        console.print_taskdeck_error(e)
    else:
        console.print_exception(e)
    sys.exit(code)


@click.group()
@click.version_option(__version__, prog_name="taskdeck")
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """taskdeck: run named build targets with a shared environment."""
    set_console(Console(debug=debug))
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.argument("targets", nargs=-1)
@_file_option
@_env_option
@click.option("--dry-run", "-n", is_flag=True, default=False, help="Print commands without running them")
@click.pass_context
def run(ctx, targets, targets_file, env_pairs, dry_run):
    """Run TARGETS in order (the first declared target when none given)."""
    console = get_console()

    try:
        settings, resolver, registry = _setup(ctx, targets_file, env_pairs, dry_run)
        dispatcher = Dispatcher(registry, resolver, root=settings.cwd, dry_run=settings.dry_run)
        results = dispatcher.run_many(list(targets))
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        _fail(e)

    if len(targets) > 1:
        summary = {r.target: ("success" if r.ok else "failed") for r in results}
        for name in targets:
            summary.setdefault(name, "not run")
        console.print_results(summary)

    sys.exit(results[-1].exit_code)


@cli.command(name="list")
@_file_option
@click.pass_context
def list_targets(ctx, targets_file):
    """List available targets."""
    console = get_console()
    try:
        _settings, _resolver, registry = _setup(ctx, targets_file, [])
    except Exception as e:
        _fail(e)

    default = registry.default().name if len(registry) else None
    console.print_targets(registry, default=default)


@cli.command()
@_env_option
@click.pass_context
def info(ctx, env_pairs):
    """Show the detected platform and the environment overlay."""
    settings = Settings.from_env(extra_env=env_pairs, debug=ctx.obj.get("debug", False))
    resolver = EnvironmentResolver(settings.overlay)
    get_console().print_environment(resolver.platform(), resolver.overlay())


if __name__ == "__main__":
    cli()
