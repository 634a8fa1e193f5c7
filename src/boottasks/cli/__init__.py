"""boottasks CLI - run or inspect a boot task graph.

Usage:
    boottasks run MODULE [MODULE...] [--interval S] [--max-sweeps N]
    boottasks plan MODULE [MODULE...]
    boottasks kinds
    boottasks version

Each MODULE is a dotted module name or a path to a .py file defining a
``setup(registry)`` function that registers its tasks.

Configuration:
    BOOTTASKS_SWEEP_INTERVAL, BOOTTASKS_MAX_SWEEPS and BOOTTASKS_LOG_LEVEL
    provide the defaults for the options below.
"""

import logging

import typer

import boottasks
from boottasks.cli._loader import SetupLoadError, load_setup_modules
from boottasks.config import config_provider
from boottasks.dependencies import default_dependency_kinds
from boottasks.exceptions import SchedulerStalledError
from boottasks.registry import TaskRegistry
from boottasks.scheduler import Scheduler

app = typer.Typer(
    name="boottasks",
    help="boottasks CLI - Run boot-time tasks in dependency order",
    no_args_is_help=True,
)

EXIT_SETUP_ERROR = 1
EXIT_STALLED = 2


def _configure_logging(log_level: str | None) -> None:
    level = (log_level or config_provider.get().log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_registry(modules: list[str]) -> TaskRegistry:
    registry = TaskRegistry()
    try:
        load_setup_modules(modules, registry)
    except SetupLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_SETUP_ERROR)
    return registry


@app.command()
def run(
    modules: list[str] = typer.Argument(
        ..., help="Modules or .py files defining setup(registry)"
    ),
    interval: float | None = typer.Option(
        None,
        "--interval",
        "-i",
        min=0.0,
        help="Seconds to pause between sweeps",
    ),
    max_sweeps: int | None = typer.Option(
        None,
        "--max-sweeps",
        "-n",
        min=1,
        help="Give up after this many sweeps (default: poll forever)",
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="Logging level (e.g. DEBUG)"
    ),
) -> None:
    """Run all tasks registered by MODULES."""
    _configure_logging(log_level)
    registry = _build_registry(modules)
    scheduler = Scheduler(registry, sweep_interval=interval, max_sweeps=max_sweeps)

    try:
        summary = scheduler.run()
    except SchedulerStalledError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_STALLED)

    typer.echo(repr(summary))


@app.command()
def plan(
    modules: list[str] = typer.Argument(
        ..., help="Modules or .py files defining setup(registry)"
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="Logging level (e.g. DEBUG)"
    ),
) -> None:
    """Show the order in which tasks registered by MODULES are attempted."""
    _configure_logging(log_level)
    registry = _build_registry(modules)
    tasks = Scheduler(registry).plan()

    if not tasks:
        typer.echo("No tasks registered.")
        return

    for position, task in enumerate(tasks, start=1):
        typer.echo(
            f"{position:3d}. {task.name}"
            f"  priority={task.ux_priority}"
            f"  dependencies={len(task.dependencies)}"
        )


@app.command()
def kinds() -> None:
    """List the registered dependency kinds."""
    for name in default_dependency_kinds.names():
        typer.echo(name)


@app.command()
def version() -> None:
    """Show the boottasks version."""
    typer.echo(f"boottasks {boottasks.__version__}")


if __name__ == "__main__":
    app()
