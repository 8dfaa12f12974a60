# cli.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import click

from jobdag import settings
from jobdag.dag import preprocess_dag
from jobdag.errors import (
    STAGE_EXECUTE,
    STAGE_LOAD,
    STAGE_VALIDATE,
    JobDagError,
    LoadError,
)
from jobdag.loader import load_graph
from jobdag.model import JobGraph
from jobdag.runner import execute_dag
from jobdag.ui.console import Console, get_console, set_console

EXIT_CODES = {
    STAGE_LOAD: 1,
    STAGE_VALIDATE: 2,
    STAGE_EXECUTE: 3,
}

ERROR_TITLES = {
    STAGE_LOAD: "Failed to load workflow",
    STAGE_VALIDATE: "Invalid job graph",
    STAGE_EXECUTE: "Job failed",
}


def find_workflow_files() -> List[Path]:
    """Find the default workflow files present in the current directory."""
    current_dir = Path(".")
    return [current_dir / name for name in settings.WORKFLOW_CANDIDATES if (current_dir / name).exists()]


def discover_workflow(workflow_arg: str | None) -> str:
    """
    Pick the workflow source.

    Order: --workflow, then $JOBDAG_WORKFLOW, then a default file in the
    current directory, then stdin ("-").

    Raises:
        LoadError: If more than one default workflow file exists
    """
    if workflow_arg:
        return workflow_arg
    if settings.WORKFLOW:
        return settings.WORKFLOW

    workflow_files = find_workflow_files()
    if len(workflow_files) > 1:
        names = ", ".join(str(f) for f in workflow_files)
        raise LoadError(f"Multiple workflow files found: {names}. Use --workflow to pick one.")
    if workflow_files:
        return str(workflow_files[0])
    return "-"


def _load_and_validate(workflow: str | None) -> tuple[str, JobGraph, list[str]]:
    console = get_console()

    source = discover_workflow(workflow)
    console.print_debug(f"workflow source: {source}")
    graph = load_graph(source)
    console.print_debug(f"loaded {len(graph)} job(s)")

    ids_ordered = preprocess_dag(graph)
    console.print_debug(f"order: {ids_ordered}")
    return source, graph, ids_ordered


def _fail(ctx: click.Context, exc: JobDagError) -> None:
    console = get_console()
    details = [f"{k}={v}" for k, v in exc.details.items()]
    console.print_error(ERROR_TITLES[exc.stage], str(exc), details=details or None)
    if ctx.obj.get("debug", False):
        console.print_exception(exc)
    sys.exit(EXIT_CODES[exc.stage])


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=settings.DEBUG,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """jobdag: run shell jobs in dependency order."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.option(
    "--workflow",
    "-w",
    default=None,
    help="Workflow file (.json or .py), or '-' for stdin",
)
@click.option("--cwd", default=None, type=click.Path(file_okay=False), help="Directory to run commands in")
@click.option("--shell", default=settings.SHELL, help="Shell executable used to run commands")
@click.pass_context
def run(ctx, workflow, cwd, shell):
    """Validate a workflow and run its jobs in order."""
    console = get_console()

    try:
        source, graph, ids_ordered = _load_and_validate(workflow)

        console.print_run_started(
            workflow="<stdin>" if source == "-" else Path(source).name,
            job_count=len(graph),
        )

        results = execute_dag(graph, ids_ordered, cwd=cwd, shell=shell, console=console)
        console.print_results(results)

    except JobDagError as e:
        _fail(ctx, e)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@click.option(
    "--workflow",
    "-w",
    default=None,
    help="Workflow file (.json or .py), or '-' for stdin",
)
@click.pass_context
def plan(ctx, workflow):
    """Validate a workflow and print the execution order without running it."""
    console = get_console()

    try:
        _source, _graph, ids_ordered = _load_and_validate(workflow)
        console.print_plan(ids_ordered)

    except JobDagError as e:
        _fail(ctx, e)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


if __name__ == "__main__":
    cli()
