# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from seqbuild.errors import WorkflowError
from seqbuild.model import RunConfig
from seqbuild.runner import load_workflow, run_build
from seqbuild.ui.console import Console, get_console, set_console

DEFAULT_WORKFLOW = "seqbuild_workflow.py"


def resolve_workflow(workflow_arg: str | None, search_dir: Path | None = None) -> Path:
    """
    Pick the workflow file to build from.

    An explicit path wins (".py" may be omitted). Otherwise the search
    directory must hold exactly one candidate: seqbuild_workflow.py or a
    single *_workflow.py. Anything else exits with status 1.
    """
    console = get_console()

    if workflow_arg:
        path = Path(workflow_arg)
        if not path.exists() and path.suffix != ".py":
            path = path.with_name(path.name + ".py")
        if path.exists():
            return path
        console.print_error(
            "Workflow file not found",
            f"{workflow_arg} does not exist.",
            suggestion=f"Pass an existing file: seqbuild run --workflow path/to/{DEFAULT_WORKFLOW}",
        )
        sys.exit(1)

    search_dir = search_dir or Path(".")
    candidates = sorted({*search_dir.glob(DEFAULT_WORKFLOW), *search_dir.glob("*_workflow.py")})

    if len(candidates) == 1:
        return candidates[0]

    if not candidates:
        console.print_error(
            "No workflow file found",
            f"No {DEFAULT_WORKFLOW} or *_workflow.py in {search_dir.resolve()}.",
            suggestion="Run from the tree root or pass --workflow.",
        )
    else:
        console.print_error(
            "Multiple workflow files found",
            "Cannot choose between:",
            details=[str(c) for c in candidates],
            suggestion="Pass one of them with --workflow.",
        )
    sys.exit(1)


def _load(workflow_path: Path):
    console = get_console()
    try:
        return load_workflow(workflow_path)
    except WorkflowError as e:
        console.print_error("Failed to load workflow", e.message, details=[f"{k}={v}" for k, v in e.details.items()])
        sys.exit(1)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """seqbuild — ordered, fail-fast multi-module builds."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


workflow_option = click.option(
    "--workflow",
    default=None,
    envvar="SEQBUILD_WORKFLOW",
    help=f"Workflow file path (defaults to {DEFAULT_WORKFLOW} if present)",
)


@cli.command()
@workflow_option
@click.option("--quiet", is_flag=True, default=False, help="Do not echo commands before running them")
@click.pass_context
def run(ctx, workflow, quiet):
    """Run every step of a workflow in order, stopping at the first failure."""
    console = get_console()

    workflow_path = resolve_workflow(workflow)
    steps = _load(workflow_path)

    # steps resolve against the workflow's own directory, not the caller's cwd
    config = RunConfig(base_dir=workflow_path.resolve().parent, trace=not quiet)
    console.print_debug(f"base directory: {config.base_dir}")
    console.print_debug(f"{len(steps)} step(s) from {workflow_path}")

    try:
        code = run_build(steps, config, console=console)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    sys.exit(code)


@cli.command()
@workflow_option
@click.pass_context
def plan(ctx, workflow):
    """Print the ordered steps of a workflow without running them."""
    console = get_console()

    workflow_path = resolve_workflow(workflow)
    steps = _load(workflow_path)
    config = RunConfig(base_dir=workflow_path.resolve().parent)

    console.print_info(f"Base directory: {config.base_dir}")
    missing = 0
    for i, step in enumerate(steps, start=1):
        is_missing = not config.resolve(step).is_dir()
        missing += is_missing
        console.print_plan_step(i, step.kind.value, step.command, step.cwd, is_missing)

    if missing:
        console.print_error(
            "Missing step directories",
            f"{missing} step director{'y' if missing == 1 else 'ies'} not found under {config.base_dir}",
        )
        sys.exit(1)


if __name__ == "__main__":
    cli()
