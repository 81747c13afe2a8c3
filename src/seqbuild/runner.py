# runner.py
from __future__ import annotations

import runpy
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from .errors import WorkflowError
from .executor import run_command
from .model import Outcome, RunConfig, RunResult, Step, StepKind
from .ui.console import Console

Executor = Callable[[Step, RunConfig], Outcome]

PHASE_BANNERS: Dict[StepKind, str] = {
    StepKind.MODULE_BUILD: "Building modules...",
    StepKind.ASSET_PIPELINE: "Building assets and examples...",
    StepKind.CROSS_TARGET_BUILD: "Building assets and examples...",
}


# ----------------------------------------------------------------------
# Workflow loading (local file)
# ----------------------------------------------------------------------

def load_workflow(path: str | Path) -> List[Step]:
    """
    Load a workflow from a python file path.

    The file must define either:
      - workflow() -> List[Step]
      - STEPS = [Step, ...]

    Returns:
      List[Step]
    """
    wf_path = Path(path).expanduser().resolve()
    if not wf_path.exists():
        raise WorkflowError(
            kind="workflow",
            step=None,
            message=f"Workflow file not found: {wf_path}",
        )
    if wf_path.suffix != ".py":
        raise WorkflowError(
            kind="workflow",
            step=None,
            message=f"Workflow must be a .py file, got: {wf_path.name}",
        )

    module_name = f"seqbuild_workflow_{wf_path.stem}"
    steps = None
    try:
        globals_dict = runpy.run_path(str(wf_path), run_name=module_name)
        if "workflow" in globals_dict and callable(globals_dict["workflow"]):
            steps = globals_dict["workflow"]()
        elif "STEPS" in globals_dict:
            steps = globals_dict["STEPS"]
    except Exception as e:
        raise WorkflowError(
            kind="workflow",
            step=None,
            message=f"Workflow raised while loading: {wf_path.name}",
            details={"file": str(wf_path), "error": repr(e)},
        ) from e

    if not isinstance(steps, list) or not all(isinstance(s, Step) for s in steps):
        raise WorkflowError(
            kind="workflow",
            step=None,
            message="Workflow must return/define a List[Step]. "
                    "Define workflow() -> List[Step] or STEPS = [Step, ...].",
            details={"file": str(wf_path)},
        )

    return steps


# ----------------------------------------------------------------------
# Sequencer
# ----------------------------------------------------------------------

def run_steps(
    steps: Iterable[Step],
    config: RunConfig,
    *,
    execute: Executor = run_command,
    console: Optional[Console] = None,
) -> RunResult:
    """
    Run steps one at a time, in the order given.

    Each command is echoed before it starts (when config.trace is on). The
    first failing step ends the run: nothing after it is executed and it is
    never retried. The returned RunResult holds only the steps that ran.
    """
    console = console or Console()
    result = RunResult()
    banner: Optional[str] = None

    for step in steps:
        phase = PHASE_BANNERS.get(step.kind)
        if phase and phase != banner:
            console.print_phase(phase)
            banner = phase

        if config.trace:
            console.print_trace(step.command)

        outcome = execute(step, config)
        result.executed.append((step, outcome))

        if not outcome.ok and config.fail_fast:
            break

    return result


def report(result: RunResult, total: int, console: Console) -> None:
    """Print the failing step (if any) and the one-line summary."""
    failed = result.failed
    if failed is not None:
        step, outcome = failed
        hint = None
        if outcome.error is not None:
            hint = outcome.error.details.get("hint")
        console.print_step_failed(
            step.label,
            step.command,
            outcome.exit_code,
            outcome.reason,
            hint=hint,
        )
    console.print_results(len(result.executed), total, result.ok)


def run_build(
    steps: List[Step],
    config: RunConfig,
    *,
    console: Optional[Console] = None,
    execute: Executor = run_command,
) -> int:
    """Run a whole build and return the process exit status."""
    console = console or Console()
    result = run_steps(steps, config, execute=execute, console=console)
    report(result, len(steps), console)
    return result.exit_code


def build_main(anchor: str | Path, steps: List[Step], *, trace: bool = True) -> int:
    """
    Run `steps` with the directory containing `anchor` as the base directory.

    Meant for workflow files executed directly: pass `__file__` so the build
    works no matter which directory it was started from.
    """
    config = RunConfig(base_dir=Path(anchor).resolve().parent, trace=trace)
    return run_build(steps, config)
