from .dsl import sh, module_build, asset_pipeline, cross_target_build, wf
from .runner import run_steps, run_build, build_main, load_workflow
from .model import Step, StepKind, Outcome, RunConfig, RunResult

__all__ = [
    "sh", "module_build", "asset_pipeline", "cross_target_build", "wf",
    "run_steps", "run_build", "build_main", "load_workflow",
    "Step", "StepKind", "Outcome", "RunConfig", "RunResult",
]
