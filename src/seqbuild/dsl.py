# src/seqbuild/dsl.py
from __future__ import annotations

from typing import List

from .model import Step, StepKind

DEFAULT_TOOLCHAIN = "cargo"
DEFAULT_CROSS_TARGET = "wasm32-unknown-unknown"
DEFAULT_ASSET_SCRIPT = "./update-assets.sh"


# ---------------------------------------------------------------------
# Step helpers
# ---------------------------------------------------------------------

def sh(cwd: str, *argv: str, kind: StepKind = StepKind.MODULE_BUILD, name: str | None = None) -> Step:
    """Create a step running an arbitrary command in `cwd`."""
    return Step(cwd=cwd, argv=tuple(argv), kind=kind, name=name)


def module_build(path: str, *extra_args: str, toolchain: str = DEFAULT_TOOLCHAIN) -> Step:
    """Build one module with the standard toolchain invocation."""
    return Step(
        cwd=path,
        argv=(toolchain, "build", *extra_args),
        kind=StepKind.MODULE_BUILD,
    )


def asset_pipeline(path: str, script: str = DEFAULT_ASSET_SCRIPT, *args: str) -> Step:
    """Regenerate derived assets by running the asset script in `path`."""
    return Step(
        cwd=path,
        argv=(script, *args),
        kind=StepKind.ASSET_PIPELINE,
    )


def cross_target_build(
    path: str,
    target: str = DEFAULT_CROSS_TARGET,
    *,
    release: bool = True,
    toolchain: str = DEFAULT_TOOLCHAIN,
) -> Step:
    """
    Build a module for a target other than the host.

    Only the flags differ from module_build; the runner treats both the same.
    """
    argv = [toolchain, "build", "--target", target]
    if release:
        argv.append("--release")
    return Step(
        cwd=path,
        argv=tuple(argv),
        kind=StepKind.CROSS_TARGET_BUILD,
    )


# ---------------------------------------------------------------------
# Workflow helper (single-file story)
# ---------------------------------------------------------------------

def wf(*steps: Step) -> List[Step]:
    """
    Workflow definition helper.

    Users can write:
        from seqbuild.dsl import wf, module_build

        def workflow():
            return wf(
                module_build("core"),
                module_build("cli"),
            )

    Or use STEPS directly:
        STEPS = wf(module_build("core"), module_build("cli"))
    """
    for s in steps:
        if not isinstance(s, Step):
            raise TypeError(f"wf() takes Step objects, got {type(s).__name__}")
    return list(steps)
