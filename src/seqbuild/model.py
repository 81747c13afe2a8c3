# model.py
from __future__ import annotations

import enum
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .errors import BuildError


class StepKind(str, enum.Enum):
    """What a step is for. Readability only: every kind runs the same way."""
    MODULE_BUILD = "module-build"
    ASSET_PIPELINE = "asset-pipeline"
    CROSS_TARGET_BUILD = "cross-target-build"


@dataclass(frozen=True)
class Step:
    """A single external command run inside one directory of the module tree."""
    cwd: str
    argv: Tuple[str, ...]
    kind: StepKind = StepKind.MODULE_BUILD
    name: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.argv, str):
            raise TypeError(
                f"step in {self.cwd!r}: argv must be a list of arguments, not a string "
                f"(got {self.argv!r})"
            )
        if not self.argv:
            raise ValueError(f"step in {self.cwd!r} has an empty command")
        # accept lists from workflow files, store a tuple
        object.__setattr__(self, "argv", tuple(str(a) for a in self.argv))
        object.__setattr__(self, "kind", StepKind(self.kind))

    @property
    def label(self) -> str:
        return self.name or self.cwd

    @property
    def command(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class Outcome:
    """
    Result of running one step.

    Success has exit_code 0. A failure keeps the exit code that will become
    the process exit status, a one-line reason, and the structured error when
    the command never ran or was killed.
    """
    exit_code: int = 0
    reason: str = ""
    error: Optional[BuildError] = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and self.error is None

    @classmethod
    def success(cls) -> "Outcome":
        return cls()

    @classmethod
    def failure(cls, exit_code: int, reason: str, error: Optional[BuildError] = None) -> "Outcome":
        # a failure must never look like success to the caller
        return cls(exit_code=exit_code or 1, reason=reason, error=error)


@dataclass(frozen=True)
class RunConfig:
    """
    Everything a run needs, built once by the entry point and passed down.

    base_dir is the anchor every Step.cwd resolves against; it is made
    absolute here so a later chdir cannot change its meaning.
    """
    base_dir: Path
    trace: bool = True
    fail_fast: bool = True
    env: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_dir", Path(self.base_dir).resolve())

    def resolve(self, step: Step) -> Path:
        return self.base_dir / step.cwd


@dataclass
class RunResult:
    """The steps that actually ran, in order, with their outcomes."""
    executed: List[Tuple[Step, Outcome]] = field(default_factory=list)

    @property
    def failed(self) -> Optional[Tuple[Step, Outcome]]:
        for step, outcome in self.executed:
            if not outcome.ok:
                return step, outcome
        return None

    @property
    def ok(self) -> bool:
        return self.failed is None

    @property
    def exit_code(self) -> int:
        failed = self.failed
        return 0 if failed is None else failed[1].exit_code
