# errors.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BuildError(Exception):
    """
    Structured build error with enough context for:
      - clean CLI output
      - telling configuration, invocation and execution failures apart
      - debugging without full tracebacks
    """
    kind: str
    step: str | None
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        if self.step:
            lines.append(f"step={self.step}")
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


class ConfigurationError(BuildError):
    """A step's directory does not exist under the base directory."""


class InvocationError(BuildError):
    """The external command could not be started (not found, not executable)."""


class ExecutionError(BuildError):
    """The external command ran and exited non-zero or was killed by a signal."""


class WorkflowError(BuildError):
    """A workflow file is missing or does not define a list of steps."""
