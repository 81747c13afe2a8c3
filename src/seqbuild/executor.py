# executor.py
from __future__ import annotations

import os
import signal
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .errors import ConfigurationError, ExecutionError, InvocationError
from .model import Outcome, RunConfig, Step

# Shell conventions, so CI sees the same codes a build script would give.
EXIT_CONFIGURATION = 1
EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127
EXIT_SIGNAL_BASE = 128


TOOL_HINTS = {
    "cargo": "Install the Rust toolchain (https://rustup.rs) or fix PATH.",
    "rustup": "Install rustup (https://rustup.rs) or fix PATH.",
    "sh": "A POSIX shell is required to run asset scripts.",
    "bash": "Install bash or fix PATH.",
    "wasm-opt": "Install binaryen (provides wasm-opt) or fix PATH.",
}


@contextmanager
def pushd(path: str | Path) -> Iterator[Path]:
    """
    Enter `path` for the duration of the block.

    The previous working directory is restored on every exit path, so a
    failing step never leaves the process inside its directory.
    """
    previous = os.getcwd()
    os.chdir(path)
    try:
        yield Path(path)
    finally:
        os.chdir(previous)


def _signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"


def run_command(step: Step, config: RunConfig) -> Outcome:
    """
    Run one step's command inside its directory and report how it ended.

    Never raises for a failing step: a missing directory, a command that
    cannot start, a non-zero exit and a signal all come back as a failure
    Outcome carrying the exit code to propagate.
    """
    cwd = config.resolve(step)
    if not cwd.is_dir():
        err = ConfigurationError(
            kind="configuration",
            step=step.label,
            message=f"directory not found: {cwd}",
            details={"base_dir": str(config.base_dir), "cwd": step.cwd},
        )
        return Outcome.failure(EXIT_CONFIGURATION, err.message, err)

    env = os.environ.copy()
    env.update(config.env)

    tool = step.argv[0]
    try:
        with pushd(cwd):
            # stdout/stderr are inherited: the toolchain's output passes through untouched
            proc = subprocess.run(list(step.argv), env=env, check=False)
    except FileNotFoundError:
        err = InvocationError(
            kind="invocation",
            step=step.label,
            message=f"command not found: {tool}",
            details={"hint": TOOL_HINTS.get(tool, f"Install {tool} or fix PATH.")},
        )
        return Outcome.failure(EXIT_NOT_FOUND, err.message, err)
    except PermissionError:
        err = InvocationError(
            kind="invocation",
            step=step.label,
            message=f"command is not executable: {tool}",
            details={"hint": f"Check the permissions of {tool}."},
        )
        return Outcome.failure(EXIT_NOT_EXECUTABLE, err.message, err)
    except OSError as e:
        # e.g. ENOEXEC for a script without a shebang line
        err = InvocationError(
            kind="invocation",
            step=step.label,
            message=f"could not start {tool}: {e.strerror or e}",
            details={"errno": e.errno, "hint": f"Check that {tool} is a valid executable."},
        )
        return Outcome.failure(EXIT_NOT_EXECUTABLE, err.message, err)

    code = proc.returncode
    if code == 0:
        return Outcome.success()

    if code < 0:
        signame = _signal_name(-code)
        err = ExecutionError(
            kind="execution",
            step=step.label,
            message=f"{tool} terminated by {signame}",
            details={"signal": -code},
        )
        return Outcome.failure(EXIT_SIGNAL_BASE - code, err.message, err)

    return Outcome.failure(code, f"{tool} exited with status {code}")
