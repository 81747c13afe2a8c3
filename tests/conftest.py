"""Shared fixtures: a throwaway module tree and python-based stand-in commands."""

import sys

import pytest

from seqbuild.model import Outcome, Step


def py(code: str) -> tuple:
    """argv running a snippet with the current interpreter."""
    return (sys.executable, "-c", code)


BUILD_OK = py("raise SystemExit(0)")
BUILD_FAIL = py("raise SystemExit(3)")
TOUCH_RAN = py("open('ran', 'w').close()")


class Recorder:
    """Executor stand-in that records invocations and fails chosen steps."""

    def __init__(self, fail=None):
        self.calls = []
        self.fail = fail or {}

    def __call__(self, step, config):
        self.calls.append(step.cwd)
        code = self.fail.get(step.cwd)
        if code:
            return Outcome.failure(code, f"exited with status {code}")
        return Outcome.success()


@pytest.fixture
def tree(tmp_path):
    for name in ("lib1", "lib2", "lib3"):
        (tmp_path / name).mkdir()
    return tmp_path


@pytest.fixture
def steps():
    return [
        Step(cwd="lib1", argv=BUILD_OK),
        Step(cwd="lib2", argv=BUILD_OK),
        Step(cwd="lib3", argv=BUILD_OK),
    ]
