"""End-to-end tests for the seqbuild command line."""

import pytest
from click.testing import CliRunner

from seqbuild.cli import cli

WORKFLOW = """\
import sys
from seqbuild.dsl import sh, wf

def py(code):
    return (sys.executable, "-c", code)

def workflow():
    return wf(
        sh("lib1", *py("open('ran', 'w').close()")),
        sh("lib2", *py("raise SystemExit({code})")),
        sh("lib3", *py("open('ran', 'w').close()")),
    )
"""


@pytest.fixture
def workflow_file(tree):
    def write(code=0):
        path = tree / "seqbuild_workflow.py"
        path.write_text(WORKFLOW.format(code=code))
        return path
    return write


def test_run_success(tree, workflow_file, monkeypatch):
    monkeypatch.chdir(tree)
    workflow_file(0)
    result = CliRunner().invoke(cli, ["run"])
    assert result.exit_code == 0, result.output
    assert (tree / "lib3" / "ran").exists()
    assert "BUILD SUCCESS (3/3 steps run)" in result.output


def test_run_propagates_failing_exit_code(tree, workflow_file, monkeypatch):
    monkeypatch.chdir(tree)
    workflow_file(7)
    result = CliRunner().invoke(cli, ["run"])
    assert result.exit_code == 7
    assert (tree / "lib1" / "ran").exists()
    assert not (tree / "lib3" / "ran").exists()
    assert "STEP FAILED: lib2" in result.output


def test_run_from_another_directory(tree, workflow_file, monkeypatch):
    path = workflow_file(0)
    monkeypatch.chdir(tree / "lib2")
    result = CliRunner().invoke(cli, ["run", "--workflow", str(path)])
    assert result.exit_code == 0, result.output
    assert (tree / "lib1" / "ran").exists()
    assert not (tree / "lib2" / "lib1").exists()


def test_run_echoes_commands(tree, workflow_file, monkeypatch):
    monkeypatch.chdir(tree)
    workflow_file(0)
    result = CliRunner().invoke(cli, ["run"])
    assert "+ " in result.output
    assert "raise SystemExit(0)" in result.output


def test_run_quiet_suppresses_trace(tree, workflow_file, monkeypatch):
    monkeypatch.chdir(tree)
    workflow_file(0)
    result = CliRunner().invoke(cli, ["run", "--quiet"])
    assert result.exit_code == 0
    assert "+ " not in result.output


def test_workflow_from_environment(tree, workflow_file, monkeypatch):
    path = workflow_file(0)
    monkeypatch.chdir(tree / "lib1")
    result = CliRunner().invoke(cli, ["run"], env={"SEQBUILD_WORKFLOW": str(path)})
    assert result.exit_code == 0, result.output


def test_no_workflow_found(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["run"])
    assert result.exit_code == 1
    assert "No workflow file found" in result.output


def test_multiple_workflows_found(tree, workflow_file, monkeypatch):
    monkeypatch.chdir(tree)
    workflow_file(0)
    (tree / "other_workflow.py").write_text("STEPS = []\n")
    result = CliRunner().invoke(cli, ["run"])
    assert result.exit_code == 1
    assert "Multiple workflow files found" in result.output


def test_bad_workflow_definition(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "seqbuild_workflow.py").write_text("STEPS = 42\n")
    result = CliRunner().invoke(cli, ["run"])
    assert result.exit_code == 1
    assert "Failed to load workflow" in result.output


def test_empty_workflow_succeeds(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "seqbuild_workflow.py").write_text("STEPS = []\n")
    result = CliRunner().invoke(cli, ["run"])
    assert result.exit_code == 0
    assert "BUILD SUCCESS (0/0 steps run)" in result.output


def test_plan_lists_steps_without_running(tree, workflow_file, monkeypatch):
    monkeypatch.chdir(tree)
    workflow_file(0)
    result = CliRunner().invoke(cli, ["plan"])
    assert result.exit_code == 0, result.output
    assert "[module-build] lib1" in result.output
    assert not (tree / "lib1" / "ran").exists()


def test_plan_flags_missing_directories(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "seqbuild_workflow.py").write_text(
        "from seqbuild.catalog import default_steps\n"
        "def workflow():\n"
        "    return default_steps()\n"
    )
    result = CliRunner().invoke(cli, ["plan"])
    assert result.exit_code == 1
    assert "(missing directory)" in result.output
    assert "Missing step directories" in result.output


def test_workflow_raising_on_load(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "seqbuild_workflow.py").write_text(
        "def workflow():\n"
        "    raise RuntimeError('boom')\n"
    )
    for command in ("run", "plan"):
        result = CliRunner().invoke(cli, [command])
        assert result.exit_code == 1
        assert "Failed to load workflow" in result.output
        assert "boom" in result.output


def test_interrupt_exits_130(tree, workflow_file, monkeypatch):
    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.chdir(tree)
    workflow_file(0)
    monkeypatch.setattr("seqbuild.cli.run_build", interrupted)
    result = CliRunner().invoke(cli, ["run"])
    assert result.exit_code == 130
    assert "Interrupted by user" in result.output


def test_plan_accepts_kind_given_as_string(tree, monkeypatch):
    monkeypatch.chdir(tree)
    (tree / "seqbuild_workflow.py").write_text(
        "from seqbuild.model import Step\n"
        "STEPS = [Step(cwd='lib1', argv=['./update-assets.sh'], kind='asset-pipeline')]\n"
    )
    result = CliRunner().invoke(cli, ["plan"])
    assert result.exit_code == 0, result.output
    assert "[asset-pipeline] lib1" in result.output
