"""Tests for the boottasks command line."""

import textwrap
from pathlib import Path

import pytest
from typer.testing import CliRunner

import boottasks
from boottasks.cli import EXIT_SETUP_ERROR, EXIT_STALLED, app

runner = CliRunner()

SETUP_MODULE = """
from boottasks import SingletonTask, Task

LOG = []


class MountRoot(Task):
    def __init__(self, after):
        super().__init__()
        self.add_dependency("Task", after)

    def run(self):
        LOG.append(self.name)


class Devices(Task):
    def run(self):
        LOG.append(self.name)


def setup(registry):
    devices = Devices()
    registry.add(MountRoot, devices)
    registry.register(devices)

    @registry.singleton
    class Splash(SingletonTask):
        ux_priority = -1

        def run(self):
            LOG.append(self.name)
"""

STALLED_MODULE = """
from boottasks import Task


class WaitForever(Task):
    def __init__(self):
        super().__init__()
        self.add_dependency("Condition", lambda: False)

    def run(self):
        pass


def setup(registry):
    registry.add(WaitForever)
"""


def write_module(directory: Path, name: str, source: str) -> Path:
    path = directory / f"{name}.py"
    path.write_text(textwrap.dedent(source))
    return path


@pytest.fixture
def setup_file(tmp_path: Path) -> Path:
    return write_module(tmp_path, "boot_setup", SETUP_MODULE)


class TestRun:
    def test_runs_tasks_from_file(self, setup_file: Path):
        result = runner.invoke(app, ["run", str(setup_file), "--interval", "0"])

        assert result.exit_code == 0, result.output
        assert "Scheduled 3 task(s) in 1 sweep(s)" in result.output
        assert "Order: Splash -> Devices -> MountRoot" in result.output

    def test_runs_tasks_from_module_name(self, tmp_path: Path, monkeypatch):
        write_module(tmp_path, "boot_setup_importable", SETUP_MODULE)
        monkeypatch.syspath_prepend(str(tmp_path))

        result = runner.invoke(app, ["run", "boot_setup_importable", "-i", "0"])

        assert result.exit_code == 0, result.output
        assert "Ran: 3" in result.output

    def test_stalled(self, tmp_path: Path):
        path = write_module(tmp_path, "stalled", STALLED_MODULE)

        result = runner.invoke(
            app, ["run", str(path), "--interval", "0", "--max-sweeps", "2"]
        )

        assert result.exit_code == EXIT_STALLED
        assert "still pending after 2 sweep(s): WaitForever" in result.output

    def test_missing_setup_hook(self, tmp_path: Path):
        path = write_module(tmp_path, "no_hook", "X = 1\n")

        result = runner.invoke(app, ["run", str(path)])

        assert result.exit_code == EXIT_SETUP_ERROR
        assert "has no setup(registry) function" in result.output

    def test_missing_file(self, tmp_path: Path):
        result = runner.invoke(app, ["run", str(tmp_path / "nope.py")])

        assert result.exit_code == EXIT_SETUP_ERROR
        assert "No such file" in result.output

    def test_unimportable_module(self):
        result = runner.invoke(app, ["run", "boottasks_no_such_module"])

        assert result.exit_code == EXIT_SETUP_ERROR
        assert "Cannot import boottasks_no_such_module" in result.output

    def test_setup_file_with_broken_import(self, tmp_path: Path):
        path = write_module(tmp_path, "broken", "import boottasks_no_such_module_xyz\n")

        result = runner.invoke(app, ["plan", str(path)])

        assert result.exit_code == EXIT_SETUP_ERROR
        assert "Error: Cannot load" in result.output
        assert "boottasks_no_such_module_xyz" in result.output

    def test_setup_file_with_syntax_error(self, tmp_path: Path):
        path = write_module(tmp_path, "typo", "def setup(registry)\n    pass\n")

        result = runner.invoke(app, ["run", str(path)])

        assert result.exit_code == EXIT_SETUP_ERROR
        assert "Error: Cannot load" in result.output


class TestPlan:
    def test_shows_order(self, setup_file: Path):
        result = runner.invoke(app, ["plan", str(setup_file)])

        assert result.exit_code == 0, result.output
        lines = [
            line.strip() for line in result.output.splitlines() if "priority=" in line
        ]
        assert lines == [
            "1. Splash  priority=-1  dependencies=0",
            "2. Devices  priority=0  dependencies=0",
            "3. MountRoot  priority=0  dependencies=1",
        ]

    def test_no_tasks(self, tmp_path: Path):
        path = write_module(tmp_path, "empty", "def setup(registry):\n    pass\n")

        result = runner.invoke(app, ["plan", str(path)])

        assert result.exit_code == 0
        assert "No tasks registered." in result.output


def test_kinds():
    result = runner.invoke(app, ["kinds"])

    assert result.exit_code == 0
    for name in ["Condition", "Devices", "Files", "Mount", "Singleton", "Task"]:
        assert name in result.output.split()


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert result.output == f"boottasks {boottasks.__version__}\n"
