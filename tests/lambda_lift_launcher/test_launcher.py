"""
Tests for the launch strategies, the Launcher and the command line entry point.

The end-to-end tests start real child processes: small Python scripts standing
in for npx and for the cached lambda-lift binary.
"""

import json
import os
import signal
import sys
import textwrap

import pytest

from lambda_lift_launcher import cli
from lambda_lift_launcher.launch_strategies import (
    DelegateRunnerStrategy,
    LaunchStrategy,
    StandaloneBinaryStrategy,
)
from lambda_lift_launcher.launcher import Launcher
from lambda_lift_launcher.launcher_config import LauncherConfig
from lambda_lift_launcher.launcher_exceptions import LauncherException, UnsupportedPlatformError
from lambda_lift_launcher.launcher_logger import LauncherLogger
from lambda_lift_launcher.launcher_settings import LauncherSettings
from lambda_lift_launcher.launcher_utils import PlatformId
from lambda_lift_launcher.process_executor import RunResult, normalize_exit_code, run_process, wait_for_child
from lambda_lift_launcher.runtime_dependency_models import RuntimeDependenciesConfig

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses shebang scripts")


def write_script(path, exit_code, record_file):
    """Write an executable Python script recording its arguments and exiting with exit_code."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        f"#!{sys.executable}\n"
        "import json, sys\n"
        f"with open({str(record_file)!r}, 'w') as f:\n"
        "    json.dump(sys.argv[1:], f)\n"
        f"sys.exit({exit_code})\n"
    )
    path.chmod(0o755)
    return path


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point the cache at tmp_path and leave PATH with an empty directory only."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("PATH", str(bin_dir))
    return tmp_path


class FakeProcess:
    """Stands in for subprocess.Popen; each item of outcomes is an exit code or an exception for wait() to raise."""

    def __init__(self, args, outcomes):
        self.args = args
        self.outcomes = list(outcomes)

    def wait(self):
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingStrategy(LaunchStrategy):
    def __init__(self, name, result):
        super().__init__(LauncherConfig(), LauncherLogger())
        self.name = name
        self.result = result
        self.calls = []

    def run(self, args):
        self.calls.append(list(args))
        return self.result


class TestProcessExecutor:
    def test_exit_code_is_reported(self):
        result = run_process([sys.executable, "-c", "import sys; sys.exit(7)"], LauncherLogger())
        assert result == RunResult.exited(7)
        assert result.started

    def test_success(self):
        result = run_process([sys.executable, "-c", "pass"], LauncherLogger())
        assert result.exit_code == 0

    def test_missing_binary_is_spawn_failure(self, tmp_path):
        result = run_process([str(tmp_path / "missing")], LauncherLogger())
        assert not result.started
        assert result.exit_code is None
        assert isinstance(result.error.cause, OSError)

    @pytest.mark.parametrize("returncode, expected", [(0, 0), (3, 3), (255, 255), (-9, 137), (-15, 143)])
    def test_normalize_exit_code(self, returncode, expected):
        assert normalize_exit_code(returncode) == expected

    def test_interrupt_while_waiting_keeps_waiting(self):
        process = FakeProcess(["lambda-lift"], [KeyboardInterrupt(), KeyboardInterrupt(), 5])
        assert wait_for_child(process, LauncherLogger()) == 5
        assert process.outcomes == []

    @posix_only
    def test_ctrl_c_reports_the_exit_code_of_the_child(self, tmp_path):
        marker = tmp_path / "cleanup-done"
        # The child plays a tool that cleans up on Ctrl-C: it interrupts the
        # launcher (this test process) and itself, the way a terminal signals
        # the whole process group, then exits 5 once its handler has finished.
        script = textwrap.dedent(
            f"""
            import os, signal, sys, time

            def on_interrupt(signum, frame):
                time.sleep(0.5)
                with open({str(marker)!r}, "w") as f:
                    f.write("done")
                sys.exit(5)

            signal.signal(signal.SIGINT, on_interrupt)
            time.sleep(0.5)
            os.kill(os.getppid(), signal.SIGINT)
            os.kill(os.getpid(), signal.SIGINT)
            time.sleep(30)
            """
        )

        if signal.getsignal(signal.SIGINT) is not signal.default_int_handler:
            pytest.skip("SIGINT does not raise KeyboardInterrupt in this test process")
        result = run_process([sys.executable, "-c", script], LauncherLogger())

        assert result == RunResult.exited(5)
        assert marker.read_text() == "done"


class TestDelegateRunnerStrategy:
    def test_declines_without_runner(self, monkeypatch):
        monkeypatch.setattr("shutil.which", lambda name: None)
        strategy = DelegateRunnerStrategy(LauncherConfig(), LauncherLogger())
        assert strategy.run(["build"]) is None

    def test_forwards_arguments(self, monkeypatch):
        calls = []

        def fake_popen(cmd):
            calls.append(cmd)
            return FakeProcess(cmd, [3])

        monkeypatch.setattr("shutil.which", lambda name: "/usr/local/bin/" + name)
        monkeypatch.setattr("subprocess.Popen", fake_popen)
        strategy = DelegateRunnerStrategy(LauncherConfig(), LauncherLogger())

        assert strategy.run(["build", "--verbose"]) == RunResult.exited(3)
        assert calls == [["/usr/local/bin/npx", "lambda-lift", "build", "--verbose"]]

    def test_declines_when_runner_cannot_start(self, monkeypatch, tmp_path):
        monkeypatch.setattr("shutil.which", lambda name: str(tmp_path / "gone" / "npx"))
        strategy = DelegateRunnerStrategy(LauncherConfig(), LauncherLogger())
        assert strategy.run([]) is None


class TestLauncher:
    def test_first_accepting_strategy_wins(self):
        declining = RecordingStrategy("declining", None)
        accepting = RecordingStrategy("accepting", RunResult.exited(5))
        never = RecordingStrategy("never", RunResult.exited(0))
        launcher = Launcher(LauncherConfig(), LauncherLogger(), [declining, accepting, never])

        assert launcher.launch(("a", "b")) == RunResult.exited(5)
        assert declining.calls == [["a", "b"]]
        assert accepting.calls == [["a", "b"]]
        assert never.calls == []

    def test_all_strategies_declining_is_an_error(self):
        launcher = Launcher(LauncherConfig(), LauncherLogger(), [RecordingStrategy("declining", None)])
        with pytest.raises(LauncherException):
            launcher.launch([])

    def test_default_strategy_order(self):
        launcher = Launcher(LauncherConfig(), LauncherLogger())
        assert [s.name for s in launcher.strategies] == ["delegate", "standalone"]


@posix_only
class TestCli:
    def test_delegate_exit_code_is_propagated(self, isolated_env):
        record = isolated_env / "npx-args.json"
        write_script(isolated_env / "bin" / "npx", 3, record)

        assert cli.main(["build", "--verbose"]) == 3
        assert json.loads(record.read_text()) == ["lambda-lift", "build", "--verbose"]

    def test_delegate_success(self, isolated_env):
        write_script(isolated_env / "bin" / "npx", 0, isolated_env / "npx-args.json")
        assert cli.main([]) == 0

    def test_standalone_exit_code_is_propagated(self, isolated_env, monkeypatch):
        def no_network(*args, **kwargs):
            raise AssertionError("cached binary must not be downloaded")

        monkeypatch.setattr("requests.get", no_network)
        record = isolated_env / "binary-args.json"
        write_script(LauncherSettings.get_binary_path(LauncherConfig()), 7, record)

        assert cli.main(["build", "--verbose"]) == 7
        assert json.loads(record.read_text()) == ["build", "--verbose"]

    def test_unstartable_delegate_falls_back_to_standalone(self, isolated_env, monkeypatch):
        monkeypatch.setattr("shutil.which", lambda name: str(isolated_env / "gone" / name))
        record = isolated_env / "binary-args.json"
        write_script(LauncherSettings.get_binary_path(LauncherConfig()), 0, record)

        assert cli.main(["deploy"]) == 0
        assert json.loads(record.read_text()) == ["deploy"]

    def test_unrunnable_cached_binary(self, isolated_env, capsys):
        binary = LauncherSettings.get_binary_path(LauncherConfig())
        binary.parent.mkdir(parents=True)
        binary.write_bytes(b"not executable")
        os.chmod(binary, 0o644)

        assert cli.main(["build"]) == cli.EXIT_FAILURE
        assert capsys.readouterr().err.startswith("Error running lambda-lift: ")

    def test_launcher_failure_prints_remediation(self, isolated_env, monkeypatch, capsys):
        def no_network(*args, **kwargs):
            raise AssertionError("unsupported platforms must not download")

        monkeypatch.setattr("requests.get", no_network)
        monkeypatch.setattr("platform.system", lambda: "Linux")
        monkeypatch.setattr("platform.machine", lambda: "riscv64")

        assert cli.main(["build"]) == 1
        err = capsys.readouterr().err
        assert err == (
            "Error: unsupported platform: linux/riscv64\n\n"
            "To fix this, try one of the following:\n"
            "  1. Install Node.js and run: npm install -g lambda-lift\n"
            "  2. Download the binary manually from: https://github.com/marnautoupages/lambda-lift/releases\n"
        )

    def test_missing_cache_dir_prints_remediation(self, isolated_env, monkeypatch, capsys):
        monkeypatch.delenv("HOME")
        monkeypatch.delenv("XDG_CACHE_HOME")
        monkeypatch.setattr("platform.system", lambda: "Linux")

        assert cli.main([]) == 1
        assert "To fix this" in capsys.readouterr().err

    def test_delegate_runs_never_read_the_artifact_table(self, isolated_env, monkeypatch):
        def unreadable(*args, **kwargs):
            raise AssertionError("the artifact table is only needed for the standalone binary")

        monkeypatch.setattr(RuntimeDependenciesConfig, "load", unreadable)
        write_script(isolated_env / "bin" / "npx", 3, isolated_env / "npx-args.json")

        assert cli.main(["build"]) == 3

    def test_broken_artifact_table_prints_remediation(self, isolated_env, monkeypatch, capsys):
        table = isolated_env / "runtime_dependencies.json"
        table.write_text('{"artifacts": [{"os": "linux"}]}')
        monkeypatch.setattr(
            "lambda_lift_launcher.runtime_dependency_models.runtime_dependencies.RUNTIME_DEPENDENCIES_PATH", table
        )

        assert cli.main(["build"]) == 1
        err = capsys.readouterr().err
        assert err.startswith(f"Error: failed to read release artifact table {table}: ")
        assert "To fix this, try one of the following:" in err

    def test_failed_write_prints_remediation(self, isolated_env, monkeypatch, capsys):
        class Response:
            status_code = 200
            reason = "OK"

            def iter_content(self, chunk_size=1):
                yield b"binary"

            def __enter__(self):
                return self

            def __exit__(self, *exc_info):
                return False

        def read_only_cache(src, dst):
            raise PermissionError(13, "Permission denied", dst)

        monkeypatch.setattr("platform.system", lambda: "Linux")
        monkeypatch.setattr("platform.machine", lambda: "x86_64")
        monkeypatch.setattr("requests.get", lambda url, **kwargs: Response())
        monkeypatch.setattr("os.replace", read_only_cache)

        assert cli.main(["build"]) == 1
        err = capsys.readouterr().err
        assert "Error: failed to write binary: " in err
        assert "To fix this, try one of the following:" in err
        assert os.listdir(isolated_env / "cache" / "lambda-lift") == []


class TestStandaloneBinaryStrategy:
    def test_unsupported_platform_raises(self, isolated_env, monkeypatch):
        strategy = StandaloneBinaryStrategy(
            LauncherConfig(), LauncherLogger(), platform_id=PlatformId("linux", "arm64")
        )
        with pytest.raises(UnsupportedPlatformError):
            strategy.run(["build"])
