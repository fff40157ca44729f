import pathlib

import pytest

import runner.submission as submission
from evaluator import config
from runner import sandbox as sb


class FakeJava:
    """
    Stand-in for javac/java behind `runner.submission.create_sandbox`.

    Compilation writes the `.class` artifact when `compile_ok` is set.
    Program runs are answered by `run_handler(stdin_text)`, which returns a
    `sandbox.Result` (see `result`) or raises.
    """

    def __init__(self):
        self.calls = []
        self.compile_ok = True
        self.compile_result = self.result()
        self.compile_error = None
        self.run_handler = lambda stdin: self.result()

    @staticmethod
    def result(
        stdout="",
        stderr="",
        exit_code=0,
        status=None,
        duration=5.0,
    ) -> sb.Result:
        if status is None:
            status = sb.EXITED_NORMALLY if exit_code == 0 else sb.RUNTIME_ERROR
        return sb.Result(
            Status=status,
            Duration=duration,
            Stdout=stdout,
            Stderr=stderr,
            ExitCode=exit_code,
        )

    def create_sandbox(self,
                       cfg,
                       workdir,
                       command,
                       time_limit,
                       stdin_path=None):
        return _FakeSandbox(self, pathlib.Path(workdir), command, time_limit,
                            stdin_path)

    @property
    def compile_calls(self):
        return [c for c in self.calls if c.command[0] == "javac"]

    @property
    def run_calls(self):
        return [c for c in self.calls if c.command[0] == "java"]


class _FakeSandbox:

    def __init__(self, java, workdir, command, time_limit, stdin_path):
        self.java = java
        self.workdir = workdir
        self.command = command
        self.time_limit = time_limit
        self.stdin_path = stdin_path

    def run(self):
        self.java.calls.append(self)
        if self.command[0] == "javac":
            if self.java.compile_error is not None:
                raise self.java.compile_error
            if self.java.compile_ok:
                source = self.workdir / self.command[-1]
                source.with_suffix(".class").write_bytes(b"\xca\xfe\xba\xbe")
            return self.java.compile_result
        stdin = (pathlib.Path(self.stdin_path).read_text()
                 if self.stdin_path else None)
        return self.java.run_handler(stdin)


@pytest.fixture
def workspace_root(tmp_path):
    root = tmp_path / "workspaces"
    root.mkdir()
    return root


@pytest.fixture
def sandbox_config(workspace_root):
    cfg = dict(config.DEFAULT_SANDBOX_CONFIG)
    cfg["sandbox_root"] = str(workspace_root)
    return cfg


@pytest.fixture
def fake_java(monkeypatch):
    java = FakeJava()
    monkeypatch.setattr(submission, "create_sandbox", java.create_sandbox)
    return java
