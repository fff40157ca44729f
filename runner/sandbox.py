"""
Run a single external command inside an evaluation workspace.

Two backends share one result shape:

- ``LocalSandbox`` spawns the command with :mod:`subprocess` on this host.
- ``DockerSandbox`` starts a throwaway container with the workspace bound
  at ``/workspace``, networking disabled and a memory limit.

Both enforce a wall-clock time limit. Failing to launch the command at all
(missing toolchain, unreachable docker daemon) raises :class:`JudgeError`;
everything the command itself does is reported in :class:`Result`.
"""

from __future__ import annotations

import shlex
import subprocess
import time
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import docker
import requests

from evaluator.constant import SandboxBackend
from evaluator.utils import logger
from runner.path_utils import PathTranslator

EXITED_NORMALLY = "Exited Normally"
RUNTIME_ERROR = "RE"
TIME_LIMIT_EXCEEDED = "TLE"

DEFAULT_PIDS_LIMIT = 256
CONTAINER_WORKDIR = "/workspace"


class JudgeError(Exception):
    """The sandbox could not execute the command."""


@dataclass
class Result:
    Status: str
    Duration: float  # ms
    Stdout: str
    Stderr: str
    ExitCode: int
    ExitMsg: str = ""


def _decode(data) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        data = data.decode("utf-8", "replace")
    return data


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class Sandbox:

    def __init__(
        self,
        workdir: str | Path,
        command: List[str],
        time_limit: int,  # ms
        mem_limit: int,  # KB
        stdin_path: Optional[str | Path] = None,
    ):
        self.workdir = Path(workdir)
        self.command = command
        self.time_limit = time_limit
        self.mem_limit = mem_limit
        self.stdin_path = Path(stdin_path) if stdin_path else None

    def run(self) -> Result:
        raise NotImplementedError


class LocalSandbox(Sandbox):

    def run(self) -> Result:
        stdin = (open(self.stdin_path, "rb")
                 if self.stdin_path else nullcontext(subprocess.DEVNULL))
        with stdin as stdin_file:
            start = time.perf_counter()
            try:
                proc = subprocess.run(
                    self.command,
                    cwd=self.workdir,
                    stdin=stdin_file,
                    capture_output=True,
                    timeout=self.time_limit / 1000,
                )
            except subprocess.TimeoutExpired as e:
                return Result(
                    Status=TIME_LIMIT_EXCEEDED,
                    Duration=_elapsed_ms(start),
                    Stdout=_decode(e.stdout),
                    Stderr=_decode(e.stderr),
                    ExitCode=-1,
                    ExitMsg=f"killed after {self.time_limit} ms",
                )
            except OSError as e:
                raise JudgeError(
                    f"failed to launch '{self.command[0]}': {e}") from e
        duration = _elapsed_ms(start)
        return Result(
            Status=(EXITED_NORMALLY
                    if proc.returncode == 0 else RUNTIME_ERROR),
            Duration=duration,
            Stdout=_decode(proc.stdout),
            Stderr=_decode(proc.stderr),
            ExitCode=proc.returncode,
        )


class DockerSandbox(Sandbox):

    def __init__(
        self,
        *args,
        image: str,
        docker_url: str,
        translator: Optional[PathTranslator] = None,
        pids_limit: int = DEFAULT_PIDS_LIMIT,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.image = image
        self.docker_url = docker_url
        self.translator = translator
        # the JVM starts GC and JIT threads per core
        self.pids_limit = pids_limit

    def _shell_command(self) -> str:
        command = shlex.join(self.command)
        if self.stdin_path:
            # fixtures always live inside the workspace
            command += f" < {shlex.quote(self.stdin_path.name)}"
        return command

    def run(self) -> Result:
        host_dir = (self.translator.to_host(self.workdir)
                    if self.translator else self.workdir.resolve())
        try:
            client = docker.APIClient(base_url=self.docker_url)
            host_config = client.create_host_config(
                binds={
                    str(host_dir): {
                        "bind": CONTAINER_WORKDIR,
                        "mode": "rw",
                    }
                },
                network_mode="none",
                mem_limit=f"{max(self.mem_limit, 0)}k",
                pids_limit=self.pids_limit,
            )
            container = client.create_container(
                image=self.image,
                command=["/bin/sh", "-c", self._shell_command()],
                working_dir=CONTAINER_WORKDIR,
                network_disabled=True,
                host_config=host_config,
            )
        except docker.errors.DockerException as e:
            raise JudgeError(f"failed to create container: {e}") from e

        timed_out = False
        try:
            start = time.perf_counter()
            client.start(container)
            try:
                exit_status = client.wait(container,
                                          timeout=self.time_limit / 1000)
            except (requests.exceptions.ReadTimeout,
                    requests.exceptions.ConnectionError):
                timed_out = True
                client.kill(container)
                exit_status = {"StatusCode": -1}
            duration = _elapsed_ms(start)
            stdout = client.logs(container, stdout=True, stderr=False)
            stderr = client.logs(container, stdout=False, stderr=True)
        except docker.errors.DockerException as e:
            raise JudgeError(f"container execution failed: {e}") from e
        finally:
            try:
                client.remove_container(container, v=True, force=True)
            except docker.errors.DockerException as e:
                logger().warning(f"failed to remove container: {e}")

        status_code = exit_status.get("StatusCode", 1)
        if timed_out:
            status = TIME_LIMIT_EXCEEDED
        elif status_code == 0:
            status = EXITED_NORMALLY
        else:
            status = RUNTIME_ERROR
        return Result(
            Status=status,
            Duration=duration,
            Stdout=_decode(stdout),
            Stderr=_decode(stderr),
            ExitCode=status_code,
            ExitMsg=(f"killed after {self.time_limit} ms"
                     if timed_out else ""),
        )


def create_sandbox(
    cfg: dict,
    workdir: str | Path,
    command: List[str],
    time_limit: int,
    stdin_path: Optional[str | Path] = None,
) -> Sandbox:
    backend = SandboxBackend(cfg.get("backend", SandboxBackend.LOCAL))
    if backend == SandboxBackend.DOCKER:
        return DockerSandbox(
            workdir,
            command,
            time_limit,
            cfg["mem_limit"],
            stdin_path=stdin_path,
            image=cfg["image"],
            docker_url=cfg["docker_url"],
            translator=PathTranslator(cfg),
            pids_limit=int(cfg.get("pids_limit", DEFAULT_PIDS_LIMIT)),
        )
    return LocalSandbox(
        workdir,
        command,
        time_limit,
        cfg["mem_limit"],
        stdin_path=stdin_path,
    )
