import pathlib
import re
from typing import Iterable, List, Optional

from evaluator import config
from evaluator.constant import ARTIFACT_EXTENSION, Language
from evaluator.models import CompilationResult, TestCase, TestResult
from evaluator.source import source_filename
from evaluator.utils import logger
from runner.sandbox import (
    RUNTIME_ERROR,
    TIME_LIMIT_EXCEEDED,
    JudgeError,
    create_sandbox,
)

COMPILATION_SUCCESSFUL = "Compilation successful"
# per excerpt shown in a test result message
MAX_DISPLAY_CHARS = 1000


class SubmissionRunner:

    def __init__(
        self,
        workdir: str | pathlib.Path,
        class_name: str,
        cfg: Optional[dict] = None,
        language: Language = Language.JAVA,
    ):
        self.cfg = cfg if cfg is not None else config.get_sandbox_config()
        self.workdir = pathlib.Path(workdir)
        self.class_name = class_name
        self.language = language
        self.compile_timeout = int(self.cfg["compile_timeout"])  # ms
        self.run_timeout = int(self.cfg["run_timeout"])  # ms

    @property
    def source_path(self) -> pathlib.Path:
        return self.workdir / source_filename(self.class_name, self.language)

    @property
    def artifact_path(self) -> pathlib.Path:
        return self.workdir / (self.class_name +
                               ARTIFACT_EXTENSION[self.language])

    def compile(self) -> CompilationResult:
        command = [self.cfg["javac"], self.source_path.name]
        try:
            result = create_sandbox(
                self.cfg,
                self.workdir,
                command,
                self.compile_timeout,
            ).run()
        except JudgeError as e:
            logger().warning(f"compile failed to start: {e}")
            return CompilationResult(success=False, output=str(e))
        if result.Status == TIME_LIMIT_EXCEEDED:
            return CompilationResult(
                success=False,
                output=f"Compilation timed out after {self.compile_timeout} ms",
            )
        # javac may exit non-zero with warnings only, trust the artifact
        success = self.artifact_path.exists()
        output = result.Stderr or result.Stdout or COMPILATION_SUCCESSFUL
        return CompilationResult(success=success, output=output)

    def run(self, test_case: TestCase) -> TestResult:
        try:
            return self._run(test_case)
        except Exception as e:
            logger().warning(
                f"test case {test_case.id} raised: {e}",
                exc_info=True,
            )
            return TestResult(
                testCaseId=test_case.id,
                name=test_case.name,
                passed=False,
                message=f"Error running test: {e}",
            )

    def run_all(self, test_cases: Iterable[TestCase]) -> List[TestResult]:
        return [self.run(test_case) for test_case in test_cases]

    def _run(self, test_case: TestCase) -> TestResult:
        stdin_path = None
        if test_case.input:
            stdin_path = self.workdir / self.input_filename(test_case.id)
            stdin_path.write_text(test_case.input, encoding="utf-8")
        command = [self.cfg["java"], "-cp", ".", self.class_name]
        result = create_sandbox(
            self.cfg,
            self.workdir,
            command,
            self.run_timeout,
            stdin_path=stdin_path,
        ).run()

        def failed(message: str, execution_time=None) -> TestResult:
            return TestResult(
                testCaseId=test_case.id,
                name=test_case.name,
                passed=False,
                message=message,
                executionTime=execution_time,
            )

        if result.Status == TIME_LIMIT_EXCEEDED:
            return failed(f"Time limit exceeded ({self.run_timeout} ms)")
        if result.Status == RUNTIME_ERROR:
            message = f"Error running test: program exited with code {result.ExitCode}"
            if result.Stderr:
                message += f"\n{self.clip(result.Stderr.strip())}"
            return failed(message)

        if test_case.expectedOutput:
            passed = self.strip(result.Stdout) == self.strip(
                test_case.expectedOutput)
        else:
            # nothing to compare with, a clean run counts as pass
            passed = not result.Stderr
        if passed:
            return TestResult(
                testCaseId=test_case.id,
                name=test_case.name,
                passed=True,
                message="Test passed successfully",
                executionTime=result.Duration,
            )
        return failed(self._failure_message(test_case, result.Stdout,
                                            result.Stderr),
                      execution_time=result.Duration)

    def _failure_message(self, test_case: TestCase, stdout: str,
                         stderr: str) -> str:
        message = "Test failed."
        if test_case.visible and test_case.expectedOutput:
            message += (
                f"\nExpected: {self.clip(self.strip(test_case.expectedOutput))}"
                f"\nActual: {self.clip(self.strip(stdout))}")
        if stderr:
            message += f"\n{self.clip(stderr.strip())}"
        return message

    @classmethod
    def input_filename(cls, test_case_id: str) -> str:
        return f"input_{re.sub(r'[^A-Za-z0-9_.-]', '_', test_case_id)}.txt"

    @classmethod
    def clip(cls, s: str) -> str:
        if len(s) <= MAX_DISPLAY_CHARS:
            return s
        return (f"{s[:MAX_DISPLAY_CHARS]}"
                f"... [{len(s) - MAX_DISPLAY_CHARS} more characters]")

    @classmethod
    def strip(cls, s: str) -> str:
        # surrounding whitespace and line ending style are not significant
        return s.strip().replace("\r\n", "\n")
