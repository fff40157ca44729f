from pathlib import Path
from typing import Optional, Sequence

from runner.submission import SubmissionRunner
from . import config, workspace
from .metrics import generate_performance_metrics
from .models import EvaluationResult, TestCase
from .quality import generate_quality_feedback
from .result_factory import (
    make_compile_error_result,
    make_error_result,
    make_evaluated_result,
    make_unidentified_result,
)
from .source import extract_class_name, materialize
from .utils import logger


class EvaluationPipeline:
    """
    Compile a submission, run it against test cases and grade it.

    One call of `evaluate` owns one workspace from start to end. The
    pipeline keeps no state between calls, so a single instance may serve
    concurrent requests.
    """

    def __init__(
        self,
        workspace_root: Optional[Path] = None,
        sandbox_config: Optional[dict] = None,
    ):
        self.workspace_root = workspace_root
        self.sandbox_config = (sandbox_config if sandbox_config is not None
                               else config.get_sandbox_config())

    def evaluate(
        self,
        code: str,
        test_cases: Sequence[TestCase],
        filename: Optional[str] = None,
    ) -> EvaluationResult:
        try:
            with workspace.allocate(self.workspace_root) as ws:
                return self._evaluate_in(ws, code, test_cases, filename)
        except Exception as e:
            logger().error(f'error during evaluation: {e}', exc_info=True)
            return make_error_result(e)

    def _evaluate_in(
        self,
        ws: workspace.Workspace,
        code: str,
        test_cases: Sequence[TestCase],
        filename: Optional[str],
    ) -> EvaluationResult:
        class_name = extract_class_name(code)
        if class_name is None:
            logger().debug(f'no public class found [workspace={ws.id}]')
            return make_unidentified_result()
        if filename and Path(filename).stem != class_name:
            logger().debug(
                f'filename {filename} does not match class {class_name}')
        materialize(ws, code, class_name)

        runner = SubmissionRunner(ws.path, class_name, self.sandbox_config)
        compilation = runner.compile()
        if not compilation.success:
            logger().debug(f'compile error [workspace={ws.id}]')
            return make_compile_error_result(compilation)

        test_results = runner.run_all(test_cases)
        logger().debug(
            f'{sum(r.passed for r in test_results)}/{len(test_results)} '
            f'test cases passed [workspace={ws.id}]')
        return make_evaluated_result(
            compilation=compilation,
            test_results=test_results,
            quality_feedback=generate_quality_feedback(code),
            performance_metrics=generate_performance_metrics(
                code, test_results),
        )
