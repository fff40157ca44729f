"""
Factory functions for every EvaluationResult the pipeline can return.

Failure results never carry test results, feedback or metrics; callers can
rely on ``testResults`` being absent whenever compilation did not succeed.
"""

from typing import List

from .models import (
    CompilationResult,
    EvaluationResult,
    PerformanceMetrics,
    QualityFeedback,
    TestResult,
)

UNKNOWN_CLASS_NAME = "Could not determine class name from the code."


def make_unidentified_result() -> EvaluationResult:
    """No `public class` declaration, nothing was compiled or run."""
    return EvaluationResult(
        success=False,
        compilationSuccessful=False,
        compilationOutput=UNKNOWN_CLASS_NAME,
    )


def make_compile_error_result(
        compilation: CompilationResult) -> EvaluationResult:
    return EvaluationResult(
        success=False,
        compilationSuccessful=False,
        compilationOutput=compilation.output,
    )


def make_error_result(error: BaseException) -> EvaluationResult:
    """
    Build the result for an unexpected exception inside the pipeline.

    Args:
        error: The exception that aborted the evaluation

    Returns:
        Failed evaluation result carrying the error description
    """
    message = str(error) or type(error).__name__
    return EvaluationResult(
        success=False,
        compilationSuccessful=False,
        compilationOutput=f"Error: {message}",
    )


def make_evaluated_result(
    compilation: CompilationResult,
    test_results: List[TestResult],
    quality_feedback: List[QualityFeedback],
    performance_metrics: PerformanceMetrics,
) -> EvaluationResult:
    return EvaluationResult(
        success=True,
        compilationSuccessful=True,
        compilationOutput=compilation.output,
        testResults=test_results,
        qualityFeedback=quality_feedback,
        performanceMetrics=performance_metrics,
    )
