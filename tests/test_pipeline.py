import pytest

from evaluator import pipeline as pipeline_module
from evaluator import models
from evaluator.pipeline import EvaluationPipeline
from evaluator.result_factory import UNKNOWN_CLASS_NAME

from java_samples import HELLO


def _cases(*expected):
    return [
        models.TestCase(id=i + 1, name=f"Test Case {i + 1}", expectedOutput=e)
        for i, e in enumerate(expected)
    ]


@pytest.fixture
def pipeline(workspace_root, sandbox_config):
    return EvaluationPipeline(workspace_root, sandbox_config)


def test_evaluate_success(pipeline, fake_java, workspace_root):
    fake_java.run_handler = lambda stdin: fake_java.result(stdout="Hello\n")
    result = pipeline.evaluate(HELLO, _cases("Hello", "Bye"))

    assert result.success
    assert result.compilationSuccessful
    assert result.compilationOutput == "Compilation successful"
    assert [r.testCaseId for r in result.testResults] == ["1", "2"]
    assert [r.passed for r in result.testResults] == [True, False]
    assert result.qualityFeedback
    assert result.performanceMetrics.efficiency == 9
    # source file is named after the public class
    assert fake_java.compile_calls[0].command[-1] == "Main.java"
    assert list(workspace_root.iterdir()) == []


def test_evaluate_without_public_class(pipeline, fake_java, workspace_root):
    result = pipeline.evaluate("class Hidden {}", _cases("x"))
    assert not result.success
    assert not result.compilationSuccessful
    assert result.compilationOutput == UNKNOWN_CLASS_NAME
    assert fake_java.calls == []
    assert list(workspace_root.iterdir()) == []


def test_evaluate_compile_error(pipeline, fake_java, workspace_root):
    fake_java.compile_ok = False
    fake_java.compile_result = fake_java.result(
        stderr="Main.java:3: error: ';' expected", exit_code=1)
    result = pipeline.evaluate(HELLO, _cases("Hello"))

    assert not result.success
    assert "';' expected" in result.compilationOutput
    assert fake_java.run_calls == []
    response = result.to_response()
    assert "testResults" not in response
    assert "qualityFeedback" not in response
    assert "performanceMetrics" not in response
    assert list(workspace_root.iterdir()) == []


def test_evaluate_unexpected_error(pipeline, fake_java, workspace_root,
                                   monkeypatch):

    def broken(code):
        raise RuntimeError("boom")

    monkeypatch.setattr(pipeline_module, "generate_quality_feedback", broken)
    result = pipeline.evaluate(HELLO, _cases("Hello"))

    assert not result.success
    assert not result.compilationSuccessful
    assert result.compilationOutput == "Error: boom"
    assert list(workspace_root.iterdir()) == []


def test_evaluate_unusable_workspace_root(tmp_path, sandbox_config,
                                          fake_java):
    pipeline = EvaluationPipeline(tmp_path / "missing", sandbox_config)
    result = pipeline.evaluate(HELLO, _cases("Hello"))
    assert not result.success
    assert result.compilationOutput.startswith("Error: ")
    assert fake_java.calls == []


def test_evaluate_no_test_cases(pipeline, fake_java):
    result = pipeline.evaluate(HELLO, [])
    assert result.success
    assert result.testResults == []


def test_evaluations_do_not_share_workspaces(pipeline, fake_java):
    pipeline.evaluate(HELLO, _cases("Hello"))
    pipeline.evaluate(HELLO, _cases("Hello"))
    workdirs = {call.workdir for call in fake_java.compile_calls}
    assert len(workdirs) == 2


def test_filename_mismatch_is_not_an_error(pipeline, fake_java):
    fake_java.run_handler = lambda stdin: fake_java.result(stdout="Hello")
    result = pipeline.evaluate(HELLO, _cases("Hello"),
                               filename="Solution.java")
    assert result.success
    assert result.testResults[0].passed
