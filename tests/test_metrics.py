import pytest

from evaluator import metrics
from evaluator.models import TestResult

from java_samples import CALCULATOR, HELLO


def _result(case_id, passed=True, execution_time=None):
    return TestResult(
        testCaseId=str(case_id),
        name=f"Test Case {case_id}",
        passed=passed,
        executionTime=execution_time,
    )


@pytest.mark.parametrize(
    "value, excepted",
    [
        (8.5, 9),
        (2.5, 3),
        (8.4, 8),
        (7.0, 7),
        (-0.5, 0),
    ],
)
def test_round_half_up(value, excepted):
    assert metrics.round_half_up(value) == excepted


def test_test_stats_ignores_untimed_results():
    stats = metrics.TestStats.from_results([
        _result(1, execution_time=10),
        _result(2, passed=False),
        _result(3, execution_time=30),
    ])
    assert stats.passed == 2
    assert stats.total == 3
    assert stats.average_time == 20
    assert stats.pass_ratio == pytest.approx(2 / 3)


def test_test_stats_empty():
    stats = metrics.TestStats.from_results([])
    assert stats.pass_ratio == 0
    assert stats.average_time is None


def test_well_written_fast_submission():
    scores = metrics.generate_performance_metrics(CALCULATOR, [
        _result(1, execution_time=10),
        _result(2, execution_time=30),
    ])
    assert scores.model_dump() == {
        "codeQuality": 9,
        "efficiency": 10,
        "bestPractices": 8,
        "complexity": 9,
        "timePerformance": 9,
    }


def test_main_only_without_tests():
    scores = metrics.generate_performance_metrics(HELLO, [])
    assert scores.model_dump() == {
        "codeQuality": 7,
        "efficiency": 6,
        "bestPractices": 6,
        "complexity": 6,
        "timePerformance": 6,
    }


def test_static_hints_only_count_without_timing():
    code = "Map<String, Integer> m = new HashMap<>();"
    untimed = metrics.generate_performance_metrics(code, [_result(1)])
    slow = metrics.generate_performance_metrics(
        code, [_result(1, execution_time=600)])
    assert untimed.timePerformance == 7
    assert slow.timePerformance == 6


@pytest.mark.parametrize(
    "average, excepted",
    [
        (40, 9),
        (150, 8),
        (400, 7),
        (900, 6),
    ],
)
def test_time_performance_bands(average, excepted):
    scores = metrics.generate_performance_metrics(
        HELLO, [_result(1, execution_time=average)])
    assert scores.timePerformance == excepted


def test_scores_are_clamped():
    ctx = metrics.ScoringContext(
        source=None,
        tests=metrics.TestStats.from_results([]),
    )
    assert metrics.MetricRule(name="high", base=14).score(ctx) == 10
    assert metrics.MetricRule(name="low", base=-3).score(ctx) == 1
    assert metrics.MetricRule(
        name="bonus",
        base=5,
        adjustments=(lambda ctx: 1.5, ),
    ).raw(ctx) == 6.5
