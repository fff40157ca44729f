"""
Synthetic 1-10 performance scores.

Every metric is a row in ``METRIC_RULES``: a base score and a list of
adjustments, each a function of the :class:`ScoringContext` returning the
points to add (negative to deduct). The sum is rounded half-up and clamped.
These are heuristic proxies, not a validated quality model.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from .java_source import JavaSource
from .models import PerformanceMetrics, TestResult


@dataclass(frozen=True)
class TestStats:
    __test__ = False

    passed: int
    total: int
    average_time: Optional[float]  # ms, None when nothing was timed

    @property
    def pass_ratio(self) -> float:
        return self.passed / self.total if self.total > 0 else 0

    @classmethod
    def from_results(cls, results: Sequence[TestResult]) -> 'TestStats':
        times = [
            r.executionTime for r in results if r.executionTime is not None
        ]
        return cls(
            passed=sum(1 for r in results if r.passed),
            total=len(results),
            average_time=sum(times) / len(times) if times else None,
        )


@dataclass(frozen=True)
class ScoringContext:
    source: JavaSource
    tests: TestStats


Adjustment = Callable[[ScoringContext], float]


@dataclass(frozen=True)
class MetricRule:
    name: str
    base: float
    adjustments: Tuple[Adjustment, ...] = field(default_factory=tuple)
    lower: int = 1
    upper: int = 10

    def raw(self, ctx: ScoringContext) -> float:
        return self.base + sum(adjust(ctx) for adjust in self.adjustments)

    def score(self, ctx: ScoringContext) -> int:
        return clamp(round_half_up(self.raw(ctx)), self.lower, self.upper)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: int, lower: int, upper: int) -> int:
    return min(upper, max(lower, value))


def when(predicate: Callable[[ScoringContext], bool],
         points: float) -> Adjustment:
    return lambda ctx: points if predicate(ctx) else 0


def contains(*fragments: str) -> Callable[[ScoringContext], bool]:
    return lambda ctx: ctx.source.contains_any(*fragments)


def _long_methods(ctx: ScoringContext) -> bool:
    src = ctx.source
    return src.method_count > 0 and src.line_count / src.method_count > 30


def _only_main(ctx: ScoringContext) -> bool:
    src = ctx.source
    return ('public static void main' in src
            and src.main_method_count == src.method_count)


def _timing_bonus(bands: List[Tuple[float, float]]) -> Adjustment:
    """Points for the first band whose bound the average time is under."""

    def adjust(ctx: ScoringContext) -> float:
        average = ctx.tests.average_time
        if average is None:
            return 0
        for bound, points in bands:
            if average < bound:
                return points
        return 0

    return adjust


def _simplicity(ctx: ScoringContext) -> float:
    ratio = ctx.tests.pass_ratio
    if ratio > 0.8:
        return 1 if ctx.source.line_count < 100 else 0
    return -(1 - ratio) * 2


def _untimed(adjust: Adjustment) -> Adjustment:
    """Only applies when no test run was timed."""
    return lambda ctx: adjust(ctx) if ctx.tests.average_time is None else 0


METRIC_RULES: Tuple[MetricRule, ...] = (
    MetricRule(
        name='codeQuality',
        base=7,
        adjustments=(
            when(lambda ctx: '/**' in ctx.source and '*/' in ctx.source, 1),
            when(contains('@param', '@return'), 0.5),
            when(contains('private '), 0.5),
            when(_long_methods, -1),
        ),
    ),
    MetricRule(
        name='efficiency',
        base=6,
        adjustments=(
            lambda ctx: ctx.tests.pass_ratio * 2,
            _timing_bonus([(100, 2), (500, 1)]),
        ),
    ),
    MetricRule(
        name='bestPractices',
        base=7,
        adjustments=(
            when(contains('private '), 0.5),
            when(contains('final '), 0.5),
            when(lambda ctx: 'try' in ctx.source and 'catch' in ctx.source,
                 0.5),
            when(contains('implements ', 'extends '), 0.5),
            when(contains('ArrayList', 'HashMap'), 0.5),
            when(_only_main, -1),
        ),
    ),
    MetricRule(
        name='complexity',
        base=8,
        adjustments=(
            _simplicity,
            when(
                lambda ctx: (ctx.source.contains_any('for (', 'while (') and
                             ctx.source.contains_any('List<', 'Map<', 'Set<')),
                0.5),
            when(
                lambda ctx: (ctx.source.has_recursion and ctx.tests.
                             pass_ratio > 0.8), 1),
        ),
    ),
    MetricRule(
        name='timePerformance',
        base=6,
        adjustments=(
            _timing_bonus([(50, 3), (200, 2), (500, 1)]),
            _untimed(when(contains('HashMap', 'HashSet'), 1)),
            _untimed(
                when(
                    lambda ctx: ('for (' not in ctx.source and 'stream()' in
                                 ctx.source), 1)),
            _untimed(when(lambda ctx: ctx.source.nested_for_count > 1, -1)),
        ),
    ),
)


def generate_performance_metrics(
    code: str,
    test_results: Sequence[TestResult],
    rules: Sequence[MetricRule] = METRIC_RULES,
) -> PerformanceMetrics:
    ctx = ScoringContext(
        source=JavaSource(code),
        tests=TestStats.from_results(test_results),
    )
    return PerformanceMetrics(**{rule.name: rule.score(ctx) for rule in rules})
