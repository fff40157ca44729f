from typing import Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    conint,
    field_validator,
)

from .constant import FeedbackType, Language

Score = conint(ge=1, le=10)


class TestCase(BaseModel):
    __test__ = False

    id: str
    name: str
    description: str = ''
    visible: bool = True
    input: Optional[str] = None
    expectedOutput: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def _coerce_id(cls, v):
        if isinstance(v, int):
            v = str(v)
        return v


class Problem(BaseModel):
    id: int
    title: str
    description: str
    difficulty: str
    complexityLevel: int = 1
    category: str
    testCases: List[TestCase] = Field(default_factory=list)
    solutionTemplate: Dict[str, str] = Field(default_factory=dict)

    def public_view(self) -> dict:
        """
        Serialize for the client, hidden test cases keep only their
        name and description.
        """
        data = self.model_dump(mode='json')
        for case in data['testCases']:
            if not case['visible']:
                case.pop('input', None)
                case.pop('expectedOutput', None)
        return data


class EvaluationRequest(BaseModel):
    code: str
    language: Language = Language.JAVA
    problemId: StrictInt
    filename: Optional[str] = None

    @field_validator('language', mode='before')
    @classmethod
    def _coerce_language(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
        return v


class CompilationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    output: str


class TestResult(BaseModel):
    __test__ = False
    model_config = ConfigDict(frozen=True)

    testCaseId: str
    name: str
    passed: bool
    message: Optional[str] = None
    # ms
    executionTime: Optional[float] = None


class QualityFeedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: FeedbackType
    message: str
    details: Optional[str] = None
    category: Optional[str] = None


class PerformanceMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    codeQuality: Score
    efficiency: Score
    bestPractices: Score
    complexity: Score
    timePerformance: Score


class EvaluationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    compilationSuccessful: bool
    compilationOutput: Optional[str] = None
    testResults: Optional[List[TestResult]] = None
    qualityFeedback: Optional[List[QualityFeedback]] = None
    performanceMetrics: Optional[PerformanceMetrics] = None

    def to_response(self) -> dict:
        return self.model_dump(mode='json', exclude_none=True)
