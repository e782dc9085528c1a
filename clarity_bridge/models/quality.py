"""
Quality assurance models.

Issues, per-view scores and the aggregated quality check result.

Dependencies: pydantic
System role: Quality scoring structures
"""

from enum import Enum
from typing import Literal

from pydantic import ConfigDict, Field

from clarity_bridge.models.common import CamelModel

Severity = Literal["critical", "major", "minor"]
IssueView = Literal["pm", "frontend", "backend", "cross-view"]


class IssueType(str, Enum):
    """Defect categories raised by the validators."""

    MISSING_REQUIREMENT = "missing_requirement"
    INCONSISTENT_NAMING = "inconsistent_naming"
    INCOMPLETE_SPECIFICATION = "incomplete_specification"
    AMBIGUOUS_REQUIREMENT = "ambiguous_requirement"
    MISSING_ERROR_HANDLING = "missing_error_handling"
    SECURITY_CONCERN = "security_concern"
    PERFORMANCE_CONCERN = "performance_concern"
    MISSING_VALIDATION = "missing_validation"
    UNCLEAR_FLOW = "unclear_flow"
    DATA_MODEL_ISSUE = "data_model_issue"


class QualityIssue(CamelModel):
    """A single detected defect. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    type: IssueType
    view: IssueView
    description: str
    location: str | None = None
    suggestion: str | None = None


class ViewQualityScore(CamelModel):
    """Four score axes plus their weighted overall value.

    Axes are not clamped and may drop below zero for heavily defective views.
    """

    completeness: float = 1.0
    clarity: float = 1.0
    consistency: float = 1.0
    technical_accuracy: float = 1.0
    overall: float = 1.0


class ViewValidationResult(CamelModel):
    score: ViewQualityScore
    issues: list[QualityIssue] = Field(default_factory=list)


class CrossViewValidationResult(CamelModel):
    score: float
    issues: list[QualityIssue] = Field(default_factory=list)


class DetailedScores(CamelModel):
    pm_view: ViewQualityScore
    frontend_view: ViewQualityScore
    backend_view: ViewQualityScore
    cross_view_consistency: float


class AiEvaluation(CamelModel):
    """Parsed self-evaluation of a view bundle."""

    score: float = Field(ge=0.0, le=1.0)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    critical_issues: list[str] = Field(default_factory=list)


class QualityCheckResult(CamelModel):
    """Aggregated quality verdict for one set of generated views."""

    overall_score: float
    ai_self_score: float
    consistency_score: float
    completeness_score: float
    issues: list[QualityIssue] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    requires_human_review: bool
    detailed_scores: DetailedScores
