"""
Domain models.

Pydantic value objects shared by generation, retrieval and quality scoring.
"""

from clarity_bridge.models.context import (
    ContextEnhancement,
    GenerationOptions,
    ProcessedContext,
    TechnicalDetails,
    ViewGenerationContext,
)
from clarity_bridge.models.quality import (
    AiEvaluation,
    CrossViewValidationResult,
    IssueType,
    QualityCheckResult,
    QualityIssue,
    ViewQualityScore,
    ViewValidationResult,
)
from clarity_bridge.models.specification import SpecificationRecord, SpecificationVersion
from clarity_bridge.models.views import (
    VIEW_ORDER,
    BackendView,
    FrontendView,
    GeneratedViews,
    PmView,
    ViewType,
)

__all__ = [
    "AiEvaluation",
    "BackendView",
    "ContextEnhancement",
    "CrossViewValidationResult",
    "FrontendView",
    "GeneratedViews",
    "GenerationOptions",
    "IssueType",
    "PmView",
    "ProcessedContext",
    "QualityCheckResult",
    "QualityIssue",
    "SpecificationRecord",
    "SpecificationVersion",
    "TechnicalDetails",
    "VIEW_ORDER",
    "ViewGenerationContext",
    "ViewQualityScore",
    "ViewType",
    "ViewValidationResult",
]
