"""
Evaluation logic: AI self-evaluation and quality score aggregation.
"""

from clarity_bridge.evaluation.evaluators.llm_judge import LLMJudge
from clarity_bridge.evaluation.evaluators.quality_aggregator import (
    QualityAssuranceService,
    build_quality_service,
    build_suggestions,
)

__all__ = [
    "LLMJudge",
    "QualityAssuranceService",
    "build_quality_service",
    "build_suggestions",
]
