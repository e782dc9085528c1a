"""
Quality evaluation for generated specifications.

Contains:
- validators/: Deterministic per-view and cross-view checks
- evaluators/: AI self-evaluation and the aggregated quality verdict

Usage:
    from clarity_bridge.evaluation import build_quality_service

    service = build_quality_service()
    result = await service.perform_quality_check(spec_id, views)
"""

from clarity_bridge.evaluation.evaluators import (
    LLMJudge,
    QualityAssuranceService,
    build_quality_service,
)
from clarity_bridge.evaluation.validators import (
    validate_backend_view,
    validate_cross_view,
    validate_frontend_view,
    validate_pm_view,
)

__all__ = [
    "LLMJudge",
    "QualityAssuranceService",
    "build_quality_service",
    "validate_backend_view",
    "validate_cross_view",
    "validate_frontend_view",
    "validate_pm_view",
]
