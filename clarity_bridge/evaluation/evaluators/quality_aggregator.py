"""
Quality score aggregation.

Combines the per-view validators, the cross-view validator and the AI
self-evaluation into one quality verdict, including the human-review gate
and a deduplicated suggestion list.

Dependencies: clarity_bridge.evaluation, clarity_bridge.configs
System role: Quality assurance use case
"""

import logging
import time
from collections.abc import Sequence

from clarity_bridge.boundary.llm.text_generator import TextGenerator, create_text_generator
from clarity_bridge.configs import Settings, get_settings
from clarity_bridge.configs.quality import QualitySettings
from clarity_bridge.core.exceptions import QualityCheckError
from clarity_bridge.evaluation.evaluators.llm_judge import LLMJudge
from clarity_bridge.evaluation.validators import (
    validate_backend_view,
    validate_cross_view,
    validate_frontend_view,
    validate_pm_view,
)
from clarity_bridge.models.quality import (
    DetailedScores,
    IssueType,
    QualityCheckResult,
    QualityIssue,
)
from clarity_bridge.models.views import GeneratedViews
from clarity_bridge.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

# Emitted ahead of per-issue suggestions when the issue type is present
CANNED_SUGGESTIONS = (
    (IssueType.MISSING_REQUIREMENT, "Add more detailed requirements coverage across all views"),
    (IssueType.SECURITY_CONCERN, "Implement comprehensive authentication and authorization strategies"),
    (IssueType.INCOMPLETE_SPECIFICATION, "Expand specifications with more detailed implementation guidelines"),
)


def build_suggestions(issues: Sequence[QualityIssue], limit: int = 10) -> list[str]:
    """Canned suggestions for common issue types, then unique per-issue ones."""
    present_types = {issue.type for issue in issues}
    suggestions = [text for issue_type, text in CANNED_SUGGESTIONS if issue_type in present_types]

    for issue in issues:
        if issue.suggestion and issue.suggestion not in suggestions:
            suggestions.append(issue.suggestion)
    return suggestions[:limit]


class QualityAssuranceService:
    """Quality assurance orchestrator."""

    def __init__(self, judge: LLMJudge, settings: QualitySettings | None = None) -> None:
        """
        Args:
            judge: AI self-evaluation judge
            settings: Weights and review thresholds (defaults to configuration)
        """
        self._judge = judge
        self._settings = settings or get_settings().quality

    def calculate_overall_score(
        self,
        pm_score: float,
        frontend_score: float,
        backend_score: float,
        cross_view_score: float,
        ai_self_score: float,
    ) -> float:
        """Weighted average of the five signals, clamped to [0, 1]."""
        s = self._settings
        overall = (
            pm_score * s.pm_weight
            + frontend_score * s.frontend_weight
            + backend_score * s.backend_weight
            + cross_view_score * s.cross_view_weight
            + ai_self_score * s.ai_self_weight
        )
        return min(1.0, max(0.0, overall))

    def requires_human_review(
        self,
        overall_score: float,
        ai_self_score: float,
        issues: Sequence[QualityIssue],
    ) -> bool:
        s = self._settings
        if overall_score < s.review_score_threshold:
            return True
        if any(issue.severity == "critical" for issue in issues):
            return True
        if sum(1 for issue in issues if issue.severity == "major") > s.max_major_issues:
            return True
        return ai_self_score < s.ai_score_threshold

    async def perform_quality_check(
        self,
        specification_id: str,
        views: GeneratedViews,
    ) -> QualityCheckResult:
        """
        Score a set of generated views.

        Args:
            specification_id: Specification the views belong to (for logging)
            views: Generated views; missing views are scored as empty

        Returns:
            QualityCheckResult: Scores, issues, suggestions and the review verdict

        Raises:
            QualityCheckError: If a validator fails on malformed views
        """
        start_time = time.perf_counter()
        try:
            pm = validate_pm_view(views.pm_view)
            frontend = validate_frontend_view(views.frontend_view)
            backend = validate_backend_view(views.backend_view)
            cross_view = validate_cross_view(views)

            evaluation = await self._judge.evaluate(views)
            ai_self_score = evaluation.score

            issues = [*pm.issues, *frontend.issues, *backend.issues, *cross_view.issues]

            overall_score = self.calculate_overall_score(
                pm.score.overall,
                frontend.score.overall,
                backend.score.overall,
                cross_view.score,
                ai_self_score,
            )
            completeness_score = (
                pm.score.completeness + frontend.score.completeness + backend.score.completeness
            ) / 3

            result = QualityCheckResult(
                overall_score=overall_score,
                ai_self_score=ai_self_score,
                consistency_score=cross_view.score,
                completeness_score=completeness_score,
                issues=issues,
                suggestions=build_suggestions(issues, self._settings.max_suggestions),
                requires_human_review=self.requires_human_review(overall_score, ai_self_score, issues),
                detailed_scores=DetailedScores(
                    pm_view=pm.score,
                    frontend_view=frontend.score,
                    backend_view=backend.score,
                    cross_view_consistency=cross_view.score,
                ),
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:perform_quality_check - Quality check failed",
                e,
                specification_id=specification_id,
            )
            raise QualityCheckError(
                f"Quality check failed for {specification_id}",
                details={"specification_id": specification_id, "error_type": type(e).__name__},
            ) from e

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:perform_quality_check - Quality check completed for {specification_id}: "
            f"score {result.overall_score:.2f}, review={result.requires_human_review} "
            f"({elapsed_ms:.1f}ms)"
        )
        return result


def build_quality_service(
    text_generator: TextGenerator | None = None,
    settings: Settings | None = None,
) -> QualityAssuranceService:
    """Assemble the quality service with the configured judge."""
    settings = settings or get_settings()
    text_generator = text_generator or create_text_generator(settings)
    judge = LLMJudge(text_generator, fallback_score=settings.quality.ai_fallback_score)
    return QualityAssuranceService(judge, settings.quality)
