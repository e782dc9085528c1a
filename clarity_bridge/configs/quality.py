"""
Quality assurance configuration settings.

Weights and thresholds for the overall quality score and the
human-review gate.

Dependencies: pydantic, pydantic_settings
System role: Quality scoring configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from clarity_bridge.configs.base import section_config


class QualitySettings(BaseSettings):
    """Weights and review-gate thresholds."""

    model_config = section_config("QUALITY_")

    pm_weight: float = Field(default=0.25)
    frontend_weight: float = Field(default=0.25)
    backend_weight: float = Field(default=0.25)
    cross_view_weight: float = Field(default=0.15)
    ai_self_weight: float = Field(default=0.10)

    review_score_threshold: float = Field(
        default=0.7,
        description="Overall score below which human review is required",
    )
    ai_score_threshold: float = Field(
        default=0.6,
        description="AI self-evaluation score below which human review is required",
    )
    max_major_issues: int = Field(
        default=3,
        description="More major issues than this require human review",
    )
    max_suggestions: int = Field(default=10, description="Suggestion list cap")
    ai_fallback_score: float = Field(
        default=0.5,
        description="Neutral score used when the self-evaluation call fails",
    )
