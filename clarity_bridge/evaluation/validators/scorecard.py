"""
Score accumulation shared by the per-view validators.

Every axis starts at 1.0 and only ever decreases. Axes are not clamped:
a heavily defective view may score below zero on an axis.
"""

from dataclasses import dataclass, field

from clarity_bridge.models.quality import (
    IssueType,
    IssueView,
    QualityIssue,
    Severity,
    ViewQualityScore,
    ViewValidationResult,
)

COMPLETENESS_WEIGHT = 0.4
CLARITY_WEIGHT = 0.2
CONSISTENCY_WEIGHT = 0.2
TECHNICAL_ACCURACY_WEIGHT = 0.2


def weighted_overall(
    completeness: float,
    clarity: float,
    consistency: float,
    technical_accuracy: float,
) -> float:
    return (
        completeness * COMPLETENESS_WEIGHT
        + clarity * CLARITY_WEIGHT
        + consistency * CONSISTENCY_WEIGHT
        + technical_accuracy * TECHNICAL_ACCURACY_WEIGHT
    )


@dataclass
class Scorecard:
    """Mutable accumulator for one validation pass."""

    view: IssueView
    completeness: float = 1.0
    clarity: float = 1.0
    consistency: float = 1.0
    technical_accuracy: float = 1.0
    issues: list[QualityIssue] = field(default_factory=list)

    def flag(
        self,
        severity: Severity,
        issue_type: IssueType,
        description: str,
        suggestion: str | None = None,
        location: str | None = None,
        **penalties: float,
    ) -> None:
        """Record an issue and subtract the given axis penalties."""
        self.issues.append(
            QualityIssue(
                severity=severity,
                type=issue_type,
                view=self.view,
                description=description,
                location=location,
                suggestion=suggestion,
            )
        )
        for axis, penalty in penalties.items():
            setattr(self, axis, getattr(self, axis) - penalty)

    def result(self) -> ViewValidationResult:
        score = ViewQualityScore(
            completeness=self.completeness,
            clarity=self.clarity,
            consistency=self.consistency,
            technical_accuracy=self.technical_accuracy,
            overall=weighted_overall(
                self.completeness, self.clarity, self.consistency, self.technical_accuracy
            ),
        )
        return ViewValidationResult(score=score, issues=self.issues)
