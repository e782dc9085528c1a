"""
PM view validator.

Checks overview depth, user story format and acceptance criteria,
requirement coverage and success metrics.
"""

from clarity_bridge.evaluation.validators.scorecard import Scorecard
from clarity_bridge.models.quality import IssueType, ViewValidationResult
from clarity_bridge.models.views import PmView

MIN_OVERVIEW_LENGTH = 50
MIN_ACCEPTANCE_CRITERIA = 2
MIN_FUNCTIONAL_REQUIREMENTS = 3


def validate_pm_view(view: PmView | None) -> ViewValidationResult:
    """Score a PM view. A missing view is scored as an empty one."""
    view = view or PmView(overview="")
    card = Scorecard(view="pm")

    if len(view.overview or "") < MIN_OVERVIEW_LENGTH:
        card.flag(
            "major",
            IssueType.INCOMPLETE_SPECIFICATION,
            "Overview is missing or too brief",
            suggestion="Add a comprehensive overview of the feature/product",
            completeness=0.2,
        )

    if not view.user_stories:
        card.flag(
            "critical",
            IssueType.MISSING_REQUIREMENT,
            "No user stories defined",
            suggestion="Add at least 3-5 user stories covering main features",
            completeness=0.3,
        )

    for index, story in enumerate(view.user_stories):
        location = f"userStories[{index}]"
        if "As a" not in story.description:
            card.flag(
                "minor",
                IssueType.UNCLEAR_FLOW,
                f"User story {story.id} doesn't follow standard format",
                suggestion='Use format: "As a [user], I want [feature] so that [benefit]"',
                location=location,
                clarity=0.05,
            )
        if len(story.acceptance_criteria) < MIN_ACCEPTANCE_CRITERIA:
            card.flag(
                "major",
                IssueType.INCOMPLETE_SPECIFICATION,
                f"User story {story.id} lacks sufficient acceptance criteria",
                suggestion="Add at least 2-3 specific acceptance criteria",
                location=location,
                completeness=0.1,
            )

    if len(view.requirements.functional) < MIN_FUNCTIONAL_REQUIREMENTS:
        card.flag(
            "major",
            IssueType.MISSING_REQUIREMENT,
            "Insufficient functional requirements",
            suggestion="Add more detailed functional requirements",
            completeness=0.15,
        )

    if not view.requirements.non_functional:
        card.flag(
            "minor",
            IssueType.MISSING_REQUIREMENT,
            "No non-functional requirements specified",
            suggestion="Add performance, security, and usability requirements",
            completeness=0.1,
        )

    if not view.success_metrics:
        card.flag(
            "major",
            IssueType.INCOMPLETE_SPECIFICATION,
            "No success metrics defined",
            suggestion="Add measurable success metrics for the feature",
            completeness=0.15,
        )

    return card.result()
