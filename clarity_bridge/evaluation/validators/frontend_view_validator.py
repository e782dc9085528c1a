"""
Frontend view validator.

Checks components, routes and guards, state management and responsiveness.
"""

from clarity_bridge.evaluation.validators.scorecard import Scorecard
from clarity_bridge.models.quality import IssueType, ViewValidationResult
from clarity_bridge.models.views import FrontendView


def validate_frontend_view(view: FrontendView | None) -> ViewValidationResult:
    """Score a Frontend view. A missing view is scored as an empty one."""
    view = view or FrontendView(overview="")
    card = Scorecard(view="frontend")

    if not view.components:
        card.flag(
            "critical",
            IssueType.MISSING_REQUIREMENT,
            "No components defined",
            suggestion="Define UI components for the application",
            completeness=0.3,
        )

    for index, component in enumerate(view.components):
        location = f"components[{index}]"
        if not component.props:
            # Informational only, no penalty
            card.flag(
                "minor",
                IssueType.INCOMPLETE_SPECIFICATION,
                f"Component {component.name} has no props defined",
                suggestion="Consider if this component needs props for flexibility",
                location=location,
            )
        if not component.interactions:
            card.flag(
                "major",
                IssueType.MISSING_REQUIREMENT,
                f"Component {component.name} has no interactions defined",
                suggestion="Define user interactions and event handlers",
                location=location,
                completeness=0.05,
            )

    if not view.routes:
        card.flag(
            "critical",
            IssueType.MISSING_REQUIREMENT,
            "No routes defined",
            suggestion="Define application routes and navigation",
            completeness=0.2,
        )
    elif not any(route.guards for route in view.routes):
        card.flag(
            "major",
            IssueType.SECURITY_CONCERN,
            "No protected routes defined",
            suggestion="Consider adding authentication guards to sensitive routes",
            technical_accuracy=0.1,
        )

    if not view.state_management.approach:
        card.flag(
            "major",
            IssueType.INCOMPLETE_SPECIFICATION,
            "State management approach not specified",
            suggestion="Define how application state will be managed",
            completeness=0.15,
        )

    if not view.uiux.responsiveness:
        card.flag(
            "major",
            IssueType.MISSING_REQUIREMENT,
            "No responsive design considerations",
            suggestion="Add responsive design strategy for different screen sizes",
            technical_accuracy=0.1,
        )

    return card.result()
