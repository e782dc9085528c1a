"""
Cross-view consistency validator.

Compares each pair of present views: user stories against components,
routes and stores against endpoints and data models, functional and
performance requirements against endpoints and infrastructure.
"""

import re

from clarity_bridge.models.quality import (
    CrossViewValidationResult,
    IssueType,
    QualityIssue,
)
from clarity_bridge.models.views import BackendView, FrontendView, GeneratedViews, PmView

ISSUE_PENALTY = 0.05
CRUD_OPERATIONS = ("create", "read", "update", "delete", "list", "get", "add", "remove")
_ENTITY_PHRASE = re.compile(r"(\w+)s?\s+(?:management|operations|functionality)", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def _issue(
    severity: str,
    issue_type: IssueType,
    description: str,
    suggestion: str,
) -> QualityIssue:
    return QualityIssue(
        severity=severity,
        type=issue_type,
        view="cross-view",
        description=description,
        suggestion=suggestion,
    )


def check_pm_to_frontend(pm: PmView, frontend: FrontendView) -> list[QualityIssue]:
    issues = []
    for story in pm.user_stories:
        title = story.title.lower()
        compact_title = _WHITESPACE.sub("", title)
        covered = any(
            title in component.description.lower() or compact_title in component.name.lower()
            for component in frontend.components
        )
        if not covered:
            issues.append(
                _issue(
                    "major",
                    IssueType.MISSING_REQUIREMENT,
                    f'User story "{story.title}" has no corresponding frontend component',
                    "Create frontend components for all user stories",
                )
            )
    return issues


def check_frontend_to_backend(frontend: FrontendView, backend: BackendView) -> list[QualityIssue]:
    issues = []
    for route in frontend.routes:
        # Root and parameterised routes are not matched
        if route.path == "/" or ":" in route.path:
            continue
        segments = route.path.split("/")
        route_base = segments[1] if len(segments) > 1 else ""
        if not route_base:
            continue
        if not any(route_base in endpoint.path for endpoint in backend.endpoints):
            issues.append(
                _issue(
                    "major",
                    IssueType.MISSING_REQUIREMENT,
                    f'Frontend route "{route.path}" has no corresponding backend endpoint',
                    "Create backend endpoints for all frontend routes",
                )
            )

    model_names = {model.name.lower() for model in backend.data_models}
    for store in frontend.state_management.stores:
        if store.replace("Store", "", 1).lower() not in model_names:
            issues.append(
                _issue(
                    "minor",
                    IssueType.INCONSISTENT_NAMING,
                    f'Frontend store "{store}" has no corresponding data model',
                    "Align frontend stores with backend data models",
                )
            )
    return issues


def check_pm_to_backend(pm: PmView, backend: BackendView) -> list[QualityIssue]:
    issues = []
    endpoint_paths = [endpoint.path.lower() for endpoint in backend.endpoints]

    for requirement in pm.requirements.functional:
        lowered = requirement.lower()
        if not any(operation in lowered for operation in CRUD_OPERATIONS):
            continue
        match = _ENTITY_PHRASE.search(requirement)
        if match is None:
            continue
        entity = match.group(1)
        if not any(entity.lower() in path for path in endpoint_paths):
            issues.append(
                _issue(
                    "major",
                    IssueType.MISSING_REQUIREMENT,
                    f'Functional requirement "{requirement}" has no backend implementation',
                    f"Add endpoints for {entity} operations",
                )
            )

    performance_required = any(
        "performance" in req.lower() or "speed" in req.lower()
        for req in pm.requirements.non_functional
    )
    if performance_required and not backend.infrastructure.caching:
        issues.append(
            _issue(
                "minor",
                IssueType.PERFORMANCE_CONCERN,
                "Performance requirements specified but no caching strategy defined",
                "Consider adding caching infrastructure",
            )
        )
    return issues


def validate_cross_view(views: GeneratedViews) -> CrossViewValidationResult:
    """Check every pair of present views. Score drops 0.05 per issue, floored at 0."""
    issues: list[QualityIssue] = []
    pm, frontend, backend = views.pm_view, views.frontend_view, views.backend_view

    if pm and frontend:
        issues.extend(check_pm_to_frontend(pm, frontend))
    if frontend and backend:
        issues.extend(check_frontend_to_backend(frontend, backend))
    if pm and backend:
        issues.extend(check_pm_to_backend(pm, backend))

    score = max(0.0, 1.0 - ISSUE_PENALTY * len(issues))
    return CrossViewValidationResult(score=score, issues=issues)
