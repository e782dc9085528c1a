"""
Backend view validator.

Checks architecture, endpoints (authentication, methods, paths), data
models (identifiers, relationships), services and infrastructure.
"""

from clarity_bridge.evaluation.validators.scorecard import Scorecard
from clarity_bridge.models.quality import IssueType, ViewValidationResult
from clarity_bridge.models.views import BackendView

MIN_ARCHITECTURE_LENGTH = 20
STANDARD_HTTP_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"})


def _has_identifier(field_names: list[str]) -> bool:
    return any(name.lower() == "id" or name.lower().endswith("id") for name in field_names)


def validate_backend_view(view: BackendView | None) -> ViewValidationResult:
    """Score a Backend view. A missing view is scored as an empty one."""
    view = view or BackendView(overview="")
    card = Scorecard(view="backend")

    if len(view.architecture or "") < MIN_ARCHITECTURE_LENGTH:
        card.flag(
            "major",
            IssueType.INCOMPLETE_SPECIFICATION,
            "Architecture description is missing or too brief",
            suggestion="Provide detailed architecture description",
            completeness=0.15,
        )

    if not view.endpoints:
        card.flag(
            "critical",
            IssueType.MISSING_REQUIREMENT,
            "No API endpoints defined",
            suggestion="Define REST API endpoints",
            completeness=0.3,
        )
    else:
        if not any(endpoint.authentication for endpoint in view.endpoints):
            card.flag(
                "major",
                IssueType.SECURITY_CONCERN,
                "No endpoints require authentication",
                suggestion="Add authentication to sensitive endpoints",
                technical_accuracy=0.15,
            )

        for index, endpoint in enumerate(view.endpoints):
            location = f"endpoints[{index}]"
            if endpoint.method not in STANDARD_HTTP_METHODS:
                card.flag(
                    "minor",
                    IssueType.INCONSISTENT_NAMING,
                    f"Invalid HTTP method: {endpoint.method}",
                    suggestion="Use standard HTTP methods: GET, POST, PUT, DELETE, PATCH",
                    location=location,
                    technical_accuracy=0.05,
                )
            if not endpoint.path.startswith("/"):
                card.flag(
                    "minor",
                    IssueType.INCONSISTENT_NAMING,
                    f"Endpoint path should start with /: {endpoint.path}",
                    location=location,
                    consistency=0.02,
                )

    if not view.data_models:
        card.flag(
            "critical",
            IssueType.MISSING_REQUIREMENT,
            "No data models defined",
            suggestion="Define database models/entities",
            completeness=0.3,
        )

    for index, model in enumerate(view.data_models):
        location = f"dataModels[{index}]"
        if not _has_identifier([f.name for f in model.fields]):
            card.flag(
                "major",
                IssueType.DATA_MODEL_ISSUE,
                f"Model {model.name} has no identifier field",
                suggestion="Add an ID field to the model",
                location=location,
                technical_accuracy=0.1,
            )
        if not model.relationships and len(view.data_models) > 1:
            card.flag(
                "minor",
                IssueType.DATA_MODEL_ISSUE,
                f"Model {model.name} has no relationships defined",
                suggestion="Consider if this model relates to others",
                location=location,
            )

    if not view.services:
        card.flag(
            "major",
            IssueType.INCOMPLETE_SPECIFICATION,
            "No services defined",
            suggestion="Define business logic services",
            completeness=0.2,
        )

    if not view.infrastructure.database:
        card.flag(
            "critical",
            IssueType.MISSING_REQUIREMENT,
            "Database not specified",
            suggestion="Specify database technology",
            completeness=0.1,
        )

    return card.result()
