"""
Generated view models.

Schemas for the three engineering views. Generator output is validated
against these models; anything that does not fit is rejected.

Dependencies: pydantic
System role: Multi-view specification structures
"""

from typing import Any, Literal

from pydantic import Field, field_validator

from clarity_bridge.models.common import CamelModel

ViewType = Literal["pm", "frontend", "backend"]
VIEW_ORDER: tuple[ViewType, ...] = ("pm", "frontend", "backend")


# ---------------------------------------------------------------------------
# PM view
# ---------------------------------------------------------------------------


class UserStory(CamelModel):
    """User story with acceptance criteria."""

    id: str = ""
    title: str = "User Story"
    description: str = ""
    acceptance_criteria: list[str] = Field(default_factory=list)
    priority: Literal["high", "medium", "low"] = "medium"

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value: Any) -> str:
        if isinstance(value, str) and value.lower() in ("high", "medium", "low"):
            return value.lower()
        return "medium"


class Requirements(CamelModel):
    functional: list[str] = Field(default_factory=list)
    non_functional: list[str] = Field(default_factory=list)


class PmView(CamelModel):
    """Product manager view."""

    overview: str
    user_stories: list[UserStory] = Field(default_factory=list)
    wireframes: str | None = None
    requirements: Requirements = Field(default_factory=Requirements)
    success_metrics: list[str] = Field(default_factory=list)

    def model_post_init(self, __context: Any) -> None:
        # Stories without an id get positional ids US001, US002, ...
        for index, story in enumerate(self.user_stories):
            if not story.id:
                story.id = f"US{index + 1:03d}"


# ---------------------------------------------------------------------------
# Frontend view
# ---------------------------------------------------------------------------


class Component(CamelModel):
    name: str = "Component"
    description: str = ""
    props: list[str] = Field(default_factory=list)
    state: list[str] = Field(default_factory=list)
    interactions: list[str] = Field(default_factory=list)


class Route(CamelModel):
    path: str = "/"
    component: str = "Component"
    description: str = ""
    guards: list[str] = Field(default_factory=list)


class StateManagement(CamelModel):
    approach: str = ""
    stores: list[str] = Field(default_factory=list)
    description: str = ""


class UiUx(CamelModel):
    design_system: str = ""
    key_interactions: list[str] = Field(default_factory=list)
    responsiveness: list[str] = Field(default_factory=list)


class FrontendView(CamelModel):
    """Frontend engineering view."""

    overview: str
    components: list[Component] = Field(default_factory=list)
    routes: list[Route] = Field(default_factory=list)
    state_management: StateManagement = Field(default_factory=StateManagement)
    uiux: UiUx = Field(default_factory=UiUx)


# ---------------------------------------------------------------------------
# Backend view
# ---------------------------------------------------------------------------


class Endpoint(CamelModel):
    method: str = "GET"
    path: str = ""
    description: str = ""
    request_body: Any | None = None
    response_body: Any | None = None
    authentication: bool = True

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value


class ModelField(CamelModel):
    name: str = "field"
    type: str = "string"
    required: bool = True
    description: str | None = None


class DataModel(CamelModel):
    name: str = "Model"
    description: str = ""
    fields: list[ModelField] = Field(default_factory=list)
    relationships: list[str] = Field(default_factory=list)


class Service(CamelModel):
    name: str = "Service"
    description: str = ""
    methods: list[str] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)


class Infrastructure(CamelModel):
    database: str = ""
    caching: str | None = None
    queuing: str | None = None
    deployment: str = ""


class BackendView(CamelModel):
    """Backend engineering view."""

    overview: str
    architecture: str = ""
    endpoints: list[Endpoint] = Field(default_factory=list)
    data_models: list[DataModel] = Field(default_factory=list)
    services: list[Service] = Field(default_factory=list)
    infrastructure: Infrastructure = Field(default_factory=Infrastructure)


VIEW_SCHEMAS: dict[str, type[CamelModel]] = {
    "pm": PmView,
    "frontend": FrontendView,
    "backend": BackendView,
}


class GeneratedViews(CamelModel):
    """The three views of one generation request. Absent views stay None."""

    pm_view: PmView | None = None
    frontend_view: FrontendView | None = None
    backend_view: BackendView | None = None

    def get(self, view_type: ViewType) -> CamelModel | None:
        return getattr(self, f"{view_type}_view")

    def present(self) -> list[ViewType]:
        """View types that were generated, in canonical order."""
        return [view_type for view_type in VIEW_ORDER if self.get(view_type) is not None]
