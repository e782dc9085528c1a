"""
Shared test fixtures and configuration for entire test suite.

Provides: Deterministic embedding source, scripted text generator,
sample processed context and a defect-free view bundle
Dependencies: pytest, pydantic
System role: Test infrastructure and fixture management
"""

from collections.abc import Sequence
from unittest.mock import MagicMock

import pytest

from clarity_bridge.boundary.llm.text_generator import GenerationResult, PromptTemplate
from clarity_bridge.configs.settings import Settings
from clarity_bridge.models.context import (
    GenerationOptions,
    ProcessedContext,
    TechnicalDetails,
    ViewGenerationContext,
)
from clarity_bridge.models.views import (
    BackendView,
    Component,
    DataModel,
    Endpoint,
    FrontendView,
    GeneratedViews,
    Infrastructure,
    ModelField,
    PmView,
    Requirements,
    Route,
    Service,
    StateManagement,
    UiUx,
    UserStory,
)


class FakeEmbeddingSource:
    """
    Deterministic embedding source.

    Known texts map to fixed vectors; unknown texts map to `default`.
    Every call is recorded so tests can assert on embedding traffic.
    """

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        default: list[float] | None = None,
    ) -> None:
        self.vectors = vectors or {}
        self.default = default or [1.0, 0.0, 0.0]
        self.embed_calls: list[str] = []
        self.embed_many_calls: list[list[str]] = []

    async def embed(self, text: str) -> list[float]:
        self.embed_calls.append(text)
        return list(self.vectors.get(text, self.default))

    async def embed_many(self, texts: Sequence[str]) -> list[list[float]]:
        self.embed_many_calls.append(list(texts))
        return [list(self.vectors.get(text, self.default)) for text in texts]


class FakeTextGenerator:
    """
    Scripted text generator.

    `responses` is consumed in call order. A response may be a string or an
    exception instance, which is raised instead of returned.
    """

    name = "fake-llm"

    def __init__(self, responses: Sequence[str | Exception] | None = None) -> None:
        self.responses = list(responses or [])
        self.calls: list[dict] = []

    async def generate(
        self,
        prompt: PromptTemplate,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> GenerationResult:
        self.calls.append({"prompt": prompt, "temperature": temperature, "max_tokens": max_tokens})
        if not self.responses:
            raise RuntimeError("FakeTextGenerator has no scripted response left")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return GenerationResult(content=response, model="fake-model", provider=self.name)


@pytest.fixture
def fake_embeddings() -> FakeEmbeddingSource:
    """Provide deterministic 3-dimensional embedding source."""
    return FakeEmbeddingSource()


@pytest.fixture
def test_settings() -> Settings:
    """Provide settings isolated from the environment and .env files."""
    settings = Settings(_env_file=None)
    settings.vector_store.provider = "memory"
    settings.vector_store.embedding_dimension = 3
    settings.vector_store.vectors_bucket = None
    return settings


@pytest.fixture
def processed_context() -> ProcessedContext:
    """Provide a processed requirements context for a login feature."""
    return ProcessedContext(
        summary="Email and password login for a SaaS dashboard",
        key_requirements=["Users can log in", "Sessions expire after inactivity"],
        technical_details=TechnicalDetails(
            stack=["React", "FastAPI", "PostgreSQL"],
            integrations=["SendGrid"],
            ui_components=["LoginForm"],
        ),
        business_rules=["Lock the account after 5 failed attempts"],
    )


@pytest.fixture
def generation_context(processed_context: ProcessedContext) -> ViewGenerationContext:
    """Provide a generation context with default options."""
    return ViewGenerationContext(
        processed=processed_context,
        original_requirements="Build a login page for our dashboard.",
        options=GenerationOptions(),
    )


@pytest.fixture
def perfect_pm_view() -> PmView:
    """Provide a PM view that raises no validator issue."""
    return PmView(
        overview=(
            "Secure email and password login for the analytics dashboard, "
            "including session expiry and password reset."
        ),
        user_stories=[
            UserStory(
                id="US001",
                title="User Login",
                description="As a user, I want to log in so that I can see my dashboard",
                acceptance_criteria=["Valid credentials open the dashboard", "Invalid credentials show an error"],
                priority="high",
            )
        ],
        requirements=Requirements(
            functional=[
                "Users can log in with email and password",
                "Users can reset a forgotten password",
                "Sessions expire after inactivity",
            ],
            non_functional=["Login responds within 200ms under normal load"],
        ),
        success_metrics=["Login success rate above 99%"],
    )


@pytest.fixture
def perfect_frontend_view() -> FrontendView:
    """Provide a Frontend view that raises no validator issue."""
    return FrontendView(
        overview="Single page application with a guarded dashboard area",
        components=[
            Component(
                name="LoginForm",
                description="Form handling user login for registered users",
                props=["onSubmit: (credentials) => void"],
                state=["email: string", "password: string"],
                interactions=["Submit credentials", "Toggle password visibility"],
            )
        ],
        routes=[
            Route(path="/login", component="LoginForm", description="Login page", guards=["GuestGuard"]),
        ],
        state_management=StateManagement(approach="Zustand", stores=["UserStore"], description="Auth state"),
        uiux=UiUx(design_system="Tailwind", key_interactions=["Inline validation"], responsiveness=["Mobile-first"]),
    )


@pytest.fixture
def perfect_backend_view() -> BackendView:
    """Provide a Backend view that raises no validator issue."""
    return BackendView(
        overview="REST API for authentication",
        architecture="Modular monolith with a REST API layer",
        endpoints=[
            Endpoint(
                method="POST",
                path="/api/auth/login",
                description="Authenticate a user",
                authentication=True,
            )
        ],
        data_models=[
            DataModel(
                name="User",
                description="Registered user",
                fields=[ModelField(name="id", type="uuid"), ModelField(name="email", type="string")],
            )
        ],
        services=[Service(name="AuthService", description="Credential checks", methods=["login"])],
        infrastructure=Infrastructure(database="PostgreSQL", caching="Redis", deployment="Docker"),
    )


@pytest.fixture
def perfect_views(
    perfect_pm_view: PmView,
    perfect_frontend_view: FrontendView,
    perfect_backend_view: BackendView,
) -> GeneratedViews:
    """Provide a complete, defect-free view bundle."""
    return GeneratedViews(
        pm_view=perfect_pm_view,
        frontend_view=perfect_frontend_view,
        backend_view=perfect_backend_view,
    )


@pytest.fixture
def mock_s3vectors_client() -> MagicMock:
    """
    Create mock boto3 s3vectors client.

    Returns:
        MagicMock: Client whose index already exists
    """
    client = MagicMock()
    client.get_index.return_value = {"index": {"indexName": "clarity-bridge"}}
    client.put_vectors.return_value = {}
    client.delete_vectors.return_value = {}
    client.query_vectors.return_value = {"vectors": []}
    client.get_vectors.return_value = {"vectors": []}
    client.list_vectors.return_value = {"vectors": []}
    return client


@pytest.fixture
def make_text_generator():
    """Provide a factory for scripted text generators."""
    return FakeTextGenerator


@pytest.fixture
def make_embeddings():
    """Provide a factory for deterministic embedding sources."""
    return FakeEmbeddingSource
