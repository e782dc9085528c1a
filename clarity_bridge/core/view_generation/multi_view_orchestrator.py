"""
Multi-view generation orchestrator.

Runs the PM, Frontend and Backend generators for a processed context,
sequentially or concurrently, and attaches generation metadata (duration,
token estimate, heuristic confidence).

Dependencies: clarity_bridge.core.view_generation, clarity_bridge.boundary.llm
System role: Multi-view generation use case
"""

import asyncio
import json
import logging
import math
import re
import time
from collections.abc import Sequence

from pydantic import Field

from clarity_bridge.boundary.llm.text_generator import TextGenerator, create_text_generator
from clarity_bridge.configs import Settings, get_settings
from clarity_bridge.core.exceptions import ViewGenerationError
from clarity_bridge.core.view_generation.view_generators import ViewGenerator, build_generators
from clarity_bridge.models.common import CamelModel
from clarity_bridge.models.context import GenerationOptions, ViewGenerationContext
from clarity_bridge.models.views import VIEW_ORDER, GeneratedViews, ViewType
from clarity_bridge.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

_ENTITY_PATTERNS = (
    re.compile(r"user|customer|client|admin|manager", re.IGNORECASE),
    re.compile(r"product|item|service|order|payment", re.IGNORECASE),
    re.compile(r"account|profile|settings|configuration", re.IGNORECASE),
)


class GenerationMetadata(CamelModel):
    generation_time_ms: int
    tokens_used: int
    confidence: float
    provider: str


class ViewGenerationResult(CamelModel):
    """Generated views plus metadata. `failures` is only filled in partial mode."""

    views: GeneratedViews
    metadata: GenerationMetadata
    failures: dict[str, str] = Field(default_factory=dict)


class ConsistencyReport(CamelModel):
    is_consistent: bool
    issues: list[str] = Field(default_factory=list)


def estimate_tokens(views: GeneratedViews) -> int:
    """Rough estimate: one token per four characters of the JSON payload."""
    return math.ceil(len(json.dumps(views.to_payload())) / 4)


def calculate_confidence(views: GeneratedViews) -> float:
    confidence = 0.5
    if views.pm_view and views.pm_view.user_stories:
        confidence += 0.1
    if views.frontend_view and views.frontend_view.components:
        confidence += 0.1
    if views.backend_view and views.backend_view.endpoints:
        confidence += 0.1
    if views.backend_view and views.backend_view.data_models:
        confidence += 0.1
    if views.pm_view and views.frontend_view and views.backend_view:
        confidence += 0.1
    return min(round(confidence, 10), 1.0)


def extract_entities(requirements: Sequence[str]) -> list[str]:
    """Domain entities mentioned in requirement text, lower-cased, first-seen order."""
    entities: dict[str, None] = {}
    for requirement in requirements:
        for pattern in _ENTITY_PATTERNS:
            for match in pattern.findall(requirement):
                entities[match.lower()] = None
    return list(entities)


class MultiViewOrchestrator:
    """
    Multi-view orchestrator.

    Usage:
        orchestrator = build_orchestrator()
        result = await orchestrator.generate_all_views(context, parallel=True)
    """

    def __init__(
        self,
        text_generator: TextGenerator,
        generators: dict[ViewType, ViewGenerator] | None = None,
    ) -> None:
        """
        Args:
            text_generator: Collaborator shared by every generator
            generators: Override the default generator per view type
        """
        self._text_generator = text_generator
        self._generators = generators or build_generators(text_generator)

    async def generate_all_views(
        self,
        context: ViewGenerationContext,
        views: Sequence[ViewType] | None = None,
        parallel: bool = False,
        allow_partial: bool = False,
    ) -> ViewGenerationResult:
        """
        Generate the requested views (all three by default).

        Sequential mode always runs in pm, frontend, backend order and stops
        at the first failure. Parallel mode fails fast unless allow_partial is
        set, in which case successful views are kept and failures recorded.

        Raises:
            ViewGenerationError: If every view fails in partial mode
            Exception: The first generator failure otherwise
        """
        wanted = set(VIEW_ORDER if views is None else views)
        requested = [view_type for view_type in VIEW_ORDER if view_type in wanted]
        start_time = time.perf_counter()

        try:
            if parallel:
                generated, failures = await self._generate_parallel(context, requested, allow_partial)
            else:
                generated, failures = await self._generate_sequential(context, requested), {}
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:generate_all_views - View generation failed",
                e,
                views=requested,
                parallel=parallel,
            )
            raise

        bundle = GeneratedViews(**{f"{view_type}_view": view for view_type, view in generated.items()})
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)

        logger.info(
            f"{__name__}:generate_all_views - Generated {len(generated)} views in {elapsed_ms}ms"
            + (f" ({len(failures)} failed)" if failures else "")
        )

        return ViewGenerationResult(
            views=bundle,
            metadata=GenerationMetadata(
                generation_time_ms=elapsed_ms,
                tokens_used=estimate_tokens(bundle),
                confidence=calculate_confidence(bundle),
                provider=self._text_generator.name,
            ),
            failures=failures,
        )

    async def _generate_sequential(
        self,
        context: ViewGenerationContext,
        requested: list[ViewType],
    ) -> dict[ViewType, CamelModel]:
        generated: dict[ViewType, CamelModel] = {}
        for view_type in requested:
            generated[view_type] = await self._generators[view_type].generate(context)
        return generated

    async def _generate_parallel(
        self,
        context: ViewGenerationContext,
        requested: list[ViewType],
        allow_partial: bool,
    ) -> tuple[dict[ViewType, CamelModel], dict[str, str]]:
        tasks = [self._generators[view_type].generate(context) for view_type in requested]

        if not allow_partial:
            results = await asyncio.gather(*tasks)
            return dict(zip(requested, results)), {}

        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        generated: dict[ViewType, CamelModel] = {}
        failures: dict[str, str] = {}
        errors: list[BaseException] = []
        for view_type, outcome in zip(requested, outcomes):
            if isinstance(outcome, BaseException):
                failures[view_type] = str(outcome)
                errors.append(outcome)
            else:
                generated[view_type] = outcome

        if requested and not generated:
            raise ViewGenerationError(
                "All requested views failed",
                details={"failures": failures},
            ) from errors[0]
        return generated, failures

    async def generate_single_view(
        self,
        view_type: ViewType,
        context: ViewGenerationContext,
        options: GenerationOptions | None = None,
        improvements: list[str] | None = None,
    ) -> CamelModel:
        """Generate one view, optionally overriding the context's options."""
        if view_type not in self._generators:
            raise ViewGenerationError(f"Unknown view type: {view_type}", view_type=view_type)
        if options is not None:
            context = context.model_copy(update={"options": options})
        return await self._generators[view_type].generate(context, improvements)

    async def regenerate_view_section(
        self,
        view_type: ViewType,
        section: str,
        context: ViewGenerationContext,
        current_view: CamelModel | None = None,
        improvements: list[str] | None = None,
    ) -> CamelModel:
        """
        Regenerate a section of a view.

        Sections are not generated in isolation: the whole view is regenerated
        at comprehensive detail, with the improvements as extra guidance.
        """
        logger.info(f"{__name__}:regenerate_view_section - Regenerating {section} of {view_type} view")
        options = context.options.model_copy(update={"detail_level": "comprehensive"})
        guidance = list(improvements or [])
        if current_view is not None and guidance:
            guidance.insert(0, f"Improve the '{section}' section of the previous version")
        return await self.generate_single_view(view_type, context, options, guidance or None)

    def validate_view_consistency(self, views: GeneratedViews) -> ConsistencyReport:
        """Quick structural consistency check between the generated views."""
        issues: list[str] = []
        pm, frontend, backend = views.pm_view, views.frontend_view, views.backend_view

        if pm and frontend:
            covered = all(
                any(story.title.lower() in component.description.lower() for component in frontend.components)
                for story in pm.user_stories
            )
            if not covered:
                issues.append("Not all user stories have corresponding frontend components")

        if frontend and backend:
            for route in frontend.routes:
                if route.path == "/":
                    continue
                segments = route.path.split("/")
                segment = segments[1] if len(segments) > 1 else ""
                if not any(segment in endpoint.path for endpoint in backend.endpoints):
                    issues.append(f"No backend endpoint found for route: {route.path}")

        if backend and pm:
            for entity in extract_entities(pm.requirements.functional):
                if not any(entity in model.name.lower() for model in backend.data_models):
                    issues.append(f"No data model found for entity: {entity}")

        return ConsistencyReport(is_consistent=not issues, issues=issues)


def build_orchestrator(
    text_generator: TextGenerator | None = None,
    settings: Settings | None = None,
) -> MultiViewOrchestrator:
    """Assemble the orchestrator with the configured text generator."""
    settings = settings or get_settings()
    text_generator = text_generator or create_text_generator(settings)
    generators = build_generators(text_generator, temperature=settings.llm.temperature)
    return MultiViewOrchestrator(text_generator, generators)
