"""
View generators.

One generator per engineering view. Each builds its prompt from the
generation context, calls the text generator and parses the output into
the view schema.

Dependencies: clarity_bridge.boundary.llm, clarity_bridge.core.view_generation
System role: PM, Frontend and Backend view generation
"""

import logging
from typing import Callable

from clarity_bridge.boundary.llm.text_generator import PromptTemplate, TextGenerator
from clarity_bridge.core.view_generation.view_parser import extract_mermaid, parse_view
from clarity_bridge.core.view_generation.view_prompts import (
    build_backend_prompt,
    build_frontend_prompt,
    build_pm_prompt,
    build_wireframe_prompt,
)
from clarity_bridge.models.common import CamelModel
from clarity_bridge.models.context import ViewGenerationContext
from clarity_bridge.models.views import PmView, ViewType

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7
WIREFRAME_TEMPERATURE = 0.5
WIREFRAME_MAX_TOKENS = 1000


class ViewGenerator:
    """Base generator: prompt, generate, parse."""

    view_type: ViewType
    max_tokens: int = 3000
    prompt_builder: Callable[..., PromptTemplate]

    def __init__(self, text_generator: TextGenerator, temperature: float = DEFAULT_TEMPERATURE) -> None:
        self._text_generator = text_generator
        self._temperature = temperature

    def build_prompt(
        self,
        context: ViewGenerationContext,
        improvements: list[str] | None = None,
    ) -> PromptTemplate:
        return self.prompt_builder(context, improvements)

    async def generate(
        self,
        context: ViewGenerationContext,
        improvements: list[str] | None = None,
    ) -> CamelModel:
        """
        Generate and parse one view.

        Raises:
            ViewParseError: If the output does not fit the view schema
            Exception: Text generator failures propagate unchanged
        """
        prompt = self.build_prompt(context, improvements)
        try:
            result = await self._text_generator.generate(
                prompt,
                temperature=self._temperature,
                max_tokens=self.max_tokens,
            )
            view = parse_view(self.view_type, result.content).unwrap()
        except Exception as e:
            logger.error(f"{__name__}:generate - {self.view_type} view generation failed: {e}")
            raise

        logger.debug(f"{__name__}:generate - {self.view_type} view parsed")
        return view


class PmViewGenerator(ViewGenerator):
    """Product manager view, with an optional Mermaid wireframe."""

    view_type = "pm"
    max_tokens = 3000
    prompt_builder = staticmethod(build_pm_prompt)

    async def generate(
        self,
        context: ViewGenerationContext,
        improvements: list[str] | None = None,
    ) -> PmView:
        view = await super().generate(context, improvements)
        if context.options.generate_diagrams:
            view.wireframes = await self.generate_wireframe(view)
        return view

    async def generate_wireframe(self, view: PmView) -> str:
        """Mermaid diagram of the primary user journey. Failures yield ''."""
        try:
            result = await self._text_generator.generate(
                build_wireframe_prompt(view),
                temperature=WIREFRAME_TEMPERATURE,
                max_tokens=WIREFRAME_MAX_TOKENS,
            )
        except Exception as e:
            logger.error(f"{__name__}:generate_wireframe - {type(e).__name__}: {e}")
            return ""
        return extract_mermaid(result.content)


class FrontendViewGenerator(ViewGenerator):
    view_type = "frontend"
    max_tokens = 3000
    prompt_builder = staticmethod(build_frontend_prompt)


class BackendViewGenerator(ViewGenerator):
    view_type = "backend"
    max_tokens = 3500
    prompt_builder = staticmethod(build_backend_prompt)


def build_generators(
    text_generator: TextGenerator,
    temperature: float = DEFAULT_TEMPERATURE,
) -> dict[ViewType, ViewGenerator]:
    return {
        "pm": PmViewGenerator(text_generator, temperature),
        "frontend": FrontendViewGenerator(text_generator, temperature),
        "backend": BackendViewGenerator(text_generator, temperature),
    }
