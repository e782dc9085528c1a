"""
Test suite for the PM, Frontend and Backend view generators.

Uses a scripted text generator; asserts on prompts, generation parameters
and parsed output.

System role: Verification of view generation
"""

import json

import pytest

from clarity_bridge.core.exceptions import ViewParseError
from clarity_bridge.core.view_generation.view_generators import (
    BackendViewGenerator,
    FrontendViewGenerator,
    PmViewGenerator,
)
from clarity_bridge.models.context import (
    ContextEnhancement,
    GenerationOptions,
    RelatedSpecification,
    ViewGenerationContext,
)


class TestPmViewGenerator:
    """Test suite for PmViewGenerator."""

    @pytest.mark.asyncio
    async def test_generate_should_parse_view_with_default_parameters(
        self, make_text_generator, generation_context: ViewGenerationContext, perfect_pm_view
    ) -> None:
        llm = make_text_generator([json.dumps(perfect_pm_view.to_payload())])

        view = await PmViewGenerator(llm).generate(generation_context)

        assert view.overview == perfect_pm_view.overview
        assert view.wireframes is None
        assert llm.calls[0]["temperature"] == 0.7
        assert llm.calls[0]["max_tokens"] == 3000

    @pytest.mark.asyncio
    async def test_prompt_should_include_context_and_related_specs(
        self, make_text_generator, generation_context: ViewGenerationContext, perfect_pm_view
    ) -> None:
        context = generation_context.model_copy(
            update={
                "enhancement": ContextEnhancement(
                    related_specifications=[RelatedSpecification(id="s1", title="Signup", relevance=0.83)]
                )
            }
        )
        llm = make_text_generator([json.dumps(perfect_pm_view.to_payload())])

        await PmViewGenerator(llm).generate(context)

        prompt = llm.calls[0]["prompt"]
        assert "Build a login page for our dashboard." in prompt.user
        assert "- Users can log in" in prompt.user
        assert "Lock the account after 5 failed attempts" in prompt.user
        assert "Signup (83% relevant)" in prompt.user
        assert "Product Manager" in prompt.system

    @pytest.mark.asyncio
    async def test_diagrams_should_add_wireframe(
        self, make_text_generator, generation_context: ViewGenerationContext, perfect_pm_view
    ) -> None:
        context = generation_context.model_copy(update={"options": GenerationOptions(generate_diagrams=True)})
        llm = make_text_generator(
            [json.dumps(perfect_pm_view.to_payload()), "```mermaid\ngraph TD\n  Login-->Dashboard\n```"]
        )

        view = await PmViewGenerator(llm).generate(context)

        assert view.wireframes == "graph TD\n  Login-->Dashboard"
        assert llm.calls[1]["temperature"] == 0.5
        assert llm.calls[1]["max_tokens"] == 1000
        assert "User Login" in llm.calls[1]["prompt"].user

    @pytest.mark.asyncio
    async def test_wireframe_failure_should_yield_empty_string(
        self, make_text_generator, generation_context: ViewGenerationContext, perfect_pm_view
    ) -> None:
        context = generation_context.model_copy(update={"options": GenerationOptions(generate_diagrams=True)})
        llm = make_text_generator([json.dumps(perfect_pm_view.to_payload()), RuntimeError("timeout")])

        view = await PmViewGenerator(llm).generate(context)

        assert view.wireframes == ""

    @pytest.mark.asyncio
    async def test_malformed_output_should_raise(
        self, make_text_generator, generation_context: ViewGenerationContext
    ) -> None:
        llm = make_text_generator(["Sorry, I can't do that."])

        with pytest.raises(ViewParseError):
            await PmViewGenerator(llm).generate(generation_context)

    @pytest.mark.asyncio
    async def test_generator_failure_should_propagate(
        self, make_text_generator, generation_context: ViewGenerationContext
    ) -> None:
        llm = make_text_generator([ConnectionError("down")])

        with pytest.raises(ConnectionError):
            await PmViewGenerator(llm).generate(generation_context)


class TestFrontendAndBackendGenerators:
    """Test suite for FrontendViewGenerator and BackendViewGenerator."""

    @pytest.mark.asyncio
    async def test_frontend_prompt_should_list_stack_and_ui_components(
        self, make_text_generator, generation_context: ViewGenerationContext, perfect_frontend_view
    ) -> None:
        llm = make_text_generator([json.dumps(perfect_frontend_view.to_payload())])

        view = await FrontendViewGenerator(llm).generate(generation_context)

        prompt = llm.calls[0]["prompt"]
        assert "Technology Stack: React, FastAPI, PostgreSQL" in prompt.system
        assert "UI Components Identified:\nLoginForm" in prompt.user
        assert view.components[0].name == "LoginForm"
        assert llm.calls[0]["max_tokens"] == 3000

    @pytest.mark.asyncio
    async def test_backend_should_use_larger_budget(
        self, make_text_generator, generation_context: ViewGenerationContext, perfect_backend_view
    ) -> None:
        llm = make_text_generator([json.dumps(perfect_backend_view.to_payload())])

        view = await BackendViewGenerator(llm).generate(generation_context)

        assert view.infrastructure.database == "PostgreSQL"
        assert llm.calls[0]["max_tokens"] == 3500

    @pytest.mark.asyncio
    async def test_comprehensive_detail_should_extend_guidelines(
        self, make_text_generator, generation_context: ViewGenerationContext, perfect_backend_view
    ) -> None:
        context = generation_context.model_copy(
            update={"options": GenerationOptions(detail_level="comprehensive", include_examples=True)}
        )
        llm = make_text_generator([json.dumps(perfect_backend_view.to_payload())])

        await BackendViewGenerator(llm).generate(context, improvements=["Add pagination"])

        prompt = llm.calls[0]["prompt"]
        assert "Include detailed request/response schemas" in prompt.system
        assert "Provide code examples for key services" in prompt.system
        assert "- Add pagination" in prompt.user
