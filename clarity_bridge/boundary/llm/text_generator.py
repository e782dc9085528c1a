"""
Text generation adapters.

Defines the "prompt in, text out" collaborator used by the view generators
and the self-evaluation judge, plus a LangChain chat-model implementation.

Dependencies: langchain_core, langchain_google_genai, clarity_bridge.configs
System role: Text generation collaborator
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from clarity_bridge.configs import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptTemplate:
    """System instructions plus the user request."""

    system: str
    user: str


@dataclass
class GenerationResult:
    """Raw model output."""

    content: str
    model: str
    provider: str
    usage: dict[str, int] = field(default_factory=dict)


@runtime_checkable
class TextGenerator(Protocol):
    """Anything that can answer a prompt with text."""

    name: str

    async def generate(
        self,
        prompt: PromptTemplate,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> GenerationResult: ...


def _message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    # Multi-part responses: keep the text parts only
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class LangChainTextGenerator:
    """TextGenerator backed by a LangChain chat model."""

    def __init__(
        self,
        model: BaseChatModel,
        model_name: str,
        provider: str = "google_genai",
        max_tokens_field: str = "max_output_tokens",
    ) -> None:
        """
        Args:
            model: LangChain chat model
            model_name: Model identifier reported in results
            provider: Provider name reported in results
            max_tokens_field: Name of the model's completion-budget attribute
        """
        self._model = model
        self._model_name = model_name
        self._max_tokens_field = max_tokens_field
        self.name = provider

    def _configured_model(self, temperature: float | None, max_tokens: int | None) -> BaseChatModel:
        update: dict[str, Any] = {}
        if temperature is not None:
            update["temperature"] = temperature
        if max_tokens is not None:
            update[self._max_tokens_field] = max_tokens

        known = type(self._model).model_fields
        update = {key: value for key, value in update.items() if key in known}
        if not update:
            return self._model
        return self._model.model_copy(update=update)

    async def generate(
        self,
        prompt: PromptTemplate,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> GenerationResult:
        messages = [SystemMessage(content=prompt.system), HumanMessage(content=prompt.user)]
        model = self._configured_model(temperature, max_tokens)

        response = await model.ainvoke(messages)

        usage: dict[str, int] = {}
        usage_metadata = getattr(response, "usage_metadata", None)
        if usage_metadata:
            usage = {
                "prompt_tokens": usage_metadata.get("input_tokens", 0),
                "completion_tokens": usage_metadata.get("output_tokens", 0),
                "total_tokens": usage_metadata.get("total_tokens", 0),
            }

        return GenerationResult(
            content=_message_text(response),
            model=self._model_name,
            provider=self.name,
            usage=usage,
        )


def create_text_generator(settings: Settings | None = None) -> LangChainTextGenerator:
    """Build the Gemini-backed text generator from configuration."""
    settings = settings or get_settings()
    model = ChatGoogleGenerativeAI(
        model=settings.llm.model_id,
        temperature=settings.llm.temperature,
        max_output_tokens=settings.llm.max_tokens,
    )
    logger.info(f"{__name__}:create_text_generator - Using {settings.llm.model_id}")
    return LangChainTextGenerator(model, model_name=settings.llm.model_id)
