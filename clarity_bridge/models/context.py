"""
Processed context models.

Input of view generation: the normalized requirements produced upstream by
context ingestion, optional retrieval enhancement and generation options.

Dependencies: pydantic
System role: View generation input structures
"""

from typing import Literal

from pydantic import ConfigDict, Field

from clarity_bridge.models.common import CamelModel

DetailLevel = Literal["basic", "detailed", "comprehensive"]


class TechnicalDetails(CamelModel):
    """Technical facts extracted from the raw requirements."""

    stack: list[str] = Field(default_factory=list)
    architecture: str | None = None
    integrations: list[str] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)
    ui_components: list[str] = Field(default_factory=list)


class ContextMetadata(CamelModel):
    """Extraction statistics."""

    word_count: int = 0
    has_images: bool = False
    complexity: Literal["simple", "moderate", "complex"] = "moderate"
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class ProcessedContext(CamelModel):
    """Normalized requirements context. Immutable once produced upstream."""

    model_config = ConfigDict(frozen=True)

    summary: str
    key_requirements: list[str] = Field(default_factory=list)
    technical_details: TechnicalDetails = Field(default_factory=TechnicalDetails)
    user_stories: list[str] | None = None
    business_rules: list[str] | None = None
    metadata: ContextMetadata = Field(default_factory=ContextMetadata)


class RelatedSpecification(CamelModel):
    """A related specification surfaced by retrieval."""

    id: str
    title: str
    relevance: float
    insights: list[str] = Field(default_factory=list)


class TeamKnowledgeItem(CamelModel):
    """A team knowledge snippet surfaced by retrieval."""

    title: str
    content: str
    relevance: float


class ContextEnhancement(CamelModel):
    """Retrieval-based enrichment passed to the generators."""

    related_specifications: list[RelatedSpecification] = Field(default_factory=list)
    team_knowledge: list[TeamKnowledgeItem] = Field(default_factory=list)
    suggested_technologies: list[str] = Field(default_factory=list)
    common_patterns: list[str] = Field(default_factory=list)


class GenerationOptions(CamelModel):
    """Per-request generation options."""

    detail_level: DetailLevel = "detailed"
    include_examples: bool = False
    generate_diagrams: bool = False


class ViewGenerationContext(CamelModel):
    """Everything a view generator needs to build its prompt."""

    processed: ProcessedContext
    original_requirements: str
    enhancement: ContextEnhancement | None = None
    options: GenerationOptions = Field(default_factory=GenerationOptions)
