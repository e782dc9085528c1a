"""
Specification records.

Shape of a specification as handed over by the persistence collaborator.

Dependencies: pydantic
System role: Specification input for indexing and related-spec lookup
"""

from typing import Any

from pydantic import Field

from clarity_bridge.models.common import CamelModel


class SpecificationVersion(CamelModel):
    """One stored version of a specification. Views are raw JSON objects."""

    version: int
    pm_view: dict[str, Any] | None = None
    frontend_view: dict[str, Any] | None = None
    backend_view: dict[str, Any] | None = None


class SpecificationRecord(CamelModel):
    """A specification together with its latest version, if any."""

    id: str
    title: str
    description: str | None = None
    author_id: str | None = None
    team_id: str | None = None
    priority: str = "MEDIUM"
    status: str = "DRAFT"
    quality_score: float | None = None
    latest_version: SpecificationVersion | None = None
    tags: list[str] = Field(default_factory=list)
