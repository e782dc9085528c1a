"""
Generator output parsing.

Extracts the JSON object from raw model output (tolerating markdown fences
and surrounding prose) and validates it against the view schema. Parsing
never falls back to a default view: malformed output is an error.

Dependencies: pydantic, clarity_bridge.models.views
System role: Schema-validating parse of generated views
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from clarity_bridge.core.exceptions import ViewParseError
from clarity_bridge.models.common import CamelModel
from clarity_bridge.models.views import VIEW_SCHEMAS, ViewType

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
_MERMAID_FENCE = re.compile(r"```mermaid\s*\n([\s\S]*?)\n?```")
_MERMAID_GRAPH = re.compile(r"(?:graph|flowchart)\s+\w+\n[\s\S]*")


@dataclass(frozen=True)
class ViewParseResult:
    """Tagged parse outcome: `view` on success, `error` otherwise."""

    view_type: ViewType
    view: CamelModel | None = None
    error: str | None = None
    raw: str = ""

    @property
    def ok(self) -> bool:
        return self.view is not None

    def unwrap(self) -> CamelModel:
        """
        Return the parsed view.

        Raises:
            ViewParseError: If parsing failed
        """
        if self.view is None:
            raise ViewParseError(
                f"Failed to parse {self.view_type} view: {self.error}",
                view_type=self.view_type,
                details={"raw_length": len(self.raw)},
            )
        return self.view


def extract_json_object(content: str) -> dict[str, Any]:
    """
    Decode the outermost {...} block of model output.

    Raises:
        ValueError: If no JSON object is present or it does not decode
    """
    match = _JSON_OBJECT.search(content)
    if match is None:
        raise ValueError("no JSON object found in output")
    data = json.loads(match.group(0))
    if not isinstance(data, dict):
        raise ValueError("top-level JSON value is not an object")
    return data


def parse_view(view_type: ViewType, content: str) -> ViewParseResult:
    """Parse and validate model output as the given view type."""
    schema = VIEW_SCHEMAS[view_type]
    try:
        data = extract_json_object(content)
        view = schema.model_validate(data)
    except (ValueError, PydanticValidationError) as e:
        # json.JSONDecodeError is a ValueError subclass
        logger.warning(f"{__name__}:parse_view - {view_type} output rejected: {e}")
        logger.debug(f"{__name__}:parse_view - Raw output: {content[:500]}")
        return ViewParseResult(view_type=view_type, error=str(e), raw=content)

    return ViewParseResult(view_type=view_type, view=view, raw=content)


def extract_mermaid(content: str) -> str:
    """Return the Mermaid body from fenced or bare output, or an empty string."""
    fenced = _MERMAID_FENCE.search(content)
    if fenced:
        return fenced.group(1).strip()
    bare = _MERMAID_GRAPH.search(content)
    if bare:
        return bare.group(0).strip()
    return ""
