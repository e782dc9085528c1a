"""
Test suite for generator output parsing.

System role: Verification of schema-validated view parsing
"""

import json

import pytest

from clarity_bridge.core.exceptions import ViewParseError
from clarity_bridge.core.view_generation.view_parser import (
    extract_json_object,
    extract_mermaid,
    parse_view,
)
from clarity_bridge.models.views import BackendView, PmView


class TestExtractJsonObject:
    """Test suite for extract_json_object."""

    def test_should_tolerate_markdown_fences_and_prose(self) -> None:
        content = 'Here you go:\n```json\n{"overview": "x"}\n```\nThanks'

        assert extract_json_object(content) == {"overview": "x"}

    def test_should_raise_without_object(self) -> None:
        with pytest.raises(ValueError):
            extract_json_object("no json here")

    def test_should_raise_on_broken_json(self) -> None:
        with pytest.raises(ValueError):
            extract_json_object('{"overview": ')


class TestParseView:
    """Test suite for parse_view."""

    def test_valid_pm_output_should_parse(self) -> None:
        content = json.dumps(
            {
                "overview": "Login feature",
                "userStories": [
                    {"title": "Login", "description": "As a user...", "priority": "HIGH"},
                    {"title": "Logout", "priority": "urgent"},
                ],
                "requirements": {"functional": ["a"], "nonFunctional": ["b"]},
                "successMetrics": ["m"],
            }
        )

        result = parse_view("pm", content)

        assert result.ok
        view = result.unwrap()
        assert isinstance(view, PmView)
        assert [s.id for s in view.user_stories] == ["US001", "US002"]
        assert [s.priority for s in view.user_stories] == ["high", "medium"]
        assert view.requirements.non_functional == ["b"]

    def test_backend_methods_should_be_uppercased(self) -> None:
        content = json.dumps(
            {"overview": "api", "endpoints": [{"method": "post", "path": "/api/x"}]}
        )

        view = parse_view("backend", content).unwrap()

        assert isinstance(view, BackendView)
        assert view.endpoints[0].method == "POST"

    def test_schema_violation_should_be_error(self) -> None:
        result = parse_view("frontend", json.dumps({"components": []}))

        assert not result.ok
        assert result.error

    def test_unwrap_on_error_should_raise_view_parse_error(self) -> None:
        result = parse_view("pm", "I cannot help with that")

        with pytest.raises(ViewParseError) as exc_info:
            result.unwrap()

        assert exc_info.value.details["view_type"] == "pm"


class TestExtractMermaid:
    """Test suite for extract_mermaid."""

    def test_fenced_block_should_be_extracted(self) -> None:
        content = "Diagram:\n```mermaid\ngraph TD\n  A-->B\n```"

        assert extract_mermaid(content) == "graph TD\n  A-->B"

    def test_bare_graph_should_be_extracted(self) -> None:
        assert extract_mermaid("graph LR\nA-->B") == "graph LR\nA-->B"

    def test_no_diagram_should_be_empty(self) -> None:
        assert extract_mermaid("sorry") == ""
