"""
Multi-view generation.

Prompt construction, generation and schema-validated parsing of the PM,
Frontend and Backend views.
"""

from clarity_bridge.core.view_generation.multi_view_orchestrator import (
    ConsistencyReport,
    MultiViewOrchestrator,
    ViewGenerationResult,
    build_orchestrator,
)
from clarity_bridge.core.view_generation.view_generators import (
    BackendViewGenerator,
    FrontendViewGenerator,
    PmViewGenerator,
    ViewGenerator,
)
from clarity_bridge.core.view_generation.view_parser import ViewParseResult, parse_view

__all__ = [
    "BackendViewGenerator",
    "ConsistencyReport",
    "FrontendViewGenerator",
    "MultiViewOrchestrator",
    "PmViewGenerator",
    "ViewGenerationResult",
    "ViewGenerator",
    "ViewParseResult",
    "build_orchestrator",
    "parse_view",
]
