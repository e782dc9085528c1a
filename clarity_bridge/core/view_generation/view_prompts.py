"""View generation prompt templates.

Instructs the text generator to expand a processed requirements context into
the PM, Frontend and Backend views, plus the optional Mermaid wireframe.

Dependencies: clarity_bridge.boundary.llm, clarity_bridge.models
System role: Prompt templates for the multi-view generators
"""

import json
from collections.abc import Iterable

from clarity_bridge.boundary.llm.text_generator import PromptTemplate
from clarity_bridge.models.context import GenerationOptions, ViewGenerationContext
from clarity_bridge.models.views import PmView

FRONTEND_TECHNOLOGIES = frozenset(
    {"react", "vue", "angular", "nextjs", "typescript", "tailwind", "material-ui"}
)

PM_OUTPUT_FORMAT = """{
  "overview": "Executive summary of the feature/product",
  "userStories": [
    {
      "id": "US001",
      "title": "Story title",
      "description": "As a [user], I want [feature] so that [benefit]",
      "acceptanceCriteria": ["Criteria 1", "Criteria 2"],
      "priority": "high|medium|low"
    }
  ],
  "requirements": {
    "functional": ["Requirement 1", "Requirement 2"],
    "nonFunctional": ["Performance requirement", "Security requirement"]
  },
  "successMetrics": ["Metric 1", "Metric 2"]
}"""

FRONTEND_OUTPUT_FORMAT = """{
  "overview": "Frontend architecture overview",
  "components": [
    {
      "name": "ComponentName",
      "description": "Component purpose and functionality",
      "props": ["prop1: type", "prop2: type"],
      "state": ["state1: type", "state2: type"],
      "interactions": ["User interaction 1", "Event handling"]
    }
  ],
  "routes": [
    {
      "path": "/route-path",
      "component": "ComponentName",
      "description": "Page purpose",
      "guards": ["AuthGuard", "RoleGuard"]
    }
  ],
  "stateManagement": {
    "approach": "Redux/Context/Zustand/etc",
    "stores": ["UserStore", "DataStore"],
    "description": "State management strategy"
  },
  "uiux": {
    "designSystem": "Material-UI/Tailwind/Custom",
    "keyInteractions": ["Interaction pattern 1"],
    "responsiveness": ["Mobile-first approach", "Breakpoint strategy"]
  }
}"""

BACKEND_OUTPUT_FORMAT = """{
  "overview": "Backend architecture overview",
  "architecture": "Microservices/Monolith/Serverless description",
  "endpoints": [
    {
      "method": "GET/POST/PUT/DELETE",
      "path": "/api/endpoint",
      "description": "Endpoint purpose",
      "requestBody": { "field": "type" },
      "responseBody": { "field": "type" },
      "authentication": true
    }
  ],
  "dataModels": [
    {
      "name": "ModelName",
      "description": "Model purpose",
      "fields": [
        {"name": "fieldName", "type": "string/number/boolean/etc", "required": true, "description": "Field purpose"}
      ],
      "relationships": ["hasMany: OtherModel", "belongsTo: User"]
    }
  ],
  "services": [
    {
      "name": "ServiceName",
      "description": "Service purpose",
      "methods": ["method1", "method2"],
      "dependencies": ["OtherService", "ExternalAPI"]
    }
  ],
  "infrastructure": {
    "database": "PostgreSQL/MongoDB/etc",
    "caching": "Redis/Memcached",
    "queuing": "RabbitMQ/SQS",
    "deployment": "Docker/Kubernetes/Serverless"
  }
}"""

WIREFRAME_SYSTEM_PROMPT = """You are a UX designer creating Mermaid.js wireframe diagrams.
Create simple, clear wireframes that visualize the main user interface components and flow."""


def _bullets(items: Iterable[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def _guidelines(base: list[str], comprehensive_hint: str, examples_hint: str, options: GenerationOptions) -> str:
    lines = list(base)
    if options.detail_level == "comprehensive":
        lines.append(comprehensive_hint)
    if options.include_examples:
        lines.append(examples_hint)
    return _bullets(lines)


def _output_section(view_label: str, output_format: str) -> str:
    return (
        "=== OUTPUT FORMAT ===\n"
        f"Generate a {view_label} specification in the following JSON format:\n"
        f"{output_format}\n\n"
        "Return ONLY the JSON object, no extra text."
    )


def _technical_details_json(context: ViewGenerationContext) -> str:
    return json.dumps(context.processed.technical_details.to_payload(), indent=2)


def _extra_guidance(improvements: list[str] | None) -> str:
    if not improvements:
        return ""
    return f"\n\n=== REQUESTED IMPROVEMENTS ===\n{_bullets(improvements)}"


def build_pm_prompt(
    context: ViewGenerationContext,
    improvements: list[str] | None = None,
) -> PromptTemplate:
    """Build the product manager view prompt."""
    options = context.options
    processed = context.processed

    system = (
        "You are an expert Product Manager creating comprehensive specifications.\n"
        "Your role is to translate technical requirements into clear user stories, "
        "acceptance criteria, and success metrics.\n\n"
        "Guidelines:\n"
        + _guidelines(
            [
                "Focus on user value and business outcomes",
                "Create clear, actionable user stories with specific acceptance criteria",
                "Define measurable success metrics",
                "Identify both functional and non-functional requirements",
                "Consider edge cases and error scenarios",
            ],
            "Include detailed scenarios and examples",
            "Provide concrete examples for each user story",
            options,
        )
    )

    sections = [
        "Based on the following context and requirements, create a comprehensive PM specification:",
        f"=== REQUIREMENTS ===\n{context.original_requirements}",
        "=== ANALYZED CONTEXT ===\n"
        f"Summary: {processed.summary}\n\n"
        f"Key Requirements:\n{_bullets(processed.key_requirements)}\n\n"
        f"Technical Context:\n{_technical_details_json(context)}",
    ]
    if processed.user_stories:
        sections.append("Identified User Stories:\n" + "\n".join(processed.user_stories))
    if processed.business_rules:
        sections.append("Business Rules:\n" + "\n".join(processed.business_rules))
    if context.enhancement and context.enhancement.related_specifications:
        sections.append(
            "Related Specifications:\n"
            + _bullets(
                f"{spec.title} ({round(spec.relevance * 100)}% relevant)"
                for spec in context.enhancement.related_specifications
            )
        )
    sections.append(_output_section("PM", PM_OUTPUT_FORMAT))

    return PromptTemplate(system=system, user="\n\n".join(sections) + _extra_guidance(improvements))


def build_frontend_prompt(
    context: ViewGenerationContext,
    improvements: list[str] | None = None,
) -> PromptTemplate:
    """Build the frontend engineering view prompt."""
    options = context.options
    processed = context.processed
    stack = processed.technical_details.stack

    stack_line = (
        f"Technology Stack: {', '.join(stack)}"
        if stack
        else "Use modern web technologies (React/Vue/Angular)"
    )
    system = (
        "You are an expert Frontend Developer creating technical specifications.\n"
        "Your role is to design the frontend architecture, components, and user interactions.\n\n"
        f"{stack_line}\n\n"
        "Guidelines:\n"
        + _guidelines(
            [
                "Design reusable, modular components",
                "Plan clear state management strategy",
                "Consider responsive design and accessibility",
                "Define routing and navigation structure",
                "Include error handling and loading states",
            ],
            "Include detailed component props and state",
            "Provide code examples for key components",
            options,
        )
    )

    sections = [
        "Based on the following context and requirements, create a comprehensive Frontend specification:",
        f"=== REQUIREMENTS ===\n{context.original_requirements}",
        f"=== ANALYZED CONTEXT ===\n{processed.summary}\n\n"
        f"Key Features:\n{_bullets(processed.key_requirements)}",
    ]
    if processed.technical_details.ui_components:
        sections.append(
            "UI Components Identified:\n" + "\n".join(processed.technical_details.ui_components)
        )
    if context.enhancement:
        frontend_tech = [
            tech
            for tech in context.enhancement.suggested_technologies
            if tech.lower() in FRONTEND_TECHNOLOGIES
        ]
        if frontend_tech:
            sections.append(f"Suggested Technologies:\n{', '.join(frontend_tech)}")
    sections.append(_output_section("Frontend", FRONTEND_OUTPUT_FORMAT))

    return PromptTemplate(system=system, user="\n\n".join(sections) + _extra_guidance(improvements))


def build_backend_prompt(
    context: ViewGenerationContext,
    improvements: list[str] | None = None,
) -> PromptTemplate:
    """Build the backend engineering view prompt."""
    options = context.options
    processed = context.processed
    stack = processed.technical_details.stack

    stack_line = (
        f"Technology Stack: {', '.join(stack)}"
        if stack
        else "Use modern backend technologies (Node.js/Python/Java)"
    )
    system = (
        "You are an expert Backend Developer creating technical specifications.\n"
        "Your role is to design the backend architecture, APIs, data models, and infrastructure.\n\n"
        f"{stack_line}\n\n"
        "Guidelines:\n"
        + _guidelines(
            [
                "Design RESTful APIs following best practices",
                "Create normalized, efficient data models",
                "Plan scalable service architecture",
                "Include authentication and authorization",
                "Consider performance and security",
            ],
            "Include detailed request/response schemas",
            "Provide code examples for key services",
            options,
        )
    )

    sections = [
        "Based on the following context and requirements, create a comprehensive Backend specification:",
        f"=== REQUIREMENTS ===\n{context.original_requirements}",
        f"=== ANALYZED CONTEXT ===\n{processed.summary}\n\n"
        f"Key Features:\n{_bullets(processed.key_requirements)}\n\n"
        f"Technical Details:\n{_technical_details_json(context)}",
    ]
    if processed.business_rules:
        sections.append("Business Rules:\n" + "\n".join(processed.business_rules))
    if context.enhancement and context.enhancement.common_patterns:
        sections.append(
            "Common Patterns Identified:\n" + ", ".join(context.enhancement.common_patterns)
        )
    sections.append(_output_section("Backend", BACKEND_OUTPUT_FORMAT))

    return PromptTemplate(system=system, user="\n\n".join(sections) + _extra_guidance(improvements))


def build_wireframe_prompt(pm_view: PmView) -> PromptTemplate:
    """Build the Mermaid wireframe prompt from the PM view's user stories."""
    stories = _bullets(f"{story.title}: {story.description}" for story in pm_view.user_stories)
    user = (
        "Create a Mermaid.js wireframe diagram for the following user stories:\n\n"
        f"{stories}\n\n"
        "Use Mermaid graph syntax to show the main screens and navigation flow.\n"
        "Focus on the primary user journey."
    )
    return PromptTemplate(system=WIREFRAME_SYSTEM_PROMPT, user=user)


PROMPT_BUILDERS = {
    "pm": build_pm_prompt,
    "frontend": build_frontend_prompt,
    "backend": build_backend_prompt,
}
