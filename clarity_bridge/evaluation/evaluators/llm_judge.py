"""
LLM-as-Judge self-evaluation of generated views.

Asks the text generator to grade a view bundle on a 0.0 to 1.0 scale:
- Completeness of requirements coverage
- Technical accuracy and feasibility
- Consistency across views
- Clarity, error handling and security

The judge never fails the quality check: any generation or parsing problem
yields the neutral fallback score.
"""

import json
import logging
import math

from clarity_bridge.boundary.llm.text_generator import PromptTemplate, TextGenerator
from clarity_bridge.core.view_generation.view_parser import extract_json_object
from clarity_bridge.models.quality import AiEvaluation
from clarity_bridge.models.views import GeneratedViews

logger = logging.getLogger(__name__)

JUDGE_TEMPERATURE = 0.3
JUDGE_MAX_TOKENS = 1000

JUDGE_SYSTEM_PROMPT = """You are a quality assurance expert evaluating technical specifications.
Evaluate the quality, completeness, and consistency of the provided specification views.

Score on a scale of 0.0 to 1.0 based on:
- Completeness of requirements coverage
- Technical accuracy and feasibility
- Consistency across views
- Clarity and lack of ambiguity
- Proper error handling and edge cases
- Security considerations"""


class LLMJudge:
    """Self-evaluation judge.

    Usage:
        judge = LLMJudge(text_generator)
        evaluation = await judge.evaluate(views)
    """

    def __init__(self, text_generator: TextGenerator, fallback_score: float = 0.5):
        self._text_generator = text_generator
        self._fallback_score = fallback_score

    async def evaluate(self, views: GeneratedViews) -> AiEvaluation:
        """Grade a view bundle. Returns the fallback score on any failure."""
        try:
            result = await self._text_generator.generate(
                self._build_evaluation_prompt(views),
                temperature=JUDGE_TEMPERATURE,
                max_tokens=JUDGE_MAX_TOKENS,
            )
            evaluation = self._parse_response(result.content)
            logger.info(f"{__name__}:evaluate - AI self-evaluation score: {evaluation.score:.2f}")
            return evaluation

        except Exception as e:
            logger.error(f"{__name__}:evaluate - AI self-evaluation failed: {type(e).__name__}: {e}")
            return AiEvaluation(score=self._fallback_score)

    def _build_evaluation_prompt(self, views: GeneratedViews) -> PromptTemplate:
        def dump(view) -> str:
            return json.dumps(view.to_payload() if view else None, indent=2)

        user = f"""Evaluate the quality of this specification:

PM View:
{dump(views.pm_view)}

Frontend View:
{dump(views.frontend_view)}

Backend View:
{dump(views.backend_view)}

Provide your evaluation in JSON format:
{{
  "score": 0.0-1.0,
  "strengths": ["strength1", "strength2"],
  "weaknesses": ["weakness1", "weakness2"],
  "criticalIssues": ["issue1"]
}}"""
        return PromptTemplate(system=JUDGE_SYSTEM_PROMPT, user=user)

    def _parse_response(self, response_text: str) -> AiEvaluation:
        """Parse the judge JSON, clamping the score to [0, 1].

        Handles fenced output and surrounding prose.
        """
        try:
            data = extract_json_object(response_text)
            score = float(data["score"])
            if math.isnan(score):
                raise ValueError("score is NaN")

            return AiEvaluation(
                score=min(1.0, max(0.0, score)),
                strengths=[str(s) for s in data.get("strengths") or []],
                weaknesses=[str(w) for w in data.get("weaknesses") or []],
                critical_issues=[str(i) for i in data.get("criticalIssues") or []],
            )

        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"{__name__}:_parse_response - Failed to parse AI evaluation: {e}")
            logger.debug(f"{__name__}:_parse_response - Raw response: {response_text[:500]}")
            return AiEvaluation(score=self._fallback_score)
