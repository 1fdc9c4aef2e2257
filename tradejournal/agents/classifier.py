"""Semantic tag classification through an LLM agent.

The classifier is an optional second opinion next to the keyword rule
engine. It receives raw entry text only and returns tags in the same
shape; anything it gets wrong (network errors, bad JSON, unknown tags)
turns into an empty result.
"""

import json
import logging
import math
import re
from typing import Optional

from agents import Agent

from tradejournal.agents.base import create_agent, get_api_key, run_agent_async
from tradejournal.analysis.catalog import (
    CATALOG,
    VALID_SEVERITIES,
    is_known_tag,
    severity_of,
)
from tradejournal.models.journal import DetectedTag

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 0.5

_CODE_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")


def _tag_lines(family: str) -> str:
    return "\n".join(
        f"- {name}: {definition.description}"
        for name, definition in CATALOG.items()
        if definition.family == family
    )


CLASSIFIER_INSTRUCTIONS = f"""You analyze discretionary futures trading journal entries
and detect behavioral patterns in them.

Available Strength Tags:
{_tag_lines("strength")}

Available Weakness Tags:
{_tag_lines("weakness")}

Return a JSON array of detected behaviors in this format:
[
  {{
    "tag": "tag_name",
    "severity": "low|med|high",
    "confidence": 0.0-1.0,
    "context": "brief explanation",
    "reasoning": "why this tag applies"
  }}
]

Only include tags that are clearly present. Be conservative with confidence
scores. Return ONLY valid JSON, no markdown, no explanation.
"""


def _coerce_confidence(value: object) -> float:
    try:
        confidence = float(value) if value is not None else DEFAULT_CONFIDENCE
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_CONFIDENCE
    if math.isnan(confidence):
        return DEFAULT_CONFIDENCE
    if confidence == 0:
        confidence = DEFAULT_CONFIDENCE
    return min(1.0, max(0.0, confidence))


def parse_classifier_response(response_text: str) -> list[DetectedTag]:
    """Parse a classifier's JSON reply into detected tags.

    Tolerates markdown code fences and prose around the array. Items with
    unknown tag names are dropped, invalid severities fall back to the
    catalog severity and confidence is clamped to [0, 1].

    Args:
        response_text: Raw model output.

    Returns:
        Detected tags, or an empty list for anything unparseable.
    """
    text = (response_text or "").strip()

    fenced = _CODE_FENCE.search(text)
    if fenced:
        text = fenced.group(1).strip()

    array = _JSON_ARRAY.search(text)
    if array:
        text = array.group(0)

    try:
        parsed = json.loads(text)
    except ValueError:
        logger.warning("Classifier returned malformed JSON")
        return []

    if not isinstance(parsed, list):
        return []

    tags = []
    for item in parsed:
        if not isinstance(item, dict):
            continue
        name = item.get("tag")
        if not isinstance(name, str) or not is_known_tag(name):
            logger.debug("Dropping unknown classifier tag %r", name)
            continue

        severity = item.get("severity")
        if severity not in VALID_SEVERITIES:
            severity = severity_of(name)

        context = item.get("context")
        reasoning = item.get("reasoning")

        tags.append(
            DetectedTag(
                tag=name,
                severity=severity,
                confidence=_coerce_confidence(item.get("confidence")),
                context=context if isinstance(context, str) else None,
                matched_phrases=[reasoning] if isinstance(reasoning, str) and reasoning else [],
            )
        )
    return tags


class AgentTagClassifier:
    """Classifies journal entries with an OpenAI Agents SDK agent."""

    def __init__(self, model: Optional[str] = None):
        """Initialize the classifier.

        Args:
            model: Optional model override.
        """
        self.model = model
        self._agent = self._create_agent()

    @staticmethod
    def is_available() -> bool:
        """Whether an API key is configured."""
        return bool(get_api_key())

    def _create_agent(self) -> Agent:
        """Create the underlying agent."""
        return create_agent(
            name="Journal Behavior Classifier",
            instructions=CLASSIFIER_INSTRUCTIONS,
            model=self.model,
        )

    async def classify(self, text: str) -> list[DetectedTag]:
        """Classify one journal entry.

        Args:
            text: Raw entry text.

        Returns:
            Detected tags; empty when the call or the reply fails.
        """
        prompt = f"Journal Entry:\n{text}"
        try:
            output = await run_agent_async(self._agent, prompt)
        except Exception as exc:
            logger.warning("Classifier call failed: %s", exc)
            return []
        return parse_classifier_response(str(output))
