"""OpenAI Agents SDK helpers for TradeJournal.

Model and key lookup, agent construction and the async runner used by the
journal classifier.
"""

import logging
import os
from typing import Any, Optional

# Tracing telemetry is noisy and unused for classification calls
os.environ.setdefault("OPENAI_AGENTS_DISABLE_TRACING", "1")

from agents import Agent, Runner

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-5.2"


def get_model(configured: Optional[str] = None) -> str:
    """Resolve the model name.

    OPENAI_MODEL wins over the ``[openai] model`` config value, which wins
    over DEFAULT_MODEL.
    """
    return os.environ.get("OPENAI_MODEL") or configured or DEFAULT_MODEL


def get_api_key() -> Optional[str]:
    """OpenAI API key from the environment, or None."""
    return os.environ.get("OPENAI_API_KEY")


def create_agent(name: str, instructions: str, model: Optional[str] = None) -> Agent:
    """Build a tool-less agent for one classification task.

    Args:
        name: Agent name shown in SDK logs.
        instructions: System prompt.
        model: Model override; resolved through get_model() when omitted.
    """
    return Agent(name=name, instructions=instructions, model=get_model(model))


async def run_agent_async(
    agent: Agent,
    message: str,
    context: Optional[dict[str, Any]] = None,
) -> str:
    """Send one message to an agent and return its final output."""
    logger.debug("Running agent %s on %s", agent.name, agent.model)
    result = await Runner.run(agent, message, context=context)
    return result.final_output
