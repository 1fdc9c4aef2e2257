"""AI agents for TradeJournal.

- AgentTagClassifier: semantic behavioral-tag classification
"""

from tradejournal.agents.base import (
    create_agent,
    get_api_key,
    get_model,
    run_agent_async,
)
from tradejournal.agents.classifier import (
    AgentTagClassifier,
    parse_classifier_response,
)

__all__ = [
    "create_agent",
    "get_api_key",
    "get_model",
    "run_agent_async",
    "AgentTagClassifier",
    "parse_classifier_response",
]
