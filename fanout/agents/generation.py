"""Generation client — the single text-in/text-out call every pipeline stage makes.

The pipeline only depends on the ``GenerationClient`` protocol, so tests and
alternative backends can stand in for the Agent Framework adapter below.
"""

import logging
from typing import Protocol

from agent_framework import Agent, Message

logger = logging.getLogger(__name__)

GENERATION_AGENT_NAME = "FanoutGenerator"

GENERATION_AGENT_DESCRIPTION = (
    "General-purpose text generator used by the supervisor, sub-agent and synthesizer stages."
)


class GenerationError(Exception):
    """The backend failed to produce text (transport, quota or model error)."""


class GenerationClient(Protocol):
    async def generate(self, prompt: str) -> str: ...


def create_generation_agent(chat_client) -> Agent:
    """Create the agent backing every generation call.

    No instructions are attached: each stage carries its own instructions in
    the prompt text, so one agent serves supervisor, sub-agents and synthesizer.
    """
    return Agent(
        client=chat_client,
        name=GENERATION_AGENT_NAME,
        description=GENERATION_AGENT_DESCRIPTION,
    )


def _extract_text(result) -> str:
    """Pull the final text out of an agent run result.

    Handles both a response object exposing ``.text`` and the event-stream
    shape (``output`` events carrying lists of ``Message``).
    """
    text = getattr(result, "text", None)
    if isinstance(text, str):
        return text

    texts: list[str] = []
    for event in result:
        if getattr(event, "type", None) == "output" and isinstance(event.data, list):
            for msg in event.data:
                if isinstance(msg, Message) and msg.text:
                    texts.append(msg.text)
    return "\n".join(texts)


class AgentGenerationClient:
    """GenerationClient backed by an agent_framework Agent (non-streaming)."""

    def __init__(self, agent: Agent) -> None:
        self.agent = agent

    async def generate(self, prompt: str) -> str:
        try:
            result = await self.agent.run(prompt, stream=False)
            text = _extract_text(result)
        except Exception as e:
            raise GenerationError(f"{self.agent.name or 'agent'} run failed: {e}") from e

        if not text:
            raise GenerationError(f"{self.agent.name or 'agent'} returned no text")

        logger.debug("Generated %d chars from %d-char prompt", len(text), len(prompt))
        return text
