"""Agent definitions for the fan-out pipeline."""

from fanout.agents.generation import (
    AgentGenerationClient,
    GenerationClient,
    GenerationError,
    create_generation_agent,
)

__all__ = [
    "AgentGenerationClient",
    "GenerationClient",
    "GenerationError",
    "create_generation_agent",
]
