"""Synthesizer prompt — merges all sub-agent reports into one final reply."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from fanout.pipeline import TaskOutcome

FAILED_PLACEHOLDER = "(execution failed)"

SYNTHESIZER_INSTRUCTIONS = (
    "You are the synthesizer responsible for the final report.\n\n"
    "Several specialist AI agents have each completed part of the user's request. "
    "Combine their results into one coherent, natural and easy-to-read reply for the user.\n\n"
    "RULES:\n"
    "1. Reply with the final answer directly.\n"
    "2. Do NOT mention that the answer was assembled from several agents.\n"
    "3. If an agent's report says it failed, cover that part as best you can or say it could not be completed."
)


def format_outcome(outcome: TaskOutcome) -> str:
    """Render one sub-agent outcome as a labelled report block."""
    if outcome.failed:
        return f"[{outcome.role} report]: {FAILED_PLACEHOLDER}"
    return f"[{outcome.role} report]:\n{outcome.text}"


def combine_outcomes(outcomes: Iterable[TaskOutcome]) -> str:
    """Join report blocks in the order given."""
    return "\n\n".join(format_outcome(o) for o in outcomes)


def build_synthesizer_prompt(user_message: str, agent_results_combined: str) -> str:
    return (
        f"{SYNTHESIZER_INSTRUCTIONS}\n\n"
        f'This is the user\'s original request:\n"{user_message}"\n\n'
        f"These are the results completed by each specialist agent:\n"
        f"{agent_results_combined}"
    )
