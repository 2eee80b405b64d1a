"""Shared fixtures: a scripted in-memory generation backend."""

import asyncio

import pytest

from fanout.prompts.supervisor import SUPERVISOR_INSTRUCTIONS
from fanout.prompts.synthesizer import SYNTHESIZER_INSTRUCTIONS


class BackendError(Exception):
    pass


class FakeGenerationClient:
    """Answers prompts by stage and records every call.

    Sub-agent prompts are matched by role; a value that is an exception
    instance is raised instead of returned. ``delays`` maps a role to seconds
    of simulated latency.
    """

    def __init__(self, supervisor="[]", agents=None, synthesis="final reply", fallback="direct reply", delays=None):
        self.supervisor = supervisor
        self.agents = agents or {}
        self.synthesis = synthesis
        self.fallback = fallback
        self.delays = delays or {}
        self.calls: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def _classify(self, prompt):
        if prompt.startswith(SUPERVISOR_INSTRUCTIONS):
            return "supervisor", None
        if prompt.startswith(SYNTHESIZER_INSTRUCTIONS):
            return "synthesis", None
        if prompt.startswith("You are now acting as "):
            role = prompt[len("You are now acting as "):].split(". Carry out", 1)[0]
            return "agent", role
        return "fallback", None

    def prompts(self, kind):
        return [p for k, p in self.calls if k == kind]

    async def generate(self, prompt: str) -> str:
        kind, role = self._classify(prompt)
        self.calls.append((kind, prompt))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(role, 0) if role is not None else 0)
            if kind == "agent":
                value = self.agents.get(role, f"{role} output")
            else:
                value = getattr(self, kind)
            if isinstance(value, Exception):
                raise value
            return value
        finally:
            self.in_flight -= 1


@pytest.fixture
def fake_client_factory():
    return FakeGenerationClient
