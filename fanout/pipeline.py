"""Supervisor -> parallel sub-agents -> synthesizer pipeline.

Flow:
    1. Supervisor decides whether the request needs decomposition
    2a. Simple request: answer the raw user message directly (fallback)
    2b. Otherwise run one sub-agent per task concurrently via asyncio.gather
    3. Synthesizer combines all sub-agent reports into the final reply

Every exit path yields reply text. Backend failures are logged and turned into
APOLOGY_TEXT; a failing sub-agent only degrades its own report.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from fanout.agents.generation import GenerationClient
from fanout.decomposition import Simple, TaskDescriptor, parse_decomposition
from fanout.prompts.sub_agent import build_agent_prompt
from fanout.prompts.supervisor import build_supervisor_prompt
from fanout.prompts.synthesizer import FAILED_PLACEHOLDER, build_synthesizer_prompt, combine_outcomes

logger = logging.getLogger(__name__)

APOLOGY_TEXT = "Sorry, I ran into a system error while working on your request. Please try again later."


class Stage(str, Enum):
    SUPERVISING = "supervising"
    FALLBACK = "fallback"
    DISPATCHING = "dispatching"
    SYNTHESIZING = "synthesizing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class TaskOutcome:
    role: str
    text: str
    failed: bool = False


@dataclass(frozen=True)
class PipelineResult:
    reply: str
    stage: Stage
    outcomes: tuple[TaskOutcome, ...] = ()
    failed_stage: Optional[Stage] = None

    @property
    def ok(self) -> bool:
        return self.stage is Stage.DONE


class Pipeline:
    """Runs one user message through supervisor, sub-agents and synthesizer.

    Args:
        client: Backend used for every generation call.
        max_concurrency: Upper bound on sub-agent calls in flight for a single
            run. ``None`` or 0 issues all of them at once.
    """

    def __init__(self, client: GenerationClient, *, max_concurrency: Optional[int] = None) -> None:
        if max_concurrency is not None and max_concurrency < 0:
            raise ValueError("max_concurrency must be >= 0")
        self.client = client
        self.max_concurrency = max_concurrency or None

    async def reply(self, user_message: str) -> str:
        return (await self.run(user_message)).reply

    async def run(self, user_message: str) -> PipelineResult:
        stage = Stage.SUPERVISING
        outcomes: tuple[TaskOutcome, ...] = ()
        try:
            # --- Supervisor ---
            supervisor_text = await self.client.generate(build_supervisor_prompt(user_message))
            decomposition = parse_decomposition(supervisor_text)

            # --- Fallback: single direct call with the raw message ---
            if isinstance(decomposition, Simple):
                stage = Stage.FALLBACK
                logger.info("No decomposition (%s), answering directly", decomposition.reason)
                reply = await self.client.generate(user_message)
                return PipelineResult(reply=reply, stage=Stage.DONE)

            # --- Fan-out ---
            stage = Stage.DISPATCHING
            logger.info(
                "Supervisor assigned %d task(s): %s",
                len(decomposition.tasks),
                ", ".join(repr(t.role) for t in decomposition.tasks),
            )
            outcomes = await self._dispatch(decomposition.tasks, user_message)

            # --- Fan-in ---
            stage = Stage.SYNTHESIZING
            combined = combine_outcomes(outcomes)
            reply = await self.client.generate(build_synthesizer_prompt(user_message, combined))
            return PipelineResult(reply=reply, stage=Stage.DONE, outcomes=outcomes)
        except Exception:
            logger.exception("Pipeline failed during %s stage", stage.value)
            return PipelineResult(reply=APOLOGY_TEXT, stage=Stage.FAILED, outcomes=outcomes, failed_stage=stage)

    async def _dispatch(self, tasks: Sequence[TaskDescriptor], user_message: str) -> tuple[TaskOutcome, ...]:
        """Run every task concurrently and return outcomes in task order.

        Each task catches its own failure, so gather never cancels siblings.
        """
        limiter = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None
        results = await asyncio.gather(*[self._run_task(task, user_message, limiter) for task in tasks])
        failed = sum(1 for r in results if r.failed)
        if failed:
            logger.warning("%d of %d sub-agent(s) failed", failed, len(results))
        return tuple(results)

    async def _run_task(
        self,
        task: TaskDescriptor,
        user_message: str,
        limiter: Optional[asyncio.Semaphore],
    ) -> TaskOutcome:
        prompt = build_agent_prompt(task.role, task.instruction, user_message)
        try:
            if limiter is None:
                text = await self.client.generate(prompt)
            else:
                async with limiter:
                    text = await self.client.generate(prompt)
        except Exception as e:
            logger.error("Sub-agent %r failed: %s", task.role, e, exc_info=True)
            return TaskOutcome(role=task.role, text=FAILED_PLACEHOLDER, failed=True)
        return TaskOutcome(role=task.role, text=text)
