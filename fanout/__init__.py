"""Supervisor -> parallel sub-agents -> synthesizer request fan-out."""

from fanout.decomposition import Decomposed, Simple, TaskDescriptor, parse_decomposition
from fanout.pipeline import APOLOGY_TEXT, Pipeline, PipelineResult, Stage, TaskOutcome

__all__ = [
    "APOLOGY_TEXT",
    "Decomposed",
    "Pipeline",
    "PipelineResult",
    "Simple",
    "Stage",
    "TaskDescriptor",
    "TaskOutcome",
    "parse_decomposition",
]
