"""Centralized configuration — loads env vars and exposes typed settings."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class AzureOpenAIConfig:
    endpoint: str
    api_key: str = ""
    deployment_name: str = "gpt-4o-mini"
    api_version: str = "2025-01-01-preview"


@dataclass(frozen=True)
class PipelineConfig:
    # 0 means every sub-agent call is issued at once
    max_concurrency: int = 0


@dataclass(frozen=True)
class Config:
    azure_openai: AzureOpenAIConfig
    pipeline: PipelineConfig


def _read_max_concurrency() -> int:
    raw = os.environ.get("PIPELINE_MAX_CONCURRENCY", "0").strip() or "0"
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"PIPELINE_MAX_CONCURRENCY must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"PIPELINE_MAX_CONCURRENCY must be >= 0, got {value}")
    return value


def load_config() -> Config:
    """Load configuration from environment variables.

    Values in a local ``.env`` file are picked up via load_dotenv(); variables
    already set in the environment take precedence.
    """
    load_dotenv()

    # Azure OpenAI (endpoint required; without an API key we fall back to
    # Entra ID credentials in get_chat_client)
    azure_openai = AzureOpenAIConfig(
        endpoint=os.environ["AZURE_OPENAI_ENDPOINT"],
        api_key=os.environ.get("AZURE_OPENAI_API_KEY", ""),
        deployment_name=os.environ.get("AZURE_OPENAI_CHAT_DEPLOYMENT_NAME", "gpt-4o-mini"),
        api_version=os.environ.get("AZURE_OPENAI_API_VERSION", "2025-01-01-preview"),
    )

    pipeline = PipelineConfig(max_concurrency=_read_max_concurrency())

    return Config(azure_openai=azure_openai, pipeline=pipeline)
