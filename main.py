"""Main entrypoint — answer a request with the supervisor / sub-agent / synthesizer pipeline."""

import asyncio
import logging
import os
import sys

from agent_framework.azure import AzureOpenAIChatClient
from azure.identity import DefaultAzureCredential

from fanout.agents import AgentGenerationClient, create_generation_agent
from fanout.config import Config, load_config
from fanout.pipeline import Pipeline, Stage


def get_chat_client(config: Config) -> AzureOpenAIChatClient:
    """Create AzureOpenAI chat client from config (API key, or Entra ID when no key is set)."""
    if config.azure_openai.api_key:
        return AzureOpenAIChatClient(
            endpoint=config.azure_openai.endpoint,
            api_key=config.azure_openai.api_key,
            deployment_name=config.azure_openai.deployment_name,
            api_version=config.azure_openai.api_version,
        )
    return AzureOpenAIChatClient(
        endpoint=config.azure_openai.endpoint,
        credential=DefaultAzureCredential(),
        deployment_name=config.azure_openai.deployment_name,
        api_version=config.azure_openai.api_version,
    )


def build_pipeline(config: Config) -> Pipeline:
    agent = create_generation_agent(get_chat_client(config))
    return Pipeline(
        AgentGenerationClient(agent),
        max_concurrency=config.pipeline.max_concurrency,
    )


async def run(task: str, pipeline: Pipeline):
    """Run the pipeline once and print the final reply."""
    print(f"\n{'=' * 60}")
    print(f"Task: {task}")
    print(f"{'=' * 60}\n")

    result = await pipeline.run(task)

    if result.outcomes:
        for outcome in result.outcomes:
            status = "failed" if outcome.failed else f"{len(outcome.text)} chars"
            print(f"  [{outcome.role}] {status}")
    elif result.stage is Stage.DONE:
        print("  (answered directly, no decomposition)")

    print(f"\n{'=' * 60}")
    print("FINAL ANSWER:")
    print(f"{'=' * 60}")
    print(result.reply)
    print(f"{'=' * 60}")


async def interactive(pipeline: Pipeline):
    """Run in interactive mode — read tasks from stdin."""
    print("Supervisor / Sub-agent / Synthesizer pipeline")
    print("Type a task and press Enter. Type 'quit' to exit.\n")

    while True:
        try:
            task = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye.")
            break

        if not task or task.lower() in ("quit", "exit", "q"):
            print("Bye.")
            break

        await run(task, pipeline)
        print()


def main():
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config()
    pipeline = build_pipeline(config)

    if len(sys.argv) > 1:
        task = " ".join(sys.argv[1:])
        asyncio.run(run(task, pipeline))
    else:
        asyncio.run(interactive(pipeline))


if __name__ == "__main__":
    main()
