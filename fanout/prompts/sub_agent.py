"""Sub-agent prompt — one specialist executing one decomposed task."""


def build_agent_prompt(role: str, instruction: str, user_message: str) -> str:
    """Render the prompt for a single sub-agent.

    Args:
        role: Specialist label chosen by the supervisor (any string, may be empty).
        instruction: The concrete task for this specialist.
        user_message: The user's original message, included for reference.
    """
    return (
        f"You are now acting as {role}. Carry out the following instruction and give the result directly:\n"
        f"{instruction}\n\n"
        f"For reference, this is the user's original message: {user_message}"
    )
