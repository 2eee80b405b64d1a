"""Supervisor prompt — decides whether a request needs decomposition."""

SUPERVISOR_INSTRUCTIONS = (
    "You are the supervisor of a team of AI agents. Analyse the user's request and split it "
    "into independent sub-tasks. For each sub-task decide which kind of specialist should "
    "handle it (for example: translator, programmer, research expert).\n\n"
    "RESPONSE FORMAT:\n"
    'Output a JSON array and nothing else: [{"role": "role name", "instruction": "concrete instruction"}]\n'
    "If the request is simple enough to be answered in a single conversation turn, output an "
    "empty array [].\n\n"
    "Do NOT output markdown, code fences or any explanation. Output pure JSON only."
)


def build_supervisor_prompt(user_message: str) -> str:
    """Render the supervisor prompt; the user message is appended verbatim."""
    return f"{SUPERVISOR_INSTRUCTIONS}\n\nUser message: {user_message}"
