"""Static replies for the chat menu (postback) actions.

The feature list is maintained here; add an entry when a new feature ships.
"""

from enum import Enum


class Action(str, Enum):
    """Postback payloads sent by the chat menu buttons."""

    AI_CHAT = "action=ai_chat"
    FEATURES = "action=features"
    HELP = "action=help"


FEATURE_LIST = [
    {
        "name": "🤖 AI Q&A",
        "description": "Ask anything; the bot splits the request and several specialist agents answer together",
    },
    {"name": "📋 Feature list", "description": "See every feature that is currently available"},
    {"name": "❓ Help", "description": "See how to use the bot"},
]

AI_CHAT_GREETING = (
    "Just type your question and I'll take care of it! 💬\n\n"
    "Ask anything you like; complex requests are split up automatically and handled "
    "by several specialist AIs working together."
)

UNKNOWN_ACTION_NOTICE = "⚠️ Unknown action. Please use the feature buttons in the menu below."

POSTBACK_ERROR_NOTICE = "Sorry, something went wrong while handling that action. Please try again later."


def build_feature_list_text() -> str:
    items = "\n\n".join(
        f"{i}. {feature['name']}\n   {feature['description']}" for i, feature in enumerate(FEATURE_LIST, start=1)
    )
    return f"[Available features]\n\n{items}\n\n💡 More features are on the way!"


def build_help_text() -> str:
    return (
        "[How to use]\n\n"
        "🤖 AI Q&A\n"
        "Just type your question! The bot decides how complex it is:\n"
        "• Simple question → answered directly\n"
        "• Complex request → split into sub-tasks handled by specialist AI agents, then combined into one reply\n\n"
        "📋 Feature list\n"
        'Tap "Feature list" in the menu below to see every available feature.\n\n'
        "💬 Tip\n"
        '• You can ask for several things at once, e.g. "Translate this into English and write a poem"\n'
        "• The bot hands each part to a different specialist and runs them in parallel"
    )
