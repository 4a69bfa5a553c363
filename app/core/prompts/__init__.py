"""Fixed copy used by the controller, the providers and the welcome screen."""

from __future__ import annotations
from textwrap import dedent

ASSISTANT_NAME = "Digit GPT"

QUICK_QUESTION_TEMPLATE = (
    "I'm experiencing this issue: '{question}'. "
    "Can you help me troubleshoot and resolve this?"
)

DEFAULT_REPLY = (
    f"I'm {ASSISTANT_NAME}, your AI assistant. I can help you with various "
    "questions and tasks. What would you like to know?"
)

WELCOME_TITLE = "How can I help you today?"
WELCOME_BODY = (
    f"I'm {ASSISTANT_NAME}, your AI assistant. "
    "Ask me anything and I'll do my best to help."
)


def wrap_quick_question(question: str) -> str:
    """Turn a raw catalog entry into the message sent on the user's behalf."""
    return QUICK_QUESTION_TEMPLATE.format(question=question)


def assistant_system_prompt() -> str:
    return dedent(
        f"""
        You are {ASSISTANT_NAME}, a helpful support assistant.
        - Answer in concise Markdown.
        - When the user reports an issue, list likely causes first,
          then numbered troubleshooting steps.
        - Ask one clarifying question if the report is too vague to act on.
        """
    ).strip()
