"""Prompt composition for the companion chat and theme analysis.

The HTTP runner takes a system/user conversation; the process binary takes
one concatenated prompt string. Nothing here does I/O.
"""

from snapjournal_ai.config import settings

ENTRY_SEPARATOR = "\n\n---\n\n"

PATTERNS_LABEL = "PATTERNS:"
INSIGHTS_LABEL = "INSIGHTS:"
MOODS_LABEL = "MOODS:"


def system_prompt(context: str | None = None, app_name: str | None = None) -> str:
    """Build the companion's system instructions.

    Args:
        context: Optional context about the user's entries
        app_name: Application name to introduce the companion with.
                  Defaults to settings.app_name.

    Returns:
        The system message content
    """
    app_name = app_name or settings.app_name
    intro = (
        f"You are a helpful AI introspection companion for {app_name}. "
        "You help users reflect on their journal entries and social media posts."
    )
    closing = (
        "Be empathetic, insightful, and encouraging. "
        "Help them discover patterns and insights in their writing."
    )
    if context:
        return (
            f"{intro} Use the following context about the user's entries:"
            f"\n\n{context}\n\n {closing}"
        )
    return f"{intro} {closing}"


def chat_messages(
    message: str,
    context: str | None = None,
    app_name: str | None = None,
) -> list[dict[str, str]]:
    """Build the two-message conversation sent to the HTTP runner."""
    return [
        {"role": "system", "content": system_prompt(context, app_name)},
        {"role": "user", "content": message},
    ]


def completion_prompt(message: str, context: str | None = None) -> str:
    """Build the single prompt string passed to the process binary."""
    if context:
        return f"Context: {context}\n\nUser: {message}\n\nAssistant:"
    return f"User: {message}\n\nAssistant:"


def theme_analysis_prompt(entries: list[str]) -> str:
    """Build the prompt asking for a three-section theme report.

    Args:
        entries: Entry bodies, joined with ENTRY_SEPARATOR

    Returns:
        The analysis prompt
    """
    combined = ENTRY_SEPARATOR.join(entries)
    return (
        "Analyze the following journal entries and identify patterns, themes, and insights. "
        "Look for recurring topics, emotions, daily rhythms, and personal growth patterns.\n\n"
        f"Journal Entries:\n{combined}\n\n"
        "Provide your analysis in this exact format:\n"
        f"{PATTERNS_LABEL}\n"
        "- [pattern name]: [description]\n\n"
        f"{INSIGHTS_LABEL}\n"
        "- [insight]\n\n"
        f"{MOODS_LABEL}\n"
        "- [mood]: [percentage]"
    )
