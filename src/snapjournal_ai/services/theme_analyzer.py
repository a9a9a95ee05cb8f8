"""Theme analysis over a batch of journal entry bodies.

Asks the chat backend for a sectioned report and parses it. Two fallbacks
keep the caller from ever seeing a backend failure here:
- no patterns recognised and more than three entries: a habit pattern
- chat failed: an empty report with a default mood distribution
"""

import uuid
from collections.abc import Sequence

from snapjournal_ai.config import settings
from snapjournal_ai.dto import ChatRequest
from snapjournal_ai.entities import ThemePattern, ThemeReport
from snapjournal_ai.errors import BackendError
from snapjournal_ai.logging_config import get_logger
from snapjournal_ai.prompts import theme_analysis_prompt
from snapjournal_ai.protocols import ChatBackend
from snapjournal_ai.services.report_parser import parse_theme_reply

logger = get_logger(__name__)

# More entries than this with no recognised pattern yields the habit pattern
HABIT_ENTRY_THRESHOLD = 3

DEFAULT_MOOD_TRENDS = {"neutral": 0.5, "positive": 0.3, "negative": 0.2}


def habit_pattern() -> ThemePattern:
    return ThemePattern(
        id=str(uuid.uuid4()),
        title="Regular Journaling",
        description="You maintain a consistent journaling habit",
        strength=0.7,
        entry_ids=(),
        tags=("consistency",),
        pattern_type="habit",
    )


def failure_report() -> ThemeReport:
    """Report returned when the model could not be reached."""
    return ThemeReport(patterns=[], insights=[], mood_trends=dict(DEFAULT_MOOD_TRENDS))


class ThemeAnalyzer:
    """Theme analysis service.

    Depends on the ChatBackend protocol only, so it works the same on
    either backend (the adapter passes itself).

    Example:
        ```python
        analyzer = ThemeAnalyzer(backend=adapter, chat_model="llama3.2")
        report = await analyzer.analyze(["Slept badly again.", "Grateful for coffee."])
        ```
    """

    def __init__(self, backend: ChatBackend, chat_model: str | None = None) -> None:
        """Initialize the analyzer.

        Args:
            backend: Anything with an async chat(ChatRequest) method.
            chat_model: Model used for analysis. Defaults to settings.chat_model.
        """
        self._backend = backend
        self._chat_model = chat_model or settings.chat_model

    async def analyze(self, entries: Sequence[str]) -> ThemeReport:
        """Analyze entry bodies for recurring themes.

        Business logic:
        1. Empty input returns an empty report without calling the model
        2. Entries are joined into one analysis prompt and sent as a chat
        3. The reply is parsed into patterns, insights and mood trends
        4. Fallbacks apply as described in the module docstring

        Args:
            entries: Entry bodies in presentation order

        Returns:
            ThemeReport
        """
        entries = list(entries)
        if not entries:
            return ThemeReport()

        request = ChatRequest(message=theme_analysis_prompt(entries), model=self._chat_model)
        try:
            reply = await self._backend.chat(request)
        except BackendError as e:
            logger.error("Theme analysis chat failed, using default mood trends: %s", e)
            return failure_report()

        report = parse_theme_reply(reply.response)
        if not report.patterns and len(entries) > HABIT_ENTRY_THRESHOLD:
            logger.info("No patterns in model reply for %d entries, using habit pattern", len(entries))
            return ThemeReport(
                patterns=[habit_pattern()],
                insights=report.insights,
                mood_trends=report.mood_trends,
            )
        return report
