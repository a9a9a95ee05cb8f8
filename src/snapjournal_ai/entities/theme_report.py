"""Theme analysis domain entities."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ThemePattern:
    """A recurring theme found across a batch of journal entries.

    Attributes:
        id: Identifier unique within one report
        title: Short theme name
        description: What the theme is about
        strength: How pronounced the theme is (0-1)
        entry_ids: Entries the theme was seen in (may be empty)
        tags: Free-form labels
        pattern_type: Classification tag ("custom", "habit", ...)
    """

    id: str
    title: str
    description: str
    strength: float
    entry_ids: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    pattern_type: str = "custom"


@dataclass(frozen=True)
class ThemeReport:
    """Structured result of a theme analysis.

    Attributes:
        patterns: Themes in the order the model reported them
        insights: Free-text observations
        mood_trends: Mood label to fraction of entries (0-1)
    """

    patterns: list[ThemePattern] = field(default_factory=list)
    insights: list[str] = field(default_factory=list)
    mood_trends: dict[str, float] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """Whether the report carries no findings at all."""
        return not (self.patterns or self.insights or self.mood_trends)
