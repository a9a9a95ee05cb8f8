"""Service layer for the adapter's business logic.

Services depend on protocols (interfaces), not concrete backends, which
keeps them testable with fakes.

Architecture:
    Handler -> Adapter (facade) -> Backend driver
    (HTTP)  -> (Business)        -> (Ollama / llama.cpp)

Usage:
    ```python
    from snapjournal_ai.services import LanguageModelAdapter

    adapter = LanguageModelAdapter.create()
    report = await adapter.analyze_themes(entry_bodies)
    ```
"""

from .adapter import LanguageModelAdapter, validate_base_url
from .report_parser import parse_theme_reply
from .theme_analyzer import ThemeAnalyzer

__all__ = [
    "LanguageModelAdapter",
    "ThemeAnalyzer",
    "parse_theme_reply",
    "validate_base_url",
]
