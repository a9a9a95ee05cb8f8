"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services and
backends. They are NOT used for API contracts - use DTOs from the dto
package for that.
"""

from .backend_selector import BackendSelector, HttpRunner, ProcessBinary
from .theme_report import ThemePattern, ThemeReport

__all__ = [
    "BackendSelector",
    "HttpRunner",
    "ProcessBinary",
    "ThemePattern",
    "ThemeReport",
]
