"""
Error types for html_extractor.

Per-field coercion problems are never errors; they degrade to the
``UNAVAILABLE`` sentinel in the coercion module.
"""

from typing import Optional


class HtmlExtractorError(Exception):
    """Base class for all html_extractor errors."""


class TemplateParseError(HtmlExtractorError):
    """Template text could not be decoded into object templates."""


class ExtractError(HtmlExtractorError):
    """Extraction was aborted; no partial result is returned."""


class SelectorCompileError(ExtractError):
    """A CSS selector in the template has invalid syntax."""

    def __init__(self, selector: str, reason: Optional[str] = None):
        self.selector = selector
        self.reason = reason
        message = f"[Selector Error]: invalid selector {selector!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class SerializationError(HtmlExtractorError):
    """Output or template could not be encoded."""


class FetchError(HtmlExtractorError):
    """The document could not be downloaded."""
