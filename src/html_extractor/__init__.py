"""
html_extractor - Template-driven structured extraction from HTML

This package turns an HTML document into typed records by applying a
declarative template with support for:
- JSON and YAML templates of objects and properties
- CSS selectors scoped to each matched object
- Text content or attribute values as property sources
- Typed values (string, integer, float, boolean) with an "unavailable" sentinel
- JSON, YAML or plain-text output
"""

__version__ = "1.0.0"

from .config import (
    load_template,
    load_template_file,
    parse_template,
    render_template,
    detect_template_encoding,
    Defaults,
    ObjectTemplate,
    PropertyTemplate,
    AttributeSource,
    ValueType,
    TemplateEncoding,
    INNER_TEXT,
)
from .coercion import coerce, format_value, UNAVAILABLE
from .errors import (
    HtmlExtractorError,
    TemplateParseError,
    ExtractError,
    SelectorCompileError,
    SerializationError,
    FetchError,
)
from .extraction import TemplateExtractor, ExtractedObject
from .output import OutputFormat, render_output
from .selector import compile_selector, match, parse_document
from .cli import main

__all__ = [
    "load_template",
    "load_template_file",
    "parse_template",
    "render_template",
    "detect_template_encoding",
    "Defaults",
    "ObjectTemplate",
    "PropertyTemplate",
    "AttributeSource",
    "ValueType",
    "TemplateEncoding",
    "INNER_TEXT",
    "coerce",
    "format_value",
    "UNAVAILABLE",
    "HtmlExtractorError",
    "TemplateParseError",
    "ExtractError",
    "SelectorCompileError",
    "SerializationError",
    "FetchError",
    "TemplateExtractor",
    "ExtractedObject",
    "OutputFormat",
    "render_output",
    "compile_selector",
    "match",
    "parse_document",
    "main",
]
