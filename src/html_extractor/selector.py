"""
Selector module for html_extractor.

Thin wrapper over BeautifulSoup and soupsieve: parses documents leniently and
compiles CSS selectors into reusable matchers scoped to a subtree.
"""

import logging
from typing import Iterator, Optional

import soupsieve
from bs4 import BeautifulSoup, Tag

from .errors import SelectorCompileError

logger = logging.getLogger(__name__)

DOCUMENT_PARSER = "lxml"

CompiledSelector = soupsieve.SoupSieve


def parse_document(html: str) -> BeautifulSoup:
    """
    Parse markup into a document tree.

    Broken markup is repaired by the parser. Multi-valued attributes such as
    ``class`` are kept as the literal attribute string.

    Args:
        html: Document text

    Returns:
        Parsed document
    """
    return BeautifulSoup(html, DOCUMENT_PARSER, multi_valued_attributes=None)


def compile_selector(selector: str) -> CompiledSelector:
    """
    Compile a CSS selector.

    Args:
        selector: Selector text

    Returns:
        Compiled selector

    Raises:
        SelectorCompileError: If the selector is empty or has invalid syntax
    """
    if not isinstance(selector, str) or not selector.strip():
        raise SelectorCompileError(str(selector), "empty selector")
    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise SelectorCompileError(selector, str(e).splitlines()[0]) from e


def match(compiled: CompiledSelector, scope: Tag) -> Iterator[Tag]:
    """
    Lazily yield descendants of ``scope`` matching the selector, in document order.

    The scope element itself is never yielded.
    """
    return compiled.iselect(scope)


def first_match(compiled: CompiledSelector, scope: Tag) -> Optional[Tag]:
    """Return the first descendant of ``scope`` matching the selector, if any."""
    return next(match(compiled, scope), None)
