"""
Utility functions for html_extractor.

Provides document acquisition from a URL or standard input.
"""

import logging
import sys
from typing import Optional, TextIO

import requests

from .config import Defaults
from .errors import FetchError

logger = logging.getLogger(__name__)


def fetch_html(url: str, defaults: Optional[Defaults] = None) -> str:
    """
    Download a document.

    Args:
        url: URL of the document
        defaults: Settings providing timeout and user agent

    Returns:
        Response body as text

    Raises:
        FetchError: On connection failure, timeout or an HTTP error status
    """
    defaults = defaults or Defaults()
    logger.info(f"Fetching document: {url}")
    try:
        response = requests.get(
            url,
            timeout=defaults.request_timeout,
            headers={"User-Agent": defaults.user_agent},
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Error fetching {url}: {e}") from e

    logger.debug(f"Fetched {len(response.text)} characters from {url}")
    return response.text


def read_stdin(stream: Optional[TextIO] = None) -> str:
    """Read the whole document from standard input."""
    stream = stream or sys.stdin
    return stream.read()


def read_html(url: Optional[str] = None, defaults: Optional[Defaults] = None,
              stream: Optional[TextIO] = None) -> str:
    """
    Obtain document text from a URL if given, otherwise from standard input.

    Args:
        url: Optional URL of the document
        defaults: Settings used for the download
        stream: Input stream used instead of stdin

    Returns:
        Document text
    """
    if url:
        return fetch_html(url, defaults)
    logger.debug("Reading document from stdin")
    return read_stdin(stream)
