"""
Output module for html_extractor.

Renders extraction results as JSON, YAML or a single plain-text value.
"""

import json
import logging
import math
from enum import Enum
from typing import Any, Dict, List, Sequence

import yaml

from .coercion import format_value
from .errors import SerializationError

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Supported output encodings."""
    JSON = "json"
    YAML = "yaml"
    TEXT = "text"

    @classmethod
    def parse(cls, name: str) -> "OutputFormat":
        """
        Look up a format by name, ignoring case.

        Unknown names fall back to YAML.
        """
        try:
            return cls((name or "").lower())
        except ValueError:
            logger.warning(f"Unknown output format '{name}', falling back to yaml")
            return cls.YAML


def _finite_or_none(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def to_serializable(result: Sequence) -> List[Dict[str, Any]]:
    """Convert extracted objects into plain lists and dicts."""
    data = [obj.to_dict() for obj in result]
    for obj in data:
        obj["records"] = [
            {key: _finite_or_none(value) for key, value in record.items()}
            for record in obj["records"]
        ]
    return data


def first_value_text(result: Sequence) -> str:
    """
    Project the result onto its first value.

    Takes the first object, its first record and that record's first property
    in template order. Any missing level yields the empty string.
    """
    if not result:
        return ""
    records = result[0].records
    if not records:
        return ""
    for value in records[0].values():
        return format_value(value)
    return ""


def render_output(result: Sequence, output_format: OutputFormat) -> str:
    """
    Render extracted objects in the requested format.

    Args:
        result: Extracted objects in template order
        output_format: Target encoding

    Returns:
        Rendered text

    Raises:
        SerializationError: If the encoder fails
    """
    output_format = OutputFormat(output_format)
    if output_format is OutputFormat.TEXT:
        return first_value_text(result)

    data = to_serializable(result)
    try:
        if output_format is OutputFormat.JSON:
            return json.dumps(data, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
        return yaml.safe_dump(
            data,
            explicit_start=True,
            sort_keys=False,
            allow_unicode=True,
        )
    except (yaml.YAMLError, TypeError, ValueError) as e:
        raise SerializationError(f"Failed to render {output_format.value} output: {e}") from e
