"""
Configuration module for html_extractor.

Uses Pydantic models for validation and parsing of extraction templates.
Templates are accepted in JSON or YAML and can be rendered back to either.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import List, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator

from .errors import SerializationError, TemplateParseError

logger = logging.getLogger(__name__)

YAML_DOCUMENT_MARKER = "---"
INNER_TEXT = "InnerText"


class ValueType(str, Enum):
    """Target type of a property value."""
    STRING = "Str"
    INTEGER = "Int"
    FLOAT = "Float"
    BOOLEAN = "Bool"


class TemplateEncoding(str, Enum):
    """Textual encodings a template can be read from or written to."""
    JSON = "json"
    YAML = "yaml"


class AttributeSource(BaseModel):
    """Take the value from a named attribute of the matched element."""
    attribute: str = Field(alias="Property")

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _accept_attribute_key(cls, data):
        # {"Attribute": "href"} is an alias of {"Property": "href"}
        if isinstance(data, dict) and "Attribute" in data and "Property" not in data:
            data = dict(data)
            data["Property"] = data.pop("Attribute")
        return data


# Either the inner markup of the element or one of its attributes
ValueSource = Union[Literal["InnerText"], AttributeSource]


class PropertyTemplate(BaseModel):
    """A named scalar field located inside a matched object."""
    id: str
    css_selector: str
    value_type: ValueType
    value_from: ValueSource = INNER_TEXT

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ObjectTemplate(BaseModel):
    """A repeatable unit of extraction; yields one record per matched element."""
    object_id: str
    css_selector: str
    properties: List[PropertyTemplate] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Defaults(BaseModel):
    """Default settings for the command-line collaborator layer."""
    output_format: str = Field("yaml", alias="outputFormat")  # "json" | "yaml" | "text"
    request_timeout: float = Field(30.0, alias="requestTimeout")
    user_agent: str = Field("html-extractor/1.0", alias="userAgent")

    model_config = ConfigDict(populate_by_name=True)


_TEMPLATES_ADAPTER = TypeAdapter(List[ObjectTemplate])


def parse_template(text: str, encoding: Union[TemplateEncoding, str]) -> List[ObjectTemplate]:
    """
    Parse template text into object templates.

    Args:
        text: Template text
        encoding: Encoding of the text (json or yaml)

    Returns:
        Object templates in declaration order

    Raises:
        TemplateParseError: If the text is malformed or does not fit the schema
    """
    encoding = TemplateEncoding(encoding)
    try:
        if encoding is TemplateEncoding.YAML:
            # All template fields are text, so scalars such as 2024 or on stay strings
            data = yaml.load(text, Loader=yaml.BaseLoader)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise TemplateParseError(f"Malformed {encoding.value} template: {e}") from e

    if not isinstance(data, list):
        raise TemplateParseError(
            f"Template must be a sequence of objects, got {type(data).__name__}"
        )

    try:
        templates = _TEMPLATES_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise TemplateParseError(f"Invalid template: {e}") from e

    logger.debug(f"Parsed {len(templates)} object templates from {encoding.value}")
    return templates


def render_template(templates: List[ObjectTemplate], encoding: Union[TemplateEncoding, str]) -> str:
    """
    Render object templates back into template text.

    Args:
        templates: Object templates to render
        encoding: Target encoding (json or yaml)

    Returns:
        Template text that parse_template reads back to equal templates
    """
    encoding = TemplateEncoding(encoding)
    data = _TEMPLATES_ADAPTER.dump_python(templates, mode="json", by_alias=True)
    try:
        if encoding is TemplateEncoding.YAML:
            return yaml.safe_dump(
                data,
                explicit_start=True,
                sort_keys=False,
                allow_unicode=True,
            )
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    except (yaml.YAMLError, TypeError, ValueError) as e:
        raise SerializationError(f"Failed to render {encoding.value} template: {e}") from e


def detect_template_encoding(text: str) -> TemplateEncoding:
    """Treat the text as YAML if it starts with a document marker, else JSON."""
    if text.lstrip().startswith(YAML_DOCUMENT_MARKER):
        return TemplateEncoding.YAML
    return TemplateEncoding.JSON


def load_template(text: str) -> List[ObjectTemplate]:
    """
    Parse inline template text, detecting its encoding.

    Args:
        text: Template text

    Returns:
        Object templates in declaration order
    """
    return parse_template(text, detect_template_encoding(text))


def load_template_file(template_path: Union[str, Path]) -> List[ObjectTemplate]:
    """
    Load and parse a template file.

    The encoding is taken from the file name when it mentions yaml/yml or json,
    otherwise it is detected from the content.

    Args:
        template_path: Path to template file

    Returns:
        Object templates in declaration order
    """
    template_path = Path(template_path)

    if not template_path.exists():
        raise FileNotFoundError(f"Template file not found: {template_path}")

    logger.info(f"Loading template from: {template_path}")

    with open(template_path, 'r', encoding='utf-8') as f:
        text = f.read()

    name = template_path.name.lower()
    if "yaml" in name or "yml" in name:
        encoding = TemplateEncoding.YAML
    elif "json" in name:
        encoding = TemplateEncoding.JSON
    else:
        encoding = detect_template_encoding(text)

    templates = parse_template(text, encoding)
    logger.info(f"Loaded {len(templates)} object templates")
    return templates
