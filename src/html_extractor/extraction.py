"""
Extraction module for html_extractor.

Applies object templates to a document: each object selector picks root
elements, and each property selector is evaluated inside one root only.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from bs4 import Tag

from .coercion import TypedValue, coerce
from .config import AttributeSource, Defaults, ObjectTemplate, PropertyTemplate
from .output import OutputFormat, render_output
from .selector import compile_selector, first_match, match, parse_document

logger = logging.getLogger(__name__)

Record = Dict[str, TypedValue]


@dataclass
class ExtractedObject:
    """Records extracted for one object template, in document order."""
    object_id: str
    records: List[Record] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"object_id": self.object_id, "records": [dict(r) for r in self.records]}


def read_raw_value(element: Tag, prop: PropertyTemplate) -> Optional[str]:
    """
    Pull the raw string for a property from its matched element.

    Args:
        element: Element matched by the property selector
        prop: Property template

    Returns:
        Inner markup, the attribute value, or None if the attribute is not set
    """
    source = prop.value_from
    if isinstance(source, AttributeSource):
        return element.get(source.attribute)
    return element.decode_contents()


class TemplateExtractor:
    """Handles template-driven structured extraction."""

    def __init__(self, defaults: Optional[Defaults] = None):
        """
        Initialize TemplateExtractor.

        Args:
            defaults: Default settings; only the output format is used here
        """
        self.defaults = defaults or Defaults()

    def extract(self, html: str, templates: Sequence[ObjectTemplate]) -> List[ExtractedObject]:
        """
        Extract structured records from HTML using object templates.

        Args:
            html: HTML content to extract from
            templates: Object templates in declaration order

        Returns:
            One ExtractedObject per template, in template order

        Raises:
            SelectorCompileError: If any object or property selector is invalid
        """
        document = parse_document(html)
        result = []

        for template in templates:
            roots = match(compile_selector(template.css_selector), document)
            extracted = ExtractedObject(object_id=template.object_id)
            for root in roots:
                extracted.records.append(self.extract_record(root, template))
            logger.debug(f"Object '{template.object_id}': {len(extracted.records)} records")
            result.append(extracted)

        logger.info(
            f"Extracted {sum(len(obj.records) for obj in result)} records "
            f"for {len(result)} objects"
        )
        return result

    def extract_record(self, root: Tag, template: ObjectTemplate) -> Record:
        """
        Build one record from a matched root element.

        Every property gets an entry; a property that does not match is
        coerced from the empty string.
        """
        record: Record = {}
        for prop in template.properties:
            element = first_match(compile_selector(prop.css_selector), root)
            raw = None
            if element is not None:
                raw = read_raw_value(element, prop)
            else:
                logger.debug(f"Property '{prop.id}' not found in '{template.object_id}'")
            record[prop.id] = coerce(raw if raw is not None else "", prop.value_type)
        return record

    def extract_to(
        self,
        html: str,
        templates: Sequence[ObjectTemplate],
        output_format: Optional[OutputFormat] = None,
    ) -> str:
        """
        Extract and render in one step.

        Args:
            html: HTML content to extract from
            templates: Object templates in declaration order
            output_format: Target encoding, defaults to the configured one

        Returns:
            Rendered output text
        """
        if output_format is None:
            output_format = OutputFormat.parse(self.defaults.output_format)
        return render_output(self.extract(html, templates), output_format)
