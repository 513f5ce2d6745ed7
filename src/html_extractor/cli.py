"""
CLI module for html_extractor.

Provides command-line interface and orchestration logic.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import Defaults, ObjectTemplate, load_template, load_template_file, render_template
from .errors import HtmlExtractorError
from .extraction import TemplateExtractor
from .output import OutputFormat
from .utils import read_html

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def read_templates(template: Optional[str], template_file: Optional[str]) -> List[ObjectTemplate]:
    """
    Load templates from inline text or a file.

    Args:
        template: Inline template text
        template_file: Path to a template file

    Returns:
        Object templates in declaration order
    """
    if template:
        return load_template(template)
    if template_file:
        return load_template_file(template_file)
    raise ValueError("Either --template or --template-file must be specified")


def run_extract(
    template: Optional[str] = None,
    template_file: Optional[str] = None,
    url: Optional[str] = None,
    output_format: str = "yaml",
    timeout: Optional[float] = None,
    verbose: bool = False
) -> str:
    """
    Main extraction orchestration function.

    Args:
        template: Inline template text
        template_file: Path to template file
        url: URL of the document; stdin is read if omitted
        output_format: Output format name (json, yaml or text)
        timeout: Request timeout in seconds
        verbose: Enable verbose logging

    Returns:
        Rendered output
    """
    setup_logging(verbose)

    defaults = Defaults(output_format=output_format)
    if timeout is not None:
        defaults.request_timeout = timeout

    templates = read_templates(template, template_file)
    html = read_html(url, defaults)

    extractor = TemplateExtractor(defaults)
    return extractor.extract_to(html, templates, OutputFormat.parse(output_format))


def run_convert_template(
    template: Optional[str] = None,
    template_file: Optional[str] = None,
    to: str = "yaml",
    verbose: bool = False
) -> str:
    """Re-serialize a template in another encoding."""
    setup_logging(verbose)
    templates = read_templates(template, template_file)
    return render_template(templates, to)


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Extract structured records from HTML using CSS selector templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  html-extractor extract --url https://example.com --template-file template.yaml
  cat page.html | html-extractor extract --template-file template.json --output-format json
  html-extractor convert-template --template-file template.json --to yaml
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Extract command
    extract_parser = subparsers.add_parser('extract', help='Extract records from a document')
    extract_parser.add_argument('--url', help='Read the document from this URL instead of stdin')
    extract_source = extract_parser.add_mutually_exclusive_group(required=True)
    extract_source.add_argument('--template',
                                help='Inline template; YAML if it starts with "---", else JSON')
    extract_source.add_argument('--template-file', help='Path to a JSON or YAML template file')
    extract_parser.add_argument('--output-format', default='yaml',
                                help='json, yaml or text (default: yaml)')
    extract_parser.add_argument('--timeout', type=float,
                                help='Request timeout in seconds when using --url')
    extract_parser.add_argument('--verbose', '-v', action='store_true',
                                help='Enable verbose logging')

    # Convert command
    convert_parser = subparsers.add_parser('convert-template',
                                           help='Re-serialize a template as JSON or YAML')
    convert_source = convert_parser.add_mutually_exclusive_group(required=True)
    convert_source.add_argument('--template', help='Inline template text')
    convert_source.add_argument('--template-file', help='Path to a template file')
    convert_parser.add_argument('--to', choices=['json', 'yaml'], default='yaml',
                                help='Target encoding (default: yaml)')
    convert_parser.add_argument('--verbose', '-v', action='store_true',
                                help='Enable verbose logging')

    args = parser.parse_args(argv)

    try:
        if args.command == 'extract':
            output = run_extract(
                template=args.template,
                template_file=args.template_file,
                url=args.url,
                output_format=args.output_format,
                timeout=args.timeout,
                verbose=args.verbose
            )
        elif args.command == 'convert-template':
            output = run_convert_template(
                template=args.template,
                template_file=args.template_file,
                to=args.to,
                verbose=args.verbose
            )
        else:
            parser.print_help()
            sys.exit(1)
    except (HtmlExtractorError, FileNotFoundError, ValueError) as e:
        logger.error(f"Extraction failed: {e}")
        sys.exit(1)

    text_output = args.command == 'extract' and OutputFormat.parse(args.output_format) is OutputFormat.TEXT
    if not text_output and output.endswith("\n"):
        # YAML rendering ends with its own newline
        output = output[:-1]
    print(output)


if __name__ == '__main__':
    main()
