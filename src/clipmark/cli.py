"""Command-line interface for clipmark."""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

import requests
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .clipper import Clipper
from .conversion.extractor import MainContentExtractor, decode_html
from .conversion.markdown import HtmlToMarkdown
from .conversion.urls import get_domain
from .logging_config import setup_logging
from .models.config import ClipmarkConfig, ClipOptions, ConversionOptions, MarkdownStyle
from .models.results import ClipResult, PageMetadata
from .naming import sanitize_filename

DEFAULT_USER_AGENT = f"clipmark/{__version__} (+https://pypi.org/project/clipmark/)"
FETCH_TIMEOUT = 30


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="clipmark",
        description="Clip web pages and HTML fragments to Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Clip a page to stdout
  clipmark https://blog.example.com/post

  # Save into a directory, named after the page title, with frontmatter
  clipmark https://blog.example.com/post -o notes/ --frontmatter

  # Convert a local fragment without content extraction
  clipmark fragment.html --fragment --base-url https://example.com/docs/

  # Read from stdin with a style override
  curl -s https://example.com | clipmark - --base-url https://example.com --heading-style setext
        """,
    )

    parser.add_argument(
        "source",
        help="URL to fetch, path to an HTML file, or - for stdin",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--base-url",
        "-b",
        default=None,
        help="URL used to resolve relative links (default: the source URL)",
    )
    parser.add_argument(
        "--fragment",
        action="store_true",
        help="Treat the input as a content fragment and skip main-content extraction",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="YAML configuration file",
    )

    # Style
    style_group = parser.add_argument_group("markdown style")
    style_group.add_argument(
        "--heading-style",
        choices=["atx", "setext"],
        default=None,
        help="Heading style (default: atx)",
    )
    style_group.add_argument(
        "--bullet",
        choices=["-", "+", "*"],
        default=None,
        help="Bullet list marker (default: -)",
    )
    style_group.add_argument(
        "--code-block-style",
        choices=["fenced", "indented"],
        default=None,
        help="Code block style (default: fenced)",
    )
    style_group.add_argument(
        "--em-delimiter",
        choices=["*", "_"],
        default=None,
        help="Emphasis delimiter (default: *)",
    )
    style_group.add_argument(
        "--hr",
        default=None,
        help="Horizontal rule token (default: ---)",
    )

    # Output
    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--output",
        "-o",
        default=None,
        help="Output file, or directory to save <title>.md into (default: stdout)",
    )
    output_group.add_argument(
        "--filename",
        default=None,
        help="File name (without .md) used when --output is a directory",
    )
    output_group.add_argument(
        "--frontmatter",
        action="store_true",
        help="Prepend YAML frontmatter with page metadata",
    )
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress status output",
    )

    return parser


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def read_source(source: str) -> bytes:
    """
    Read raw HTML from a URL, a file or stdin.

    Raises:
        requests.RequestException: If the URL cannot be fetched
        OSError: If the file cannot be read
    """
    if source == "-":
        return sys.stdin.buffer.read()

    if is_url(source):
        response = requests.get(
            source,
            timeout=FETCH_TIMEOUT,
            headers={"User-Agent": DEFAULT_USER_AGENT},
        )
        response.raise_for_status()
        return response.content

    return Path(source).read_bytes()


def load_config(args: argparse.Namespace) -> ClipmarkConfig:
    """Load the config file (if any) and apply command-line overrides."""
    config = ClipmarkConfig.from_yaml_file(args.config) if args.config else ClipmarkConfig()

    overrides = {
        "heading_style": args.heading_style,
        "bullet_list_marker": args.bullet,
        "code_block_style": args.code_block_style,
        "em_delimiter": args.em_delimiter,
        "hr": args.hr,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    updates: dict = {}
    if overrides:
        updates["style"] = MarkdownStyle(**{**config.style.model_dump(), **overrides})
    if args.frontmatter:
        updates["frontmatter"] = True
    if args.verbose:
        updates["log_level"] = "DEBUG"
    elif args.quiet:
        updates["log_level"] = "ERROR"

    return config.model_copy(update=updates) if updates else config


def convert_fragment(html: bytes, base_url: str, style: MarkdownStyle, filename: Optional[str]) -> ClipResult:
    """Convert a fragment as-is, with metadata derived from the base URL only."""
    fragment = decode_html(html)
    options = ConversionOptions(base_url=base_url, **style.model_dump())
    markdown = HtmlToMarkdown().convert(fragment, options)
    metadata = PageMetadata(url=base_url, domain=get_domain(base_url))
    return ClipResult(
        markdown=markdown,
        html=fragment,
        metadata=metadata,
        suggested_filename=sanitize_filename(filename or ""),
    )


def output_path(output: str, result: ClipResult) -> Path:
    """Resolve the file to write; a directory (or a path ending in a separator) gets <filename>.md."""
    path = Path(output)
    if path.is_dir() or output.endswith(("/", os.sep)):
        path.mkdir(parents=True, exist_ok=True)
        return path / f"{result.suggested_filename}.md"
    return path


def run_clip(args: argparse.Namespace) -> int:
    """Run a clip with the given arguments."""
    console = Console(stderr=True)

    try:
        config = load_config(args)
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    setup_logging(
        level=config.log_level,
        log_file=config.log_file,
    )

    base_url = args.base_url or (args.source if is_url(args.source) else None)
    if base_url is None:
        console.print("[red]Error:[/red] --base-url is required when reading a file or stdin")
        return 1

    if not args.quiet:
        console.print(f"[bold blue]clipmark[/bold blue] v{__version__}")
        console.print(f"Source: {escape(args.source)}")

    try:
        html = read_source(args.source)
    except (requests.RequestException, OSError) as e:
        console.print(f"[red]Failed to read {escape(args.source)}:[/red] {escape(str(e))}")
        return 1

    try:
        if args.fragment:
            result = convert_fragment(html, base_url, config.style, args.filename)
        else:
            clipper = Clipper(extractor=MainContentExtractor.from_config(config.extractor))
            options = ClipOptions(url=base_url, filename=args.filename, **config.style.model_dump())
            result = clipper.clip(html, options)
    except ValidationError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    document = result.to_document(frontmatter=config.frontmatter)

    if args.output is None:
        sys.stdout.write(document)
        return 0

    try:
        path = output_path(args.output, result)
        path.write_text(document, encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Failed to write {escape(args.output)}:[/red] {escape(str(e))}")
        return 1
    if not args.quiet:
        console.print(f"[green]Saved[/green] {escape(str(path))} ({result.metadata.word_count} words)")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_clip(args)


if __name__ == "__main__":
    sys.exit(main())
