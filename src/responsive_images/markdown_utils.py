"""Markdown processing utilities for responsive_images."""

import re
from functools import lru_cache
from pathlib import Path

import frontmatter
import markdown

from .config import Config
from .extension import ResponsiveImageExtension

# ![alt](href) or ![alt](<href> "title"), capturing the href
_INLINE_IMAGE_PATTERN = re.compile(
    r"!\[(?:[^\]\\]|\\.)*\]\(\s*(?:<([^>\n]*)>|([^\s)]+))(?:\s+(?:\"[^\"]*\"|'[^']*'))?\s*\)"
)


def parse_markdown_file(filepath: Path) -> tuple[dict, str]:
    """Parse a markdown file with YAML frontmatter.

    Args:
        filepath: Path to the markdown file

    Returns:
        Tuple of (metadata dict, markdown content string)
    """
    from .logging import warning

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            post = frontmatter.load(f)
        return dict(post.metadata), post.content
    except Exception as e:
        warning(f"YAML parsing error in {filepath}: {e}")
        return {}, ""


def extract_image_references(markdown_content: str) -> list[tuple[int, str]]:
    """Extract inline image hrefs from markdown content.

    Args:
        markdown_content: Raw markdown text

    Returns:
        List of (line number, href) tuples in document order
    """
    references = []
    if not markdown_content:
        return references

    for lineno, line in enumerate(markdown_content.splitlines(), start=1):
        for match in _INLINE_IMAGE_PATTERN.finditer(line):
            href = match.group(1) if match.group(1) is not None else match.group(2)
            references.append((lineno, href))

    return references


@lru_cache(maxsize=8)
def get_markdown_converter(
    sizes: str = "",
    lazy: bool = True,
    debug: bool = False,
    extensions: tuple[str, ...] = (),
) -> markdown.Markdown:
    """Get or create a cached Markdown converter for the given options."""
    return markdown.Markdown(
        extensions=[
            *extensions,
            ResponsiveImageExtension(sizes=sizes, lazy=lazy, debug=debug),
        ],
    )


def render_markdown(content: str, config: Config | None = None) -> str:
    """Render markdown to HTML with responsive images.

    Args:
        content: Markdown content
        config: Configuration to use (defaults when omitted)

    Returns:
        HTML string
    """
    config = config or Config()
    md = get_markdown_converter(
        extensions=tuple(config.markdown.extensions),
        **config.images.to_extension_config(),
    )
    md.reset()
    return md.convert(content)
