"""Diagnostics for image references in markdown documents.

Reports every image whose filename uses the ``__`` variant convention, so
authors can catch typos that would otherwise silently render as a plain image.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .markdown_utils import extract_image_references
from .urls import URLParseError, classify
from .variants import Malformed, Matched, Variant, decode_variants, parse_filename

OK = "ok"
MALFORMED = "malformed"
INVALID = "invalid"
UNPARSEABLE = "unparseable"


@dataclass
class Finding:
    """Outcome for one image reference."""

    line: int
    href: str
    status: str
    message: str = ""
    variants: list[Variant] = field(default_factory=list)

    @property
    def is_problem(self) -> bool:
        return self.status != OK


def check_href(href: str, line: int = 0) -> Finding | None:
    """Check a single href; None when it does not use the convention."""
    try:
        url = classify(href)
    except URLParseError as e:
        return Finding(line, href, UNPARSEABLE, str(e))

    filename = url.filename
    result = parse_filename(filename)

    if isinstance(result, Malformed):
        return Finding(
            line,
            href,
            MALFORMED,
            f"'{filename}' contains '__' but does not match the size pattern",
        )
    if not isinstance(result, Matched):
        return None

    try:
        variants = decode_variants(result.size_list, result.extension)
    except ValueError as e:
        return Finding(line, href, INVALID, str(e))

    sizes = ", ".join(f"{v.width}x{v.height}{v.extension}" for v in variants)
    return Finding(line, href, OK, sizes, variants)


def check_document(content: str) -> list[Finding]:
    """Check every inline image reference in a markdown document.

    Args:
        content: Markdown text (front matter already stripped)

    Returns:
        Findings for references that use the convention, in document order
    """
    findings = []
    for line, href in extract_image_references(content):
        finding = check_href(href, line)
        if finding is not None:
            findings.append(finding)
    return findings
