"""Render step turning convention-named image references into responsive markup.

The renderer answers one question per image reference: either a complete
``<img>`` tag carrying ``srcset``/``sizes``/``width``/``height``, or ``None``
("no opinion") so the host falls back to its default image rendering.
"""

import re
from collections.abc import Callable

from .logging import ERROR, WARNING
from .logging import log as default_log
from .urls import ClassifiedURL, URLParseError, classify
from .variants import (
    Malformed,
    Matched,
    Variant,
    decode_variants,
    parse_filename,
    variant_filename,
)

IMAGE_CLASS = "md-img"

# Sentinel telling the host to render the image itself
NO_MATCH = None

# An "&" that does not already start a character reference
_BARE_AMPERSAND = re.compile(r"&(?!(?:#[0-9]+|#x[0-9a-f]+|[0-9a-z]+);)", re.IGNORECASE)

LogFunc = Callable[[int, str], None]
EscapeFunc = Callable[[str], str]


def escape_attribute(value: str) -> str:
    """Escape an attribute value the way Python-Markdown serializes ``<img>``.

    Existing character references such as ``&amp;`` are kept as written, so
    the same source text produces the same attribute whether or not the image
    turns out to be responsive.
    """
    value = _BARE_AMPERSAND.sub("&amp;", value)
    return value.replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def build_srcset(url: ClassifiedURL, base: str, variants: list[Variant]) -> str:
    """Build a ``srcset`` value with one ``<url> <width>w`` entry per variant.

    Args:
        url: Decomposed original reference
        base: Base name captured from the original filename
        variants: Variants in the order they should appear

    Returns:
        Comma-separated srcset candidates
    """
    candidates = [
        f"{url.with_filename(variant_filename(base, variant))} {variant.width}w"
        for variant in variants
    ]
    return ", ".join(candidates)


def build_attributes(
    href: str,
    srcset: str,
    largest: Variant,
    alt: str | None,
    title: str | None = None,
    sizes: str | None = None,
    lazy: bool = True,
) -> list[tuple[str, str]]:
    """Ordered ``<img>`` attributes; optional ones are left out entirely."""
    attributes = [
        ("class", IMAGE_CLASS),
        ("src", href),
        ("srcset", srcset),
    ]
    if sizes:
        attributes.append(("sizes", sizes))
    attributes.append(("width", str(largest.width)))
    attributes.append(("height", str(largest.height)))
    attributes.append(("alt", alt or ""))
    if title:
        attributes.append(("title", title))
    if lazy:
        attributes.append(("loading", "lazy"))
    return attributes


def merge_attributes(
    attributes: list[tuple[str, str]], extra: list[tuple[str, str]]
) -> list[tuple[str, str]]:
    """Apply author-supplied attributes such as ``{: .wide #hero}``.

    Classes are appended to the image class. Any other name replaces the
    generated value in place, or is added at the end when new.
    """
    merged = dict(attributes)
    for name, value in extra:
        if name == "class" and "class" in merged:
            merged["class"] = f"{merged['class']} {value}"
        else:
            merged[name] = value
    return list(merged.items())


class ResponsiveImageRenderer:
    """Configured render step; immutable once constructed.

    Args:
        sizes: Literal value for the ``sizes`` attribute; omitted when empty
        lazy: Emit ``loading="lazy"``
        debug: Report unparseable and malformed references through ``log``
        log: Diagnostic sink taking ``(level, message)``
        escape: Attribute escaper applied to every emitted value
    """

    def __init__(
        self,
        sizes: str | None = None,
        lazy: bool = True,
        debug: bool = False,
        log: LogFunc | None = None,
        escape: EscapeFunc = escape_attribute,
    ):
        self.sizes = sizes or None
        self.lazy = lazy
        self.debug = debug
        self.log = log or default_log
        self.escape = escape

    def __call__(self, href: str, title: str | None = None, alt: str | None = "") -> str | None:
        return self.render(href, title, alt)

    def _diagnose(self, level: int, message: str) -> None:
        if self.debug:
            self.log(level, message)

    def render(
        self,
        href: str,
        title: str | None = None,
        alt: str | None = "",
        extra: list[tuple[str, str]] | None = None,
    ) -> str | None:
        """Render one image reference.

        Args:
            href: Image reference exactly as written in the document
            title: Optional title text, unescaped
            alt: Alt text, unescaped
            extra: Additional attributes from the document, merged last

        Returns:
            ``<img>`` markup, or None when the reference does not follow the
            naming convention or cannot be handled
        """
        try:
            url = classify(href)
        except URLParseError:
            self._diagnose(WARNING, f"Could not parse URL: {href}")
            return NO_MATCH

        filename = url.filename
        result = parse_filename(filename)

        if isinstance(result, Malformed):
            self._diagnose(
                WARNING,
                f"Filename contains '__' but does not match the size pattern: {filename}",
            )
            return NO_MATCH
        if not isinstance(result, Matched):
            return NO_MATCH

        try:
            variants = decode_variants(result.size_list, result.extension)
            srcset = build_srcset(url, result.base, variants)
            attributes = build_attributes(
                href,
                srcset,
                variants[-1],
                alt,
                title,
                sizes=self.sizes,
                lazy=self.lazy,
            )
            if extra:
                attributes = merge_attributes(attributes, extra)
            return self.serialize(attributes)
        except Exception as e:
            # The host always gets a renderable fallback
            self._diagnose(ERROR, f"Error generating responsive image for {filename}: {e!r}")
            return NO_MATCH

    def serialize(self, attributes: list[tuple[str, str]]) -> str:
        """Serialize ordered attributes into an ``<img>`` tag."""
        rendered = "".join(f' {name}="{self.escape(value)}"' for name, value in attributes)
        return f"<img{rendered}>"


def responsive_images(
    sizes: str | None = None,
    lazy: bool = True,
    debug: bool = False,
    log: LogFunc | None = None,
    escape: EscapeFunc = escape_attribute,
) -> Callable[[str, str | None, str | None], str | None]:
    """Create a render step for a host's image-rendering hook.

    The returned callable takes ``(href, title, alt)`` and returns markup or
    None, in which case the host should render the image the default way.
    """
    return ResponsiveImageRenderer(
        sizes=sizes, lazy=lazy, debug=debug, log=log, escape=escape
    ).render
