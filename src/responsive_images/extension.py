"""
Markdown extension emitting responsive images for convention-named files.
Converts ![alt](photo__400-300_800-600.jpg) to
<img class="md-img" src="..." srcset="..." width="800" height="600" ...>
"""

import xml.etree.ElementTree as etree

from markdown import Extension
from markdown.inlinepatterns import (
    IMAGE_LINK_RE,
    IMAGE_REFERENCE_RE,
    ImageInlineProcessor,
    ImageReferenceInlineProcessor,
    ShortImageReferenceInlineProcessor,
)

from .renderer import ResponsiveImageRenderer, escape_attribute


def trailing_attributes(md, data, end):
    """Read an attr_list suffix (``{: .wide}``) directly after an image.

    Stashed markup is not an element, so attr_list cannot reach it later.
    Returns the parsed attributes and the index just past the suffix, or an
    empty list and ``end`` when there is nothing to consume.
    """
    if "attr_list" not in md.treeprocessors:
        return [], end

    attr_list = md.treeprocessors["attr_list"]
    m = attr_list.INLINE_RE.match(data[end:])
    if m is None:
        return [], end

    holder = etree.Element("img")
    remainder = attr_list.assign_attrs(holder, m.group(1)) or ""
    return holder.items(), end + m.end() - len(remainder)


class ResponsiveImageMixin:
    """Swap the host's default <img> element for responsive markup.

    The element is kept when the renderer has no opinion; otherwise a
    raw-HTML placeholder is returned so attribute order survives
    serialization.
    """

    def __init__(self, pattern, md, renderer):
        super().__init__(pattern, md)
        self.renderer = renderer

    def handleMatch(self, m, data):
        el, start, end = super().handleMatch(m, data)
        if el is None:
            return el, start, end

        extra, extra_end = trailing_attributes(self.md, data, end)
        markup = self.renderer.render(
            el.get("src", ""), el.get("title"), el.get("alt", ""), extra=extra
        )
        if markup is None:
            return el, start, end
        return self.md.htmlStash.store(markup), start, extra_end


class ResponsiveImageInlineProcessor(ResponsiveImageMixin, ImageInlineProcessor):
    """Inline image ``![alt](href "title")`` with responsive rendering."""


class ResponsiveImageReferenceInlineProcessor(ResponsiveImageMixin, ImageReferenceInlineProcessor):
    """Reference image ``![alt][ref]`` with responsive rendering."""


class ResponsiveShortImageReferenceInlineProcessor(
    ResponsiveImageMixin, ShortImageReferenceInlineProcessor
):
    """Short reference image ``![ref]`` with responsive rendering."""


class ResponsiveImageExtension(Extension):
    """Markdown extension for responsive image variants."""

    def __init__(self, **kwargs):
        self.config = {
            "sizes": ["", 'Value of the sizes attribute, omitted when empty. Default: ""'],
            "lazy": [True, 'Add loading="lazy" to responsive images. Default: True'],
            "debug": [
                False,
                "Log unparseable URLs and malformed size lists. Default: False",
            ],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        """Replace the default image processors, keeping their names and priorities."""
        config = self.getConfigs()
        # Same attribute escaping Markdown applies to the plain images it falls back to
        renderer = ResponsiveImageRenderer(
            sizes=config["sizes"] or None,
            lazy=config["lazy"],
            debug=config["debug"],
            escape=escape_attribute,
        )

        md.inlinePatterns.register(
            ResponsiveImageInlineProcessor(IMAGE_LINK_RE, md, renderer), "image_link", 150
        )
        md.inlinePatterns.register(
            ResponsiveImageReferenceInlineProcessor(IMAGE_REFERENCE_RE, md, renderer),
            "image_reference",
            140,
        )
        md.inlinePatterns.register(
            ResponsiveShortImageReferenceInlineProcessor(IMAGE_REFERENCE_RE, md, renderer),
            "short_image_ref",
            125,
        )


def makeExtension(**kwargs):
    """Entry point for markdown extension."""
    return ResponsiveImageExtension(**kwargs)
