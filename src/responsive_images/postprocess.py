"""Post-processing of rendered HTML.

Summarizes how many images in a rendered document came out responsive.
"""

from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from .renderer import IMAGE_CLASS


@dataclass
class ImageSummary:
    """Counts of responsive vs plain images in a document."""

    responsive: list[str] = field(default_factory=list)
    plain: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.responsive) + len(self.plain)


def summarize_images(html_content: str) -> ImageSummary:
    """Collect the src of every <img>, split by whether it carries a srcset.

    Args:
        html_content: Rendered HTML

    Returns:
        ImageSummary with sources in document order
    """
    summary = ImageSummary()
    soup = BeautifulSoup(html_content, "html.parser")

    for img in soup.find_all("img"):
        src = img.get("src", "")
        if IMAGE_CLASS in img.get("class", []) and img.get("srcset"):
            summary.responsive.append(src)
        else:
            summary.plain.append(src)

    return summary
