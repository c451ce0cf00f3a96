"""Filename convention for pre-rendered image variants.

A reference named ``photo__400-300_800-600-webp.jpg`` declares two sibling
files, ``photo__400-300.jpg`` and ``photo__800-600.webp``::

    <base>__<W1>-<H1>[-<EXT1>](_<Wn>-<Hn>[-<EXTn>])*.<realext>

Only the last ``__`` separates the base name from the size list.
"""

import re
from dataclasses import dataclass

# Greedy base so the LAST "__" wins; the size list is one or more
# W-H[-EXT] tokens joined by "_"; the real extension anchors the end.
FILENAME_PATTERN = re.compile(
    r"(?P<base>.*)__"
    r"(?P<sizes>[0-9]+-[0-9]+(?:-[a-z0-9]+)?(?:_[0-9]+-[0-9]+(?:-[a-z0-9]+)?)*)"
    r"(?P<ext>\.[^.]+)",
    re.IGNORECASE | re.ASCII | re.DOTALL,
)

_DIMENSION_PATTERN = re.compile(r"[0-9]+", re.ASCII)
_EXTENSION_WORD_PATTERN = re.compile(r"[a-z0-9]+", re.IGNORECASE | re.ASCII)


@dataclass(frozen=True)
class Variant:
    """One declared rendition of an image."""

    width: int
    height: int
    extension: str

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Variant dimensions must be positive, got {self.width}x{self.height}"
            )

    @property
    def size_token(self) -> str:
        """Canonical ``WIDTH-HEIGHT`` fragment used in generated filenames."""
        return f"{self.width}-{self.height}"


@dataclass(frozen=True)
class Matched:
    """Filename follows the convention."""

    base: str
    size_list: str
    extension: str


@dataclass(frozen=True)
class NoConvention:
    """Filename has no ``__`` at all; an ordinary image."""

    filename: str


@dataclass(frozen=True)
class Malformed:
    """Filename contains ``__`` but the size list does not parse."""

    filename: str


FilenameMatch = Matched | NoConvention | Malformed


def parse_filename(filename: str) -> FilenameMatch:
    """Match a filename against the variant naming convention.

    Args:
        filename: Final path segment of an image reference

    Returns:
        Matched with the captured parts, Malformed when ``__`` is present but
        the grammar fails, NoConvention otherwise
    """
    match = FILENAME_PATTERN.fullmatch(filename)
    if match:
        return Matched(
            base=match.group("base"),
            size_list=match.group("sizes"),
            extension=match.group("ext"),
        )
    if "__" in filename:
        return Malformed(filename)
    return NoConvention(filename)


def _parse_dimension(value: str, token: str) -> int:
    if not _DIMENSION_PATTERN.fullmatch(value):
        raise ValueError(f"Non-numeric dimension {value!r} in size token {token!r}")
    return int(value, 10)


def decode_variants(size_list: str, extension: str) -> list[Variant]:
    """Decode a ``W-H[-EXT]_W-H[-EXT]...`` list into variants sorted by width.

    Args:
        size_list: The size list captured from the filename
        extension: Real extension of the referenced file (with leading dot),
            used by tokens without an override word

    Returns:
        Variants in ascending width order; the last one is the largest

    Raises:
        ValueError: If a token is malformed or the list is empty
    """
    variants = []

    for token in size_list.split("_"):
        parts = token.split("-")
        if len(parts) not in (2, 3):
            raise ValueError(f"Invalid size token {token!r}")

        width = _parse_dimension(parts[0], token)
        height = _parse_dimension(parts[1], token)

        if len(parts) == 3:
            if not _EXTENSION_WORD_PATTERN.fullmatch(parts[2]):
                raise ValueError(f"Invalid format override in size token {token!r}")
            variant_extension = f".{parts[2]}"
        else:
            variant_extension = extension

        variants.append(Variant(width, height, variant_extension))

    if not variants:
        raise ValueError(f"No size variants declared in {size_list!r}")

    # Stable sort: equal widths keep the order they were written in
    variants.sort(key=lambda v: v.width)
    return variants


def variant_filename(base: str, variant: Variant) -> str:
    """Filename of the sibling file holding one variant.

    The override word is not repeated in the size token; it only survives as
    the extension (``pic`` + ``800-600-webp`` -> ``pic__800-600.webp``).
    """
    return f"{base}__{variant.size_token}{variant.extension}"
