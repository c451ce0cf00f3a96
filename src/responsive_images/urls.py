"""Structural decomposition of image references.

Splits an href into origin, path, query and fragment without touching the
network or filesystem, so that a different filename can be swapped into the
last path segment and the reference rebuilt in its original shape:

- absolute URLs keep their origin (``https://cdn.example.com``)
- network-path references keep their host (``//cdn.example.com``)
- root-relative paths keep their leading slash
- relative paths never gain one
"""

import re
from dataclasses import dataclass
from urllib.parse import SplitResult, quote, urlsplit

DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}

# Schemes whose paths treat "\" as "/"; relative references count as special
SPECIAL_SCHEMES = {"file", *DEFAULT_PORTS}

# Printable characters left as-is per component, after the WHATWG
# percent-encode sets. Space, double quote, angle brackets, controls and
# non-ASCII are always encoded.
_COMMON_SAFE = "!$%&'()*+,-./:;=?@[]_|~"
_PATH_SAFE = _COMMON_SAFE + "\\"
_QUERY_SAFE = _COMMON_SAFE + "\\^`{}"
_FRAGMENT_SAFE = _COMMON_SAFE + "\\^{}"

# Optional scheme followed by "//" means an authority is present
_AUTHORITY_PATTERN = re.compile(r"^\s*(?:[A-Za-z][A-Za-z0-9+.\-]*:)?//")


class URLParseError(ValueError):
    """Raised when an href is not a legal URL or path."""


@dataclass(frozen=True)
class ClassifiedURL:
    """An href split into the parts needed to rebuild it.

    ``query`` and ``fragment`` keep their leading ``?``/``#`` and are empty
    when absent. ``pathname`` of a relative reference always starts with
    ``/``; ``had_leading_slash`` records whether the author wrote one.
    """

    is_absolute: bool
    origin: str
    pathname: str
    query: str
    fragment: str
    had_leading_slash: bool

    @property
    def filename(self) -> str:
        """The final ``/``-delimited segment of the path."""
        return self.pathname.rsplit("/", 1)[-1]

    def with_filename(self, filename: str) -> str:
        """Rebuild the reference with only its last path segment replaced."""
        head, sep, _ = self.pathname.rpartition("/")
        pathname = f"{head}{sep}{filename}"

        if self.is_absolute:
            return f"{self.origin}{pathname}{self.query}{self.fragment}"

        if pathname.startswith("/") and not self.had_leading_slash:
            pathname = pathname[1:]
        return f"{pathname}{self.query}{self.fragment}"


def _origin(parts: SplitResult) -> str:
    """Build ``scheme://host[:port]`` (or ``//host`` without a scheme).

    Raises:
        ValueError: If the port is not a valid integer in range
    """
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"

    port = parts.port
    if port is not None and port != DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"

    prefix = f"{scheme}:" if scheme else ""
    return f"{prefix}//{host}"


def _split(href: str) -> tuple[SplitResult, str, str, str]:
    """Split an href and percent-encode its path, query and fragment."""
    parts = urlsplit(href)
    special = not parts.scheme or parts.scheme.lower() in SPECIAL_SCHEMES

    path = parts.path.replace("\\", "/") if special else parts.path
    query_safe = _QUERY_SAFE.replace("'", "") if special else _QUERY_SAFE

    # Lone surrogates fail UTF-8 encoding with UnicodeEncodeError
    path = quote(path, safe=_PATH_SAFE)
    query = f"?{quote(parts.query, safe=query_safe)}" if parts.query else ""
    fragment = f"#{quote(parts.fragment, safe=_FRAGMENT_SAFE)}" if parts.fragment else ""
    return parts, path, query, fragment


def classify(href: str) -> ClassifiedURL:
    """Decompose an href into a ClassifiedURL.

    References with an authority (``https://host/...``, ``//host/...``) are
    absolute, as are opaque ones with only a scheme (``data:``, ``mailto:``).
    Anything else is split as a relative path, keeping dot segments intact.

    Args:
        href: Image reference exactly as written in the document

    Returns:
        The decomposed reference

    Raises:
        URLParseError: If the href cannot be split under any interpretation
    """
    try:
        parts, path, query, fragment = _split(href)
        has_authority = _AUTHORITY_PATTERN.match(href) is not None
        origin = _origin(parts) if has_authority else ""
    except (ValueError, TypeError, AttributeError) as e:
        raise URLParseError(f"Could not parse URL: {href!r}") from e

    if has_authority:
        return ClassifiedURL(
            is_absolute=True,
            origin=origin,
            pathname=path or "/",
            query=query,
            fragment=fragment,
            had_leading_slash=href.startswith("/"),
        )

    if parts.scheme:
        return ClassifiedURL(
            is_absolute=True,
            origin=f"{parts.scheme.lower()}:",
            pathname=path,
            query=query,
            fragment=fragment,
            had_leading_slash=False,
        )

    return ClassifiedURL(
        is_absolute=False,
        origin="",
        pathname=path if path.startswith("/") else f"/{path}",
        query=query,
        fragment=fragment,
        had_leading_slash=path.startswith("/"),
    )
