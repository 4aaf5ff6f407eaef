"""Resolution of relative link and image references."""

from urllib.parse import urljoin, urlsplit


def has_scheme(reference: str) -> bool:
    """Check if a reference is already absolute (http:, mailto:, data:, ...)."""
    return bool(urlsplit(reference).scheme)


def absolutize(reference: str, source_url: str) -> str:
    """
    Resolve a link or image reference against the page URL.

    Fragments, protocol-relative and path-relative references are resolved
    per RFC 3986. Empty, absolute and malformed references come back
    unchanged.

    Args:
        reference: href/src attribute value
        source_url: Final URL of the page the reference appeared on

    Returns:
        Absolute URL, or the reference itself if it cannot be resolved
    """
    if not reference or not source_url:
        return reference

    try:
        if has_scheme(reference):
            return reference
        return urljoin(source_url, reference)
    except ValueError:
        # e.g. unbalanced IPv6 brackets in the host
        return reference
