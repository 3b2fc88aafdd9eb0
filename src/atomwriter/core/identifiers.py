"""Tag URI (RFC 4151) identifiers for feeds and entries."""

from datetime import datetime
from urllib.parse import urlsplit


def link_host(link: str) -> str:
    """Return the host of ``link`` with scheme, port, userinfo and path removed."""
    host = urlsplit(link).hostname
    if host:
        return host
    # Scheme-less links such as "example.org/posts/1"
    authority = link.split("/", 1)[0]
    authority = authority.rsplit("@", 1)[-1]
    return authority.split(":", 1)[0].lower()


def tag_uri(link: str, dt: datetime) -> str:
    """Build ``tag:<host>,<YYYY-MM-DD>:/<YYYYMMDDHHMMSS>`` from a link and a creation time.

    The result depends only on its arguments, so an entry keeps the same id
    across regenerations as long as the caller keeps its creation time.
    """
    return f"tag:{link_host(link)},{dt:%Y-%m-%d}:/{dt:%Y%m%d%H%M%S}"
