"""URL submission data model."""

import re
from dataclasses import asdict, dataclass
from typing import Any, Optional
from urllib.parse import urlsplit

# Store key holding the newest-first list of submissions
SUBMISSIONS_KEY = "submissions"

DEFAULT_MAX_SUBMISSIONS = 100

URL_PATTERN = re.compile(r"^https?://.+")


def is_valid_url(url: Optional[str]) -> bool:
    """True when ``url`` starts with http:// or https:// followed by something."""
    return bool(url) and isinstance(url, str) and URL_PATTERN.match(url) is not None


# Scheme plus the run of slashes or backslashes browsers skip for http(s)
_SCHEME_PREFIX = re.compile(r"^https?:[/\\]*", re.IGNORECASE)


def default_title(url: str) -> str:
    """Host component of ``url`` as a browser reports it.

    Any number of slashes may follow the scheme (``http:///x`` has host
    ``x``) and internationalized hosts come back punycode-encoded. Falls
    back to the URL itself when no host can be found.
    """
    rest = _SCHEME_PREFIX.sub("", url, count=1).replace("\\", "/")
    try:
        host = urlsplit("//" + rest).hostname
    except ValueError:
        host = None
    if not host:
        return url
    try:
        return host.encode("idna").decode("ascii")
    except UnicodeError:
        return host


@dataclass
class Submission:
    """A URL submitted by a visitor."""

    id: str
    url: str
    title: str
    created_at: str
    ip_address: str = "unknown"
    user_agent: str = "unknown"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
