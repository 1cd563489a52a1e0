import re
from urllib.parse import urlparse

ALLOWED_SCHEMES = ("http", "https")

# Slack escapes links in command text as <https://example.com> or <https://example.com|label>
SLACK_LINK_REGEX = re.compile(r'^<([^|>]+)(?:\|[^>]*)?>$')

def unwrap_slack_link(token: str) -> str:
    """
    Strips Slack's <...> link escaping from a single token.
    Anything that isn't an escaped link comes back unchanged.
    """
    match = SLACK_LINK_REGEX.match(token.strip())
    if match:
        return match.group(1)
    return token.strip()

def is_valid_url(url: str) -> bool:
    """True for well-formed http/https URLs with a host."""
    if not url or any(c.isspace() for c in url):
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ALLOWED_SCHEMES or not parsed.hostname:
        return False
    try:
        parsed.port
    except ValueError:
        return False
    return True
