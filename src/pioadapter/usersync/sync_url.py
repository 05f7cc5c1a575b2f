"""
User sync redirect URL construction.

The exchange redirects the browser to our /setuid endpoint, filling in
its own user id where the %%USER_ALIAS%% macro sits.
"""

from dataclasses import dataclass
from urllib.parse import quote_plus

REDIRECT_PLACEHOLDER = "{{redirect_url}}"
USER_ALIAS_MACRO = "%%USER_ALIAS%%"


@dataclass(frozen=True)
class UsersyncInfo:
    """User sync pixel description returned to the orchestrator."""

    url: str
    type: str = "redirect"
    support_cors: bool = False

    def to_dict(self) -> dict:
        return {"url": self.url, "type": self.type, "supportCORS": self.support_cors}


def build_redirect_url(external_url: str, family: str) -> str:
    """Build the unescaped /setuid callback URL."""
    return f"{external_url.rstrip('/')}/setuid?bidder={family}&uid={USER_ALIAS_MACRO}"


def build_sync_url(template: str, external_url: str, family: str) -> str:
    """
    Build the exchange user sync URL.

    The whole redirect URL is query-escaped once. It replaces the
    {{redirect_url}} placeholder when the template has one, otherwise
    it is appended to the template.

    Example:
        >>> build_sync_url("usersync?rurl=", "http://localhost", "platformio")
        'usersync?rurl=http%3A%2F%2Flocalhost%2Fsetuid%3Fbidder%3Dplatformio%26uid%3D%25%25USER_ALIAS%25%25'
    """
    escaped = quote_plus(build_redirect_url(external_url, family), safe="")
    if REDIRECT_PLACEHOLDER in template:
        return template.replace(REDIRECT_PLACEHOLDER, escaped)
    return template + escaped
