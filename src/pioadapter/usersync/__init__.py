"""User sync URL building."""

from .sync_url import (
    REDIRECT_PLACEHOLDER,
    USER_ALIAS_MACRO,
    UsersyncInfo,
    build_redirect_url,
    build_sync_url,
)

__all__ = [
    "REDIRECT_PLACEHOLDER",
    "USER_ALIAS_MACRO",
    "UsersyncInfo",
    "build_redirect_url",
    "build_sync_url",
]
