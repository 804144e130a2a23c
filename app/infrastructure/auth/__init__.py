"""
Authentication infrastructure: Firebase ID token verification mapped to
the internal user.
"""

from .dependencies import (
    CurrentUser,
    get_current_user,
    get_identity_provider,
    get_verified_identity,
)

__all__ = [
    "CurrentUser",
    "get_current_user",
    "get_identity_provider",
    "get_verified_identity",
]
