from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from ..core.constants import AVATAR_PLACEHOLDER_URL, UNRELIABLE_AVATAR_HOSTS


def safe_photo_url(name: str, url: Optional[str]) -> str:
    """Return ``url`` unless it is empty or points at a known-broken avatar host.

    The fallback is a deterministic initials avatar seeded by the helper name.
    """
    if url and not any(host in url for host in UNRELIABLE_AVATAR_HOSTS):
        return url
    return AVATAR_PLACEHOLDER_URL.format(seed=quote(name or "", safe=""))
