"""Canonical path handling shared by bucket and project-tree listings."""

from __future__ import annotations

import logging
from typing import Optional

SEPARATOR = "/"


def is_directory_marker(key: str) -> bool:
    """Return True when the key names a folder rather than a leaf file."""
    return not key or key.endswith(SEPARATOR)


def _clean_prefix(prefix: str) -> str:
    return prefix.strip(SEPARATOR)


def matches_prefix(raw_key: str, prefix: Optional[str]) -> bool:
    """Return True when raw_key lies under prefix on a path-segment boundary."""
    if not prefix:
        return True
    cleaned = _clean_prefix(prefix)
    if not cleaned:
        return True
    key = raw_key.lstrip(SEPARATOR)
    return key == cleaned or key.startswith(cleaned + SEPARATOR)


def join_prefix(prefix: Optional[str]) -> str:
    """Return prefix in S3 listing form (no leading slash, one trailing slash)."""
    if not prefix:
        return ""
    cleaned = _clean_prefix(prefix)
    return f"{cleaned}{SEPARATOR}" if cleaned else ""


def normalize_key(raw_key: str, strip_prefix: Optional[str] = None) -> Optional[str]:
    """
    Convert a raw listing key into the canonical join path.

    Args:
        raw_key: Key as reported by the store (S3 object key or project pathname)
        strip_prefix: Optional bucket prefix or folder path to remove

    Returns:
        The canonical relative path, or None for directory markers.
        Keys outside strip_prefix are passed through unchanged and logged.
    """
    if is_directory_marker(raw_key):
        return None
    key = raw_key.lstrip(SEPARATOR)
    cleaned = _clean_prefix(strip_prefix) if strip_prefix else ""
    if cleaned:
        if key.startswith(cleaned + SEPARATOR):
            key = key[len(cleaned) :].lstrip(SEPARATOR)
        elif key != cleaned:
            logging.warning("Key %s is outside expected prefix %s; keeping it as-is", raw_key, cleaned)
    if not key:
        return None
    return key


__all__ = ["SEPARATOR", "is_directory_marker", "join_prefix", "matches_prefix", "normalize_key"]
