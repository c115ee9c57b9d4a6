"""Slug generation for threads and categories."""

import re
import secrets
import string

from discuss.domain.value import Slug

_BASE36 = string.digits + string.ascii_lowercase
_MAX_BASE_LENGTH = 100


def slugify(text: str) -> str:
    """Convert text to URL-safe slug format.

    - Converts to lowercase and trims
    - Drops everything but ASCII letters, digits, whitespace and hyphens
    - Collapses runs of whitespace, underscores and hyphens into one hyphen
    - Strips leading/trailing hyphens
    - Truncates to 100 characters

    Args:
        text: Title or name to slugify

    Returns:
        Slug string (may be empty)
    """
    slug = text.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"[\s_-]+", "-", slug)
    slug = slug.strip("-")[:_MAX_BASE_LENGTH]
    return slug.strip("-")


def random_suffix(length: int = 4) -> str:
    """Random lowercase base36 string."""
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def make_thread_slug(title: str, suffix_length: int = 4) -> Slug:
    """Slug for a new thread: slugified title plus a random suffix.

    The suffix makes collisions unlikely enough that no existence check is
    made; a collision surfaces as a uniqueness violation on insert.
    """
    base = slugify(title) or "thread"
    return Slug(f"{base}-{random_suffix(suffix_length)}")
