"""Slug generation for article titles."""

import re

MAX_SLUG_LENGTH = 100

_DISALLOWED = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_-]+")


def generate_slug(title: str) -> str:
    """Turn a title into a lowercase, hyphen-separated, URL-safe identifier.

    >>> generate_slug("Hello, World!")
    'hello-world'

    The result is not guaranteed to be unique; callers resolve collisions.
    """
    slug = _DISALLOWED.sub("", title.lower())
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")[:MAX_SLUG_LENGTH]
