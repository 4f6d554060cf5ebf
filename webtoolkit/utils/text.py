"""Random string and slug helpers."""

import random
import re
import string

from webtoolkit.core.exceptions import SlugError

CHARSET = string.ascii_lowercase + string.ascii_uppercase + string.digits

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def random_string(length: int) -> str:
    """Return ``length`` characters drawn from ``CHARSET``.

    Not suitable for secrets: uses the module-level ``random`` generator.
    """
    if length < 0:
        raise ValueError("length must not be negative")
    return "".join(random.choices(CHARSET, k=length))


def slugify(text: str) -> str:
    """Lower-case ``text`` and collapse everything outside ``[a-z0-9]`` into hyphens.

    Raises:
        SlugError: if the input is empty or nothing sluggable remains.
    """
    if not text:
        raise SlugError("the input cannot be empty")

    slug = _NON_SLUG.sub("-", text.lower()).strip("-")
    if not slug:
        raise SlugError("invalid input, the slug is empty")
    return slug
