"""Slug generation for URL-safe identifiers."""

from __future__ import annotations

import re

from ..errors import EmptyInputError, EmptyResultError

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Return a lowercase, hyphen-delimited slug for ``text``.

    Runs of anything other than ASCII letters and digits collapse into a
    single ``-``; non-Latin scripts are dropped rather than transliterated.

    Raises
    ------
    EmptyInputError
        ``text`` is empty.
    EmptyResultError
        Nothing is left once the disallowed characters are removed.
    """

    if not text:
        raise EmptyInputError("empty string not permitted")

    slug = _NON_SLUG.sub("-", text.lower()).strip("-")
    if not slug:
        raise EmptyResultError("after removing characters, slug is zero length")
    return slug


__all__ = ["slugify"]
