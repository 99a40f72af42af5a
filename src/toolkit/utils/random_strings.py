"""Random identifier generation."""

from __future__ import annotations

import secrets

RANDOM_STRING_SOURCE = (
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_+"
)


def random_string(n: int) -> str:
    """Return ``n`` characters drawn uniformly from ``RANDOM_STRING_SOURCE``.

    Characters come from the ``secrets`` CSPRNG, so the result is safe to use
    as a file name or an opaque token.
    """

    if n < 0:
        raise ValueError("length must be non-negative")
    return "".join(secrets.choice(RANDOM_STRING_SOURCE) for _ in range(n))


__all__ = ["RANDOM_STRING_SOURCE", "random_string"]
