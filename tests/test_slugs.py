"""Tests for slug generation."""

import pytest

from toolkit.errors import EmptyInputError, EmptyResultError, SlugError
from toolkit.utils import slugify


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("now is the time", "now-is-the-time"),
        (
            "Now is the time for all GOOD men! + fish & such &^123",
            "now-is-the-time-for-all-good-men-fish-such-123",
        ),
        ("hello world こんにちは世界", "hello-world"),
        ("  --Already-Sluggy--  ", "already-sluggy"),
        ("Café au lait", "caf-au-lait"),
        ("2024", "2024"),
    ],
)
def test_slugify(text: str, expected: str) -> None:
    assert slugify(text) == expected


def test_slugify_empty_input() -> None:
    with pytest.raises(EmptyInputError):
        slugify("")


@pytest.mark.parametrize("text", ["こんにちは世界", "!!! ---", "   "])
def test_slugify_empty_result(text: str) -> None:
    with pytest.raises(EmptyResultError):
        slugify(text)


def test_slug_errors_share_a_base() -> None:
    assert issubclass(EmptyInputError, SlugError)
    assert issubclass(EmptyResultError, SlugError)
