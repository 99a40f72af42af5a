"""Utility helpers shared by the toolkit services."""

from .directories import create_dir_if_not_exists
from .random_strings import RANDOM_STRING_SOURCE, random_string
from .slugs import slugify
from .sniffing import detect_content_type

__all__ = [
    "RANDOM_STRING_SOURCE",
    "create_dir_if_not_exists",
    "detect_content_type",
    "random_string",
    "slugify",
]
