"""
Helper functions for Wikipedia article titles.

Titles keep the casing the caller supplied for display; identity checks during a
search go through `title_key`, which is case-insensitive.
"""

import re
from typing import Any

_WHITESPACE = re.compile(r"\s+")


def clean_title(title: str) -> str:
    """Returns the display form of an article title.

    Examples:
      "  Notre_Dame   Fighting Irish " => "Notre Dame Fighting Irish"
      "Banana"                         => "Banana"
    """
    return _WHITESPACE.sub(" ", title.replace("_", " ")).strip()


def title_key(title: str) -> str:
    """Returns the identity key of an article title.

    Two titles name the same article when their keys are equal.
    """
    return title.lower()


def is_str(val: Any) -> bool:
    """Returns whether or not the provided value is a string type."""
    return isinstance(val, str)


def is_blank(val: Any) -> bool:
    """Returns whether the value is missing, not a string or cleans to an empty title.

    Examples:
      None  => True
      "  "  => True
      "__"  => True
      "A_B" => False
    """
    return not is_str(val) or not clean_title(val)

