"""
Normalize Module
================

Text cleanup applied to exported cell values.
"""

from .text import (
    repair_special_characters,
    html_list_to_plain_text,
    DEFAULT_REPLACEMENTS,
)

__all__ = [
    "repair_special_characters",
    "html_list_to_plain_text",
    "DEFAULT_REPLACEMENTS",
]
