"""
Text Normalizer
===============

Repairs mis-encoded text and flattens HTML list markup to plain text.

Both functions are pure: same input, same output, no side effects.
"""

import html
import re

from bs4 import BeautifulSoup


# =============================================================================
# CONSTANTS
# =============================================================================

# Known mis-encoding artifacts -> correct character.
# Order matters only where one artifact is a prefix of another (none today).
DEFAULT_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    # Curly apostrophe
    ("‚Äô", "’"),
    ("â€™", "’"),
    # Em dash
    ("‚Äî", "—"),
    ("â€”", "—"),
    # n with tilde
    ("√±", "ñ"),
    ("Ã±", "ñ"),
    # Registered sign
    ("¬Æ", "®"),
    # Trademark sign
    ("‚Ñ¢", "™"),
    ("â„¢", "™"),
    # e with acute
    ("√©", "é"),
    ("Ã©", "é"),
)

LEGACY_ENCODING = "cp1252"

# Upper bound on re-decode passes for text that was mangled more than once.
MAX_REDECODE_PASSES = 3

LIST_ITEM_PATTERN = re.compile(r"<li\b[^>]*>(.*?)</li\s*>", re.IGNORECASE | re.DOTALL)


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def repair_special_characters(
    text: str,
    replacements: tuple[tuple[str, str], ...] = DEFAULT_REPLACEMENTS
) -> str:
    """
    Repair text that was mangled by a legacy single-byte encoding.

    Three steps, in order:
      1. Undo whole-string Windows-1252 mojibake ("itâ€™s" -> "it’s").
      2. Decode HTML entities.
      3. Replace known leftover artifact sequences (including the
         Mac Roman flavour, e.g. "‚Äô") with the intended character.

    Correctly encoded text passes through unchanged, so applying the
    function twice gives the same result as applying it once. The one
    exception is double-escaped entities: entities are decoded one level
    per call, so "&amp;lt;" becomes "&lt;" and only a second call yields "<".

    Args:
        text: Possibly mis-encoded text.
        replacements: (artifact, replacement) pairs applied in order.

    Returns:
        The repaired text. Empty input returns empty output.
    """
    if not text:
        return text

    text = _redecode_legacy(text)
    text = html.unescape(text)

    for artifact, replacement in replacements:
        if artifact in text:
            text = text.replace(artifact, replacement)

    return text


def html_list_to_plain_text(html_text: str) -> str:
    """
    Convert HTML list items into dash-prefixed lines and strip all markup.

    "<li>A</li><li>B</li>" becomes "- A\\n- B\\n". Content outside list
    items is kept with its tags removed.

    Args:
        html_text: HTML fragment, typically the body of a rich-text field.

    Returns:
        Plain text.
    """
    if not html_text:
        return html_text

    flattened = LIST_ITEM_PATTERN.sub(r"- \1\n", html_text)
    return _strip_tags(flattened)


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _redecode_legacy(text: str) -> str:
    """Reverse UTF-8 bytes that were decoded as Windows-1252."""
    for _ in range(MAX_REDECODE_PASSES):
        try:
            candidate = text.encode(LEGACY_ENCODING).decode("utf-8")
        except UnicodeError:
            # Not representable as cp1252 bytes, or not valid UTF-8 once
            # it is: the text is not (or no longer) mojibake.
            break
        if candidate == text:
            break
        text = candidate
    return text


def _strip_tags(fragment: str) -> str:
    """Remove all markup tags, keeping text content."""
    if "<" not in fragment and "&" not in fragment:
        return fragment
    return BeautifulSoup(fragment, "html.parser").get_text()
