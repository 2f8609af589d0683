"""Small helpers shared across the agent: identifiers and title casing."""

import re
import uuid

_WORD_START = re.compile(r'(^|\s)(\S)')


def new_id() -> str:
    """Return a collision-resistant opaque identifier."""
    return uuid.uuid4().hex


def smart_capitalize(text: str) -> str:
    """
    Capitalize the first letter of every word, leaving the rest untouched.

    Unlike ``str.title`` this keeps interior capitals intact, so
    "red kurti by FabIndia" becomes "Red Kurti By FabIndia" rather than
    "Red Kurti By Fabindia". Whitespace between words is preserved.
    """
    if not text:
        return text
    return _WORD_START.sub(lambda match: match.group(1) + match.group(2).upper(), text)
