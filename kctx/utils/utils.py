import re

_WHITESPACE = re.compile(r"\s+")


def squeeze(text):
    """Trim text and collapse every run of whitespace into a single space."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text.strip())
