import re

_NON_ID_RE = re.compile(r"[^A-Za-z0-9]")


def to_id(name: str) -> str:
    """Convert a display name to its userid form: ASCII alphanumerics, lowercased.

    Catches the sanitized spellings of a name (``"Zarel "`` -> ``"zarel"``)
    that the server writes into protocol lines.
    """
    return _NON_ID_RE.sub("", name).lower()
