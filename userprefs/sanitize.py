"""
Denylist check for text reflected back into HTML.
"""
DISALLOWED_CHARACTERS = ("<", ">", "&", '"', "'", "/", "=")


def is_safe_display_text(text: str) -> bool:
    """True if ``text`` contains none of the disallowed characters."""
    return not any(ch in text for ch in DISALLOWED_CHARACTERS)
