"""
Utility functions for the API description to code generator.
"""


def to_title(text: str) -> str:
    """Upper-case the first character and keep the rest unchanged.

    Examples:
        "viewport" -> "Viewport"
        "newPage" -> "NewPage"
        "" -> ""
    """
    if not text:
        return ""
    return text[0].upper() + text[1:]


def enum_constant(label: str) -> str:
    """Convert a string-literal label to an enum constant name.

    Examples:
        "no-preference" -> "NO_PREFERENCE"
        "light" -> "LIGHT"
    """
    return label.replace("-", "_").upper()
