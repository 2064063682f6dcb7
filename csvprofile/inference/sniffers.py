"""Shallow envelope checks for array-like and object-like text."""


def _has_envelope(text: str, opening: str, closing: str) -> bool:
    stripped = text.strip()
    if not stripped:
        return False
    return stripped[0] == opening and stripped[-1] == closing


def looks_like_array(text: str) -> bool:
    """True when the stripped text starts with '[' and ends with ']'"""
    return _has_envelope(text, "[", "]")


def looks_like_object(text: str) -> bool:
    """True when the stripped text starts with '{' and ends with '}'"""
    return _has_envelope(text, "{", "}")
