"""Text processing utilities."""

import re

_WHITESPACE = re.compile(r"\s+")


def normalise_spaces(s: str) -> str:
    """
    Collapse whitespace runs into single spaces and trim both ends.
    
    Args:
        s: Input string
        
    Returns:
        String with normalized whitespace
    """
    if not s:
        return ""
    return _WHITESPACE.sub(" ", s).strip()


def join_normalised(*parts: str) -> str:
    """
    Normalise each part, drop the empty ones and join the rest with a space.
    
    Args:
        *parts: Text fragments, typically one per child node or reference
        
    Returns:
        Joined text
    """
    return " ".join(piece for piece in map(normalise_spaces, parts) if piece)
