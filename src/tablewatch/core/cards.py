"""Card display formatting.

Card codes are two ASCII characters: rank then suit letter (``"As"``,
``"Td"``). Display strings swap the suit letter for its glyph.
"""

SUIT_SYMBOLS = {"s": "♠", "h": "♥", "d": "♦", "c": "♣"}


def format_card(code: str) -> str:
    """Return ``code`` with its suit letter replaced by a glyph.

    Anything that is not a two-character code with a known suit comes
    back unchanged.
    """
    if len(code) != 2:
        return code
    suit = SUIT_SYMBOLS.get(code[1])
    if suit is None:
        return code
    return code[0] + suit


def format_cards(codes) -> str:
    """Format a sequence of card codes, space separated."""
    return " ".join(format_card(c) for c in codes)
