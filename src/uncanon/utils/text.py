"""Text helpers for seed data."""

import re
import unicodedata


def fold(text: str) -> str:
    """
    Lowercase and strip accents for sorting and comparison.

    Examples:
        "Pedro Almodóvar" → "pedro almodovar"
        "  Agnès  Varda " → "agnes varda"
    """
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return re.sub(r"\s+", " ", stripped).strip().lower()


def lex_key(name: str) -> str:
    """
    Sort key for a person's name: family name first, accent-folded.

    Examples:
        "Andrei Tarkovsky" → "tarkovsky andrei"
        "Agnès Varda" → "varda agnes"
        "Satyajit Ray" → "ray satyajit"
        "Ozu" → "ozu"
    """
    parts = fold(name).split(" ")
    if len(parts) < 2:
        return parts[0]
    return " ".join([parts[-1], *parts[:-1]])


def parse_id_list(text: str) -> list[int]:
    """
    Parse a list literal of integer IDs such as ``"[1, 2, 3]"``.

    The text is parsed as data: brackets are optional, items are separated
    by commas and each must be an integer.

    Raises:
        ValueError: if any item is not an integer
    """
    body = text.strip()
    if body.startswith("[") and body.endswith("]"):
        body = body[1:-1]
    if not body.strip():
        return []
    return [int(item.strip()) for item in body.split(",")]
