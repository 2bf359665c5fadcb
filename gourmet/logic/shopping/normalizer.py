"""Ingredient name normalization for aggregation keys and display sorting.

The normalized form is only ever used as a key; displayed names always keep
the user's original spelling.
"""
import unicodedata


def normalize(name: str) -> str:
    """Lowercase, trim and drop one trailing plural ``s`` or ``n``.

    German plurals mostly end in -n/-en/-s, so "Zwiebeln" and "Zwiebel" share a key.
    Some singulars lose a letter too ("Reis" -> "rei"); consistent keys matter more.
    """
    n = (name or "").strip().lower()
    if len(n) > 1 and n[-1] in ("s", "n"):
        n = n[:-1]
    return n


def _fold(text: str) -> str:
    # "Äpfel" sorts with "Apfel", not after "Z"
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def display_sort_key(name: str):
    """Collation key for display names: case-insensitive, accents sort with their base letter.

    Ties are broken by the casefolded and then the raw text so ordering is deterministic.
    """
    text = (name or "").strip()
    return (_fold(text), text.casefold(), text)


__all__ = ["normalize", "display_sort_key"]
