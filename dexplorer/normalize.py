import locale
import unicodedata
from typing import Tuple


def _strip_marks(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def name_sort_key(name: str) -> Tuple[str, str]:
    """
    Case-insensitive sort key that follows the active locale's collation.

    Accents only break ties ('eevee' < 'Éevee' < 'ekans'), which keeps
    accented names next to their base letter even under the C locale.
    """
    folded = name.casefold()
    return locale.strxfrm(_strip_marks(folded)), locale.strxfrm(folded)


def contains_text(haystack: str, needle: str) -> bool:
    return needle.casefold() in haystack.casefold()


def format_type_label(type_name: str) -> str:
    """'fire' -> 'Fire', as shown in type selectors."""
    return type_name[:1].upper() + type_name[1:]


def display_name(name: str) -> str:
    return "-".join(format_type_label(part) for part in name.split("-"))
