from typing import Dict, List


# Word lists by category (Spanish, uppercase, no accents)
WORDS_BY_CATEGORY: Dict[str, List[str]] = {
    "animals": ["GATO", "PERRO", "LEON", "OSO", "PATO", "RANA", "PEZ"],
    "colors": ["ROJO", "AZUL", "VERDE", "ROSA", "NEGRO", "BLANCO"],
    "fruits": ["MANZANA", "PERA", "UVA", "KIWI", "MANGO", "FRESA"],
    "school": ["LIBRO", "LAPIZ", "MESA", "SILLA", "TIZA", "BORRADOR"],
}

WORDS_PER_GAME = 6


def get_words(category: str, limit: int = WORDS_PER_GAME) -> List[str]:
    """
    Get the target words for a category.

    Raises:
        ValueError: If the category is unknown
    """
    if category not in WORDS_BY_CATEGORY:
        raise ValueError(
            f"Unknown category '{category}'. "
            f"Choose one of: {', '.join(sorted(WORDS_BY_CATEGORY))}"
        )
    return WORDS_BY_CATEGORY[category][:limit]
