"""Derive a ruling's category from its title."""

from ruling_search.models.document import Category

# Title markers, checked in order. The first marker found decides the category.
CATEGORY_MARKERS: tuple[tuple[str, Category], ...] = (
    ("刑", Category.CRIMINAL),
    ("民", Category.CIVIL),
)


def classify_title(title: str) -> Category:
    """Return the category whose marker appears in the title, else OTHER."""
    for marker, category in CATEGORY_MARKERS:
        if marker in title:
            return category
    return Category.OTHER


def category_marker(category: str) -> str:
    """Return the title substring the storage-layer category filter requires.

    Known categories map to their marker; any other name is matched literally.
    """
    for marker, known in CATEGORY_MARKERS:
        if category == known.value:
            return marker
    return category
