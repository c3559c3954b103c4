"""Domain value objects and shared value types."""

from marketplace.domain.value_objects.core import Grant, Slug, slugify

__all__ = [
    "Grant",
    "Slug",
    "slugify",
]
