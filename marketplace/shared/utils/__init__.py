"""Shared utilities: datetime and id generators."""

from marketplace.shared.utils.datetime import to_iso, utc_now
from marketplace.shared.utils.generators import generate_cuid

__all__ = ["generate_cuid", "to_iso", "utc_now"]
