"""Shared utilities used by every layer. No business logic."""

from marketplace.shared.telemetry import get_logger, setup_logging
from marketplace.shared.utils import generate_cuid, to_iso, utc_now

__all__ = ["generate_cuid", "get_logger", "setup_logging", "to_iso", "utc_now"]
