"""Small shared helpers."""

from rocket_locator.utils.angles import wrap_deg_360
from rocket_locator.utils.logging import get_logger

__all__ = [
    "get_logger",
    "wrap_deg_360",
]
