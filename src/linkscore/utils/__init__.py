"""Common utility functions for linkscore."""

from linkscore.utils.timestamps import get_iso_timestamp

__all__ = ["get_iso_timestamp"]
