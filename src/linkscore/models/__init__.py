"""Record types for linkscore."""

from linkscore.models.records import DemographicRecord, Record, is_blank

__all__ = ["Record", "DemographicRecord", "is_blank"]
