"""Utility modules."""

from .masking import mask_database_url, mask_email, mask_id_fields, mask_identifier

__all__ = ["mask_database_url", "mask_email", "mask_id_fields", "mask_identifier"]
