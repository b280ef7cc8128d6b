"""Configuration management module."""

from .settings import LeadflowSettings, get_settings, reset_settings

__all__ = ["LeadflowSettings", "get_settings", "reset_settings"]
