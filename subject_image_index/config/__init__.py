"""Configuration management for the subject image index."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
