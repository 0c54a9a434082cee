"""Utility functions package."""

from skill_tracker.utils.slug import create_slug, export_filename

__all__ = ["create_slug", "export_filename"]
