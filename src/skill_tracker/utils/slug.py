"""Slug and download filename utilities."""

from datetime import date

from slugify import slugify


def create_slug(text: str) -> str:
    """
    Create a URL-friendly slug from text.

    Args:
        text: The text to convert to a slug

    Returns:
        A lowercase, hyphenated slug

    Examples:
        >>> create_slug("Skill Matrix")
        'skill-matrix'
        >>> create_slug("Team Members")
        'team-members'
        >>> create_slug("R&D / Ops")
        'r-d-ops'
    """
    return slugify(text, lowercase=True, separator="-")


def export_filename(title: str, day: date | None = None, extension: str = "xlsx") -> str:
    """
    Build a download filename from a title and an optional date.

    Examples:
        >>> export_filename("Skill Matrix", date(2024, 5, 12))
        'skill-matrix-2024-05-12.xlsx'
        >>> export_filename("skill-ratings template")
        'skill-ratings-template.xlsx'
    """
    stem = create_slug(title)
    if day is not None:
        stem = f"{stem}-{day.isoformat()}"
    return f"{stem}.{extension}"
