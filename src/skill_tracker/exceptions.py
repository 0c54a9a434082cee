"""Domain exceptions raised by the store and services."""


class SkillTrackerError(Exception):
    """Base exception for skill tracker errors."""


class NotFoundError(SkillTrackerError):
    """A referenced team member, skill or rating does not exist."""


class DuplicateError(SkillTrackerError):
    """A unique key (member email, skill name) is already taken."""


class InvalidLevelError(SkillTrackerError):
    """A skill level outside the 0-3 range."""


class SpreadsheetError(SkillTrackerError):
    """An uploaded workbook could not be read."""
