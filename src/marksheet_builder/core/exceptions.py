"""
Marksheet error taxonomy.

Missing data (no attempt yet, no submission yet) is never an error. These
exceptions cover caller contract violations, unreadable achievement sources,
and failed snapshot writes.
"""

from typing import Optional


class MarksheetError(Exception):
    """Base class for all marksheet builder errors"""


class InvalidScoreRange(MarksheetError, ValueError):
    """Raw score outside the 0-100 range"""

    def __init__(self, score, course_id=None):
        self.score = score
        self.course_id = course_id
        where = f" for course {course_id}" if course_id is not None else ""
        super().__init__(f"Score {score!r}{where} is outside the 0-100 range")


class InvalidLearnerIdentity(MarksheetError, ValueError):
    """Learner identifier is missing or blank"""

    def __init__(self, learner_id=None):
        self.learner_id = learner_id
        super().__init__(f"Learner identifier must be a non-empty string, got: {learner_id!r}")


class DuplicateCourseError(MarksheetError, ValueError):
    """Course directory lists the same course more than once"""

    def __init__(self, course_id):
        self.course_id = course_id
        super().__init__(f"Course {course_id} appears more than once in the course list")


class AchievementSourceError(MarksheetError):
    """An achievement store could not load its records"""


class CredentialPersistFailed(MarksheetError):
    """
    Writing the official marksheet snapshot failed.

    Recoverable: the computed marksheet is still valid and displayable.
    """

    def __init__(self, marksheet_number: str, reason: str, status_code: Optional[int] = None):
        self.marksheet_number = marksheet_number
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Could not persist marksheet {marksheet_number}: {reason}")


__all__ = [
    "MarksheetError",
    "InvalidScoreRange",
    "InvalidLearnerIdentity",
    "DuplicateCourseError",
    "AchievementSourceError",
    "CredentialPersistFailed",
]
