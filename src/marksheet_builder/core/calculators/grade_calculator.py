"""
GRADE CALCULATOR - Raw score to letter grade and grade points
Turns one course's achievement facts into a graded ledger entry

GRADE MAPPING (inclusive lower bounds, checked top down):
>= 90 = O  (10)
>= 80 = A+ (9)
>= 70 = A  (8)
>= 60 = B+ (7)
>= 50 = B  (6)
>= 40 = C  (5)
else  = F  (0)
No attempt = "-" (no grade points, excluded from every average)

EDGE CASES HANDLED:
- Boundary scores belong to the higher band (90 is O, 89 is A+)
- Scores outside 0-100 raise InvalidScoreRange instead of misgrading
- Pass/Fail comes from the attempt's own pass flag, never from the score
"""

from typing import Optional, Tuple
import logging

from ... import config
from ..data_models import (
    CourseAchievementFact,
    CourseLedgerEntry,
    LabStatus,
    LetterGrade,
    Outcome,
    ProjectStatus,
)
from ..exceptions import InvalidScoreRange

logger = logging.getLogger(__name__)


GRADE_POINTS = {letter: points for _, letter, points in config.GRADE_BANDS}


def validate_score(score, course_id=None) -> int:
    """Reject anything that is not an integer score in 0-100"""
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidScoreRange(score, course_id)
    if score < config.MIN_SCORE or score > config.MAX_SCORE:
        raise InvalidScoreRange(score, course_id)
    return score


def score_to_grade(score: Optional[int], course_id=None) -> Tuple[LetterGrade, Optional[int]]:
    """
    Convert a raw score to (letter grade, grade points)

    Args:
        score: Raw score 0-100, or None when no test was attempted
        course_id: Only used to make error messages traceable

    Returns:
        (LetterGrade, points); points is None for an unattempted course
    """
    if score is None:
        return LetterGrade.UNGRADED, None

    validate_score(score, course_id)

    for lower_bound, letter, points in config.GRADE_BANDS:
        if score >= lower_bound:
            return LetterGrade(letter), points

    # GRADE_BANDS ends at 0 so a validated score always matches
    raise InvalidScoreRange(score, course_id)


def grade_points_for(letter: str) -> Optional[int]:
    """Grade points for a letter grade; None for '-' or unknown letters"""
    return GRADE_POINTS.get(letter)


def project_status_for(fact: CourseAchievementFact) -> ProjectStatus:
    if not fact.project_required:
        return ProjectStatus.NOT_APPLICABLE
    return ProjectStatus.SUBMITTED if fact.project_submitted else ProjectStatus.PENDING


def lab_status_for(fact: CourseAchievementFact) -> LabStatus:
    if fact.lessons_completed >= fact.lessons_required_for_completion:
        return LabStatus.COMPLETED
    return LabStatus.PENDING


def outcome_for(fact: CourseAchievementFact) -> Outcome:
    """Pending until attempted, then whatever the attempt's pass flag says"""
    if fact.raw_score is None:
        return Outcome.PENDING
    return Outcome.PASS if fact.passed else Outcome.FAIL


def grade_course(fact: CourseAchievementFact) -> CourseLedgerEntry:
    """Build the graded ledger entry for one course"""
    letter, points = score_to_grade(fact.raw_score, fact.course_id)

    entry = CourseLedgerEntry(
        **fact.model_dump(),
        letter_grade=letter,
        grade_points=points,
        outcome=outcome_for(fact),
        project_status=project_status_for(fact),
        lab_status=lab_status_for(fact),
    )

    logger.debug(
        f"Graded {fact.course_code}: score={fact.raw_score} grade={entry.letter_grade} outcome={entry.outcome}"
    )
    return entry
