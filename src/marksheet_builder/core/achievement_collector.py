"""
ACHIEVEMENT COLLECTOR - Normalize a learner's scattered records per course
Joins the course directory with test attempts, project submissions and
lesson progress into one CourseAchievementFact per course

RULES:
- One fact per course, in course-list order; nothing dropped, nothing doubled
- No test attempt means raw_score is None (a valid state, not an error)
- Credit weight is the course's credit cost, else 3 for free and 5 for paid
- A course listed twice is a caller error (DuplicateCourseError)
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence
import logging

from .. import config
from .data_models import CourseAchievementFact, CourseRecord, ProjectSubmission, TestAttempt
from .exceptions import DuplicateCourseError

logger = logging.getLogger(__name__)


def course_code_for(course_id: int) -> str:
    """Printed course code, e.g. course 7 -> CS107"""
    return f"{config.COURSE_CODE_PREFIX}{config.COURSE_CODE_OFFSET + course_id}"


def credit_weight_for(course: CourseRecord) -> int:
    if course.credit_cost:
        return course.credit_cost
    return config.FREE_COURSE_CREDITS if course.is_free else config.PAID_COURSE_CREDITS


def collect_achievements(
    courses: Sequence[CourseRecord],
    test_attempts: Mapping[int, TestAttempt],
    submissions: Iterable[ProjectSubmission],
    lesson_progress: Mapping[int, int],
    program_name: Optional[str] = None,
) -> List[CourseAchievementFact]:
    """
    Build one achievement fact per course

    Args:
        courses: Ordered course directory
        test_attempts: Latest attempt per course id
        submissions: Project submissions (any order, any course)
        lesson_progress: Completed lesson count per course id
        program_name: Program label printed on every row

    Returns:
        List of CourseAchievementFact in course-list order
    """
    attempts_by_course: Dict[int, TestAttempt] = {int(k): v for k, v in test_attempts.items()}
    progress_by_course: Dict[int, int] = {int(k): v for k, v in lesson_progress.items()}
    submitted_courses = {s.course_id for s in submissions}

    facts = []
    seen = set()

    for index, course in enumerate(courses, start=1):
        if course.id in seen:
            raise DuplicateCourseError(course.id)
        seen.add(course.id)

        attempt = attempts_by_course.get(course.id)

        facts.append(
            CourseAchievementFact(
                serial_number=index,
                course_id=course.id,
                course_code=course_code_for(course.id),
                course_title=course.title,
                program_name=program_name or config.DEFAULT_PROGRAM_NAME,
                credit_weight=credit_weight_for(course),
                raw_score=attempt.score_percentage if attempt is not None else None,
                passed=attempt.passed if attempt is not None else False,
                project_required=course.project_required,
                project_submitted=course.id in submitted_courses,
                lessons_completed=progress_by_course.get(course.id, 0),
            )
        )

    orphans = set(attempts_by_course) - seen
    if orphans:
        logger.info(f"Ignoring test attempts for courses not in the directory: {sorted(orphans)}")

    return facts
