"""
Pytest Configuration and Fixtures

Provides common fixtures for all tests including:
- Course directory and achievement record factories
- Ledger entry factory
- On-disk CSV data directory for the local store
"""

import pytest

from marksheet_builder.core.calculators.grade_calculator import grade_course
from marksheet_builder.core.data_models import (
    CourseAchievementFact,
    CourseRecord,
    ProjectSubmission,
    TestAttempt,
)
from marksheet_builder.data.base import AchievementInputs


@pytest.fixture
def sample_courses():
    """Three courses: free, paid with explicit credits, paid without"""
    return [
        CourseRecord(id=1, title="Intro to Python", is_free=True, project_required=False),
        CourseRecord(id=2, title="Web Development", credit_cost=4, project_required=True),
        CourseRecord(id=3, title="Databases", project_required=True),
    ]


@pytest.fixture
def mixed_inputs(sample_courses):
    """Course 1 passed with 92, course 2 failed with 55, course 3 not attempted"""
    return AchievementInputs(
        courses=sample_courses,
        test_attempts={
            1: TestAttempt(course_id=1, score_percentage=92, passed=True),
            2: TestAttempt(course_id=2, score_percentage=55, passed=False),
        },
        submissions=[ProjectSubmission(course_id=2)],
        lesson_progress={1: 12, 2: 3},
    )


@pytest.fixture
def make_entry():
    """Factory for graded ledger entries"""

    def _make(course_id=1, raw_score=None, passed=False, credit_weight=3, **kwargs):
        fact = CourseAchievementFact(
            serial_number=kwargs.pop("serial_number", course_id),
            course_id=course_id,
            course_code=f"CS{100 + course_id}",
            course_title=kwargs.pop("course_title", f"Course {course_id}"),
            credit_weight=credit_weight,
            raw_score=raw_score,
            passed=passed,
            **kwargs,
        )
        return grade_course(fact)

    return _make


@pytest.fixture
def data_dir(tmp_path):
    """CSV data directory with one learner holding mixed results"""
    (tmp_path / "courses.csv").write_text(
        "id,title,credit_cost,is_free,project_required\n"
        "1,Intro to Python,,Yes,No\n"
        "2,Web Development,4,No,Yes\n"
        "3,Databases,,No,Yes\n"
    )

    learner_dir = tmp_path / "learner-001"
    learner_dir.mkdir()
    (learner_dir / "test_attempts.csv").write_text(
        "course_id,score_percentage,passed,attempted_at\n"
        "1,92,True,2026-02-01T10:00:00\n"
        "1,45,False,2026-01-01T10:00:00\n"
        "2,55,False,2026-02-03T10:00:00\n"
    )
    (learner_dir / "submissions.csv").write_text(
        "course_id,submitted_at\n"
        "2,2026-02-04T10:00:00\n"
    )
    (learner_dir / "lesson_progress.csv").write_text(
        "course_id,lessons_completed\n"
        "1,12\n"
        "2,3\n"
    )

    return tmp_path
