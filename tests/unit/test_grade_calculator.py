"""
Unit Tests for Grade Calculator

Tests for:
- Score to letter grade / grade point mapping at every band boundary
- Unattempted courses
- Score range validation
- Outcome, project and lab status on ledger entries
"""

import pytest

from marksheet_builder.core.calculators.grade_calculator import (
    grade_points_for,
    score_to_grade,
)
from marksheet_builder.core.data_models import LabStatus, LetterGrade, Outcome, ProjectStatus
from marksheet_builder.core.exceptions import InvalidScoreRange


class TestScoreToGrade:
    """Tests for the score -> (letter, points) lookup"""

    @pytest.mark.parametrize(
        "score,letter,points",
        [
            (100, "O", 10),
            (90, "O", 10),
            (89, "A+", 9),
            (80, "A+", 9),
            (79, "A", 8),
            (70, "A", 8),
            (69, "B+", 7),
            (60, "B+", 7),
            (59, "B", 6),
            (50, "B", 6),
            (49, "C", 5),
            (40, "C", 5),
            (39, "F", 0),
            (0, "F", 0),
        ],
    )
    def test_band_boundaries(self, score, letter, points):
        """Boundary scores belong to the higher band"""
        grade, grade_points = score_to_grade(score)
        assert grade == letter
        assert grade_points == points

    def test_absent_score(self):
        """No attempt gives '-' and no grade points"""
        grade, grade_points = score_to_grade(None)
        assert grade == LetterGrade.UNGRADED
        assert grade == "-"
        assert grade_points is None

    @pytest.mark.parametrize("score", [-1, 101, 250])
    def test_out_of_range_rejected(self, score):
        with pytest.raises(InvalidScoreRange) as exc_info:
            score_to_grade(score, course_id=7)
        assert exc_info.value.score == score
        assert exc_info.value.course_id == 7

    def test_out_of_range_is_value_error(self):
        with pytest.raises(ValueError):
            score_to_grade(120)

    @pytest.mark.parametrize("score", [85.5, "90", True])
    def test_non_integer_rejected(self, score):
        with pytest.raises(InvalidScoreRange):
            score_to_grade(score)

    def test_grade_points_lookup(self):
        assert grade_points_for("O") == 10
        assert grade_points_for("A+") == 9
        assert grade_points_for("F") == 0
        assert grade_points_for("-") is None


class TestGradeCourse:
    """Tests for building ledger entries"""

    def test_passed_course(self, make_entry):
        entry = make_entry(raw_score=92, passed=True)
        assert entry.letter_grade == "O"
        assert entry.grade_points == 10
        assert entry.outcome == Outcome.PASS
        assert entry.obtained_marks == 92

    def test_outcome_trusts_pass_flag_over_score(self, make_entry):
        """A 55 can still be a Fail when the course's own pass bar is higher"""
        entry = make_entry(raw_score=55, passed=False)
        assert entry.letter_grade == "B"
        assert entry.outcome == Outcome.FAIL

    def test_unattempted_course_is_pending(self, make_entry):
        entry = make_entry(raw_score=None)
        assert entry.letter_grade == "-"
        assert entry.grade_points is None
        assert entry.outcome == Outcome.PENDING
        assert entry.obtained_marks == 0

    def test_pending_ignores_stray_pass_flag(self, make_entry):
        entry = make_entry(raw_score=None, passed=True)
        assert entry.outcome == Outcome.PENDING

    def test_project_status(self, make_entry):
        assert make_entry(project_required=False).project_status == ProjectStatus.NOT_APPLICABLE
        assert make_entry(project_required=False, project_submitted=True).project_status == "NotApplicable"
        assert make_entry(project_required=True).project_status == ProjectStatus.PENDING
        assert make_entry(project_required=True, project_submitted=True).project_status == "Submitted"

    def test_lab_status(self, make_entry):
        assert make_entry(lessons_completed=10).lab_status == LabStatus.COMPLETED
        assert make_entry(lessons_completed=15).lab_status == LabStatus.COMPLETED
        assert make_entry(lessons_completed=9).lab_status == LabStatus.PENDING
        assert make_entry().lab_status == LabStatus.PENDING

    def test_invalid_score_on_fact(self, make_entry):
        with pytest.raises(InvalidScoreRange):
            make_entry(course_id=4, raw_score=140, passed=True)
