"""
LOCAL ACHIEVEMENT STORE - Offline CSV exports loaded with pandas

DIRECTORY LAYOUT:
<data_dir>/
    courses.csv                      shared course directory
    <learner_id>/test_attempts.csv   one row per attempt (latest kept per course)
    <learner_id>/submissions.csv     one row per submitted project
    <learner_id>/lesson_progress.csv completed lesson count per course

REQUIRED COLUMNS:
- courses.csv:          id, title (credit_cost, is_free, project_required optional)
- test_attempts.csv:    course_id, score_percentage, passed (attempted_at optional)
- submissions.csv:      course_id (submitted_at optional)
- lesson_progress.csv:  course_id, lessons_completed

A learner with no directory or no per-learner file simply has no records
yet. A missing courses.csv, missing required columns, an unreadable file or
a malformed row raises AchievementSourceError. A fractional score raises
InvalidScoreRange instead of being truncated.
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional
import logging

import pandas as pd
from pydantic import ValidationError

from .. import config
from ..core.data_models import CourseRecord, ProjectSubmission, TestAttempt
from ..core.exceptions import AchievementSourceError, InvalidLearnerIdentity, InvalidScoreRange, MarksheetError
from .base import AchievementStore

logger = logging.getLogger(__name__)

COURSES_FILE = "courses.csv"
TEST_ATTEMPTS_FILE = "test_attempts.csv"
SUBMISSIONS_FILE = "submissions.csv"
LESSON_PROGRESS_FILE = "lesson_progress.csv"


def parse_flag(value) -> bool:
    """Parse Yes/No, True/False, 1/0 style flags; blanks are False"""
    if _is_blank(value):
        return False
    if isinstance(value, str):
        return value.strip().upper() in ("YES", "Y", "TRUE", "1")
    return bool(value)


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return bool(pd.isna(value))


def required_int(value, column: str) -> int:
    """Whole number from a CSV cell; blanks and fractions are malformed"""
    if _is_blank(value):
        raise ValueError(f"{column} is blank")
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"{column} is not a whole number: {value!r}")
    return int(number)


def optional_int(value, column: str = "value") -> Optional[int]:
    if _is_blank(value):
        return None
    return required_int(value, column)


def score_from_cell(value, course_id: int) -> int:
    """Raw score from a CSV cell; a fractional score is rejected, never truncated"""
    if _is_blank(value):
        raise ValueError("score_percentage is blank")
    number = float(value)
    if not number.is_integer():
        raise InvalidScoreRange(number, course_id)
    return int(number)


def optional_timestamp(value):
    if _is_blank(value):
        return None
    return pd.Timestamp(value).to_pydatetime()


class LocalAchievementStore(AchievementStore):
    """Achievement store backed by CSV exports on disk"""

    def __init__(self, data_dir: Optional[Path] = None):
        if data_dir is None:
            self.data_dir = Path(config.DATA_DIR)
        else:
            self.data_dir = Path(data_dir)

    def learner_ids(self) -> List[str]:
        """Learners that have a record directory"""
        if not self.data_dir.is_dir():
            return []
        return sorted(p.name for p in self.data_dir.iterdir() if p.is_dir())

    def list_courses(self, learner_id: str) -> List[CourseRecord]:
        file_path = self.data_dir / COURSES_FILE
        if not file_path.exists():
            raise AchievementSourceError(f"Course directory not found: {file_path}")

        df = self._read_csv(file_path, required_columns=["id", "title"])
        courses = self._convert_rows(
            df,
            file_path,
            lambda row: CourseRecord(
                id=required_int(row["id"], "id"),
                title=str(row["title"]),
                credit_cost=optional_int(row.get("credit_cost"), "credit_cost"),
                is_free=parse_flag(row.get("is_free")),
                project_required=parse_flag(row.get("project_required")),
            ),
        )

        logger.info(f"  ✅ Loaded {len(courses)} courses from {file_path.name}")
        return courses

    def get_test_attempts(self, learner_id: str) -> Dict[int, TestAttempt]:
        df = self._read_learner_csv(
            learner_id, TEST_ATTEMPTS_FILE, ["course_id", "score_percentage", "passed"]
        )
        if df.empty:
            return {}

        # Latest attempt per course wins
        if "attempted_at" in df.columns:
            df = df.assign(_attempted=pd.to_datetime(df["attempted_at"], errors="coerce", utc=True))
            df = df.sort_values("_attempted", kind="stable", na_position="first")
        df = df.drop_duplicates(subset="course_id", keep="last")

        def to_attempt(row):
            course_id = required_int(row["course_id"], "course_id")
            return TestAttempt(
                course_id=course_id,
                score_percentage=score_from_cell(row["score_percentage"], course_id),
                passed=parse_flag(row["passed"]),
                attempted_at=optional_timestamp(row.get("attempted_at")),
            )

        attempts = self._convert_rows(df, self._learner_dir(learner_id) / TEST_ATTEMPTS_FILE, to_attempt)
        return {attempt.course_id: attempt for attempt in attempts}

    def get_submissions(self, learner_id: str) -> List[ProjectSubmission]:
        df = self._read_learner_csv(learner_id, SUBMISSIONS_FILE, ["course_id"])
        return self._convert_rows(
            df,
            self._learner_dir(learner_id) / SUBMISSIONS_FILE,
            lambda row: ProjectSubmission(
                course_id=required_int(row["course_id"], "course_id"),
                submitted_at=optional_timestamp(row.get("submitted_at")),
            ),
        )

    def get_lesson_progress(self, learner_id: str) -> Dict[int, int]:
        df = self._read_learner_csv(
            learner_id, LESSON_PROGRESS_FILE, ["course_id", "lessons_completed"]
        )
        pairs = self._convert_rows(
            df,
            self._learner_dir(learner_id) / LESSON_PROGRESS_FILE,
            lambda row: (
                required_int(row["course_id"], "course_id"),
                optional_int(row["lessons_completed"], "lessons_completed") or 0,
            ),
        )
        return dict(pairs)

    def _learner_dir(self, learner_id: str) -> Path:
        if not isinstance(learner_id, str) or not learner_id.strip():
            raise InvalidLearnerIdentity(learner_id)
        if "/" in learner_id or "\\" in learner_id or learner_id in (".", ".."):
            raise InvalidLearnerIdentity(learner_id)
        return self.data_dir / learner_id

    def _read_learner_csv(self, learner_id: str, filename: str, required_columns: List[str]) -> pd.DataFrame:
        file_path = self._learner_dir(learner_id) / filename
        if not file_path.exists():
            # Nothing recorded yet
            return pd.DataFrame(columns=required_columns)
        return self._read_csv(file_path, required_columns)

    def _convert_rows(self, df: pd.DataFrame, file_path: Path, convert: Callable) -> list:
        """Apply convert to every row, mapping bad cells to AchievementSourceError"""
        records = []
        for index, row in df.iterrows():
            try:
                records.append(convert(row))
            except MarksheetError:
                raise
            except (ValueError, TypeError, ValidationError) as e:
                logger.error(f"  ❌ Malformed row {index} in {file_path}: {e}")
                raise AchievementSourceError(f"Malformed row {index} in {file_path.name}: {e}") from e
        return records

    def _read_csv(self, file_path: Path, required_columns: List[str]) -> pd.DataFrame:
        try:
            df = pd.read_csv(file_path, encoding="utf-8-sig")
        except pd.errors.EmptyDataError:
            return pd.DataFrame(columns=required_columns)
        except (OSError, pd.errors.ParserError, UnicodeDecodeError) as e:
            logger.error(f"  ❌ Failed to read {file_path}: {e}")
            raise AchievementSourceError(f"Failed to read {file_path}: {e}") from e

        missing = [col for col in required_columns if col not in df.columns]
        if missing:
            raise AchievementSourceError(f"{file_path.name} missing required columns: {missing}")

        return df
