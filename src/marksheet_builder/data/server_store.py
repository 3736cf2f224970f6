"""
SERVER ACHIEVEMENT STORE - Server-of-record achievement data over HTTP

ENDPOINTS:
GET  /api/courses                              course directory
GET  /api/learners/{id}/test-attempts          attempts (list, or map keyed by test id)
GET  /api/learners/{id}/submissions            project submissions
GET  /api/learners/{id}/progress               lesson progress per course
POST /api/marksheets                           official marksheet snapshot

Read failures raise AchievementSourceError (the marksheet is not built).
Snapshot write failures raise CredentialPersistFailed (the marksheet that was
already built stays valid).
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import logging

import httpx
from pydantic import ValidationError

from .. import config
from ..core.data_models import CourseRecord, MarksheetSnapshot, ProjectSubmission, TestAttempt
from ..core.exceptions import AchievementSourceError, CredentialPersistFailed, InvalidLearnerIdentity
from .base import AchievementStore, SnapshotWriter

logger = logging.getLogger(__name__)


class ServerAchievementStore(AchievementStore, SnapshotWriter):
    """Achievement store and snapshot writer backed by the platform API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            base_url: API origin (defaults to MARKSHEET_API_BASE_URL)
            client: Pre-built httpx client, e.g. with a mock transport
            timeout: Request timeout in seconds
        """
        if client is None:
            client = httpx.Client(
                base_url=base_url or config.API_BASE_URL,
                timeout=timeout or config.HTTP_TIMEOUT_SECONDS,
            )
        self.client = client

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.client.close()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_courses(self, learner_id: str) -> List[CourseRecord]:
        payload = self._get_json("/api/courses")
        return self._parse_list(payload, CourseRecord, "courses")

    def get_test_attempts(self, learner_id: str) -> Dict[int, TestAttempt]:
        payload = self._get_json(f"{self._learner_path(learner_id)}/test-attempts")

        # The attempt store may be keyed by test id; re-key by course id
        records = payload.values() if isinstance(payload, dict) else payload
        attempts = self._parse_list(list(records), TestAttempt, "test attempts")

        by_course = {}
        for attempt in attempts:
            current = by_course.get(attempt.course_id)
            if current is None or _is_later(attempt, current):
                by_course[attempt.course_id] = attempt
        return by_course

    def get_submissions(self, learner_id: str) -> List[ProjectSubmission]:
        payload = self._get_json(f"{self._learner_path(learner_id)}/submissions")
        return self._parse_list(payload, ProjectSubmission, "submissions")

    def get_lesson_progress(self, learner_id: str) -> Dict[int, int]:
        payload = self._get_json(f"{self._learner_path(learner_id)}/progress")

        try:
            if isinstance(payload, dict):
                return {int(k): _lesson_count(v) for k, v in payload.items()}
            return {int(item["courseId"]): _lesson_count(item.get("completedLessons", 0)) for item in payload}
        except (KeyError, TypeError, ValueError) as e:
            raise AchievementSourceError(f"Malformed lesson progress payload: {e}") from e

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def publish_snapshot(self, snapshot: MarksheetSnapshot) -> None:
        try:
            response = self.client.post("/api/marksheets", json=snapshot.model_dump(mode="json"))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CredentialPersistFailed(
                snapshot.marksheet_number,
                f"server responded {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise CredentialPersistFailed(snapshot.marksheet_number, str(e) or type(e).__name__) from e

        logger.info(f"Published marksheet snapshot {snapshot.marksheet_number}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _learner_path(self, learner_id: str) -> str:
        if not isinstance(learner_id, str) or not learner_id.strip():
            raise InvalidLearnerIdentity(learner_id)
        return f"/api/learners/{quote(learner_id, safe='')}"

    def _get_json(self, path: str) -> Any:
        try:
            response = self.client.get(path)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch {path}: {e}")
            raise AchievementSourceError(f"Failed to fetch {path}: {e}") from e
        except ValueError as e:
            raise AchievementSourceError(f"Invalid JSON from {path}: {e}") from e

    def _parse_list(self, payload: Any, model, label: str) -> list:
        if not isinstance(payload, list):
            raise AchievementSourceError(f"Expected a list of {label}, got {type(payload).__name__}")
        try:
            return [model.model_validate(item) for item in payload]
        except ValidationError as e:
            raise AchievementSourceError(f"Malformed {label} payload: {e}") from e


def _lesson_count(value) -> int:
    """Progress entries carry either a count or the list of completed lessons"""
    if isinstance(value, list):
        return len(value)
    return int(value)


def _as_utc(moment: datetime) -> datetime:
    """Naive timestamps are taken as UTC so they compare with offset-aware ones"""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _is_later(candidate: TestAttempt, current: TestAttempt) -> bool:
    if candidate.attempted_at is None:
        return current.attempted_at is None
    if current.attempted_at is None:
        return True
    return _as_utc(candidate.attempted_at) >= _as_utc(current.attempted_at)
