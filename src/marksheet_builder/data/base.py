"""
Achievement store interface.

The grading core never knows where achievement records live. Stores hand
back the four input collections for a learner; fetch_inputs gathers all
four before any computation starts.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List
import logging

from ..core.data_models import CourseRecord, MarksheetSnapshot, ProjectSubmission, TestAttempt

logger = logging.getLogger(__name__)


class AchievementStore(ABC):
    """Source of a learner's courses, attempts, submissions and progress"""

    @abstractmethod
    def list_courses(self, learner_id: str) -> List[CourseRecord]:
        """Ordered course directory visible to the learner"""

    @abstractmethod
    def get_test_attempts(self, learner_id: str) -> Dict[int, TestAttempt]:
        """Latest test attempt keyed by course id"""

    @abstractmethod
    def get_submissions(self, learner_id: str) -> List[ProjectSubmission]:
        """All project submissions for the learner"""

    @abstractmethod
    def get_lesson_progress(self, learner_id: str) -> Dict[int, int]:
        """Completed lesson count keyed by course id"""


class SnapshotWriter(ABC):
    """Destination for official marksheet snapshots"""

    @abstractmethod
    def publish_snapshot(self, snapshot: MarksheetSnapshot) -> None:
        """Persist a snapshot; raise CredentialPersistFailed on failure"""


@dataclass
class AchievementInputs:
    """The four raw collections for one learner"""

    courses: List[CourseRecord] = field(default_factory=list)
    test_attempts: Dict[int, TestAttempt] = field(default_factory=dict)
    submissions: List[ProjectSubmission] = field(default_factory=list)
    lesson_progress: Dict[int, int] = field(default_factory=dict)


def fetch_inputs(store: AchievementStore, learner_id: str) -> AchievementInputs:
    """Load every input collection; any store error aborts the whole fetch"""
    inputs = AchievementInputs(
        courses=store.list_courses(learner_id),
        test_attempts=store.get_test_attempts(learner_id),
        submissions=store.get_submissions(learner_id),
        lesson_progress=store.get_lesson_progress(learner_id),
    )
    logger.info(
        f"Fetched inputs for {learner_id}: {len(inputs.courses)} courses, "
        f"{len(inputs.test_attempts)} attempts, {len(inputs.submissions)} submissions"
    )
    return inputs
