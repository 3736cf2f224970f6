"""
MARKSHEET GENERATOR - End-to-end marksheet assembly for one learner

GENERATION PROCESS:
1. Fetch courses, test attempts, submissions and lesson progress from a store
2. Collect one achievement fact per course
3. Grade every course
4. Fold the ledger into a transcript summary
5. Calculate reward coins and scholarship eligibility
6. Derive the marksheet number and verification link
7. Optionally publish an official snapshot

Steps 2-6 are pure (build_marksheet) and recompute from scratch on every
call. Any failure there propagates and no marksheet is produced. A failed
snapshot write raises CredentialPersistFailed, which leaves the marksheet
already returned to the caller intact.
"""

from datetime import datetime
from typing import Optional, Union
import logging

from .core.achievement_collector import collect_achievements
from .core.calculators.awards_calculator import calculate_award
from .core.calculators.cgpa_calculator import CGPACalculator
from .core.calculators.grade_calculator import grade_course
from .core.credentials import generate_credential_identity
from .core.data_models import LearnerIdentity, Marksheet, MarksheetSnapshot
from .core.exceptions import CredentialPersistFailed, InvalidLearnerIdentity
from .data.base import AchievementInputs, AchievementStore, SnapshotWriter, fetch_inputs

logger = logging.getLogger(__name__)


def _as_learner(learner: Union[LearnerIdentity, str]) -> LearnerIdentity:
    if isinstance(learner, LearnerIdentity):
        learner_id = learner.learner_id
    else:
        learner_id = learner
    if not isinstance(learner_id, str) or not learner_id.strip():
        raise InvalidLearnerIdentity(learner_id)
    if isinstance(learner, LearnerIdentity):
        return learner
    return LearnerIdentity(learner_id=learner_id)


def build_marksheet(
    learner: Union[LearnerIdentity, str],
    inputs: AchievementInputs,
    issue_year: int,
    public_base_url: Optional[str] = None,
    program_name: Optional[str] = None,
    calculator: Optional[CGPACalculator] = None,
) -> Marksheet:
    """
    Build a complete marksheet from already-fetched inputs

    Args:
        learner: Learner identity or bare learner id
        inputs: The four input collections
        issue_year: Year used in the marksheet number
        public_base_url: Origin for the verification link
        program_name: Program label for every row
        calculator: CGPA calculator to use (keeps its calculation log)

    Returns:
        Marksheet
    """
    learner = _as_learner(learner)
    calculator = calculator or CGPACalculator()

    facts = collect_achievements(
        inputs.courses,
        inputs.test_attempts,
        inputs.submissions,
        inputs.lesson_progress,
        program_name=program_name,
    )
    entries = [grade_course(fact) for fact in facts]
    summary = calculator.calculate_summary(entries)
    award = calculate_award(summary.classification, summary.cgpa)
    identity = generate_credential_identity(learner.learner_id, issue_year, public_base_url)

    return Marksheet(
        learner=learner,
        issue_year=issue_year,
        entries=entries,
        summary=summary,
        award=award,
        identity=identity,
    )


class MarksheetGenerator:
    """Fetch a learner's records from a store and build their marksheet"""

    def __init__(
        self,
        store: AchievementStore,
        public_base_url: Optional[str] = None,
        program_name: Optional[str] = None,
    ):
        self.store = store
        self.public_base_url = public_base_url
        self.program_name = program_name
        self.cgpa_calculator = CGPACalculator()

    def generate_marksheet(
        self,
        learner: Union[LearnerIdentity, str],
        issue_year: Optional[int] = None,
    ) -> Marksheet:
        """
        Generate the marksheet for a single learner

        Args:
            learner: Learner identity or bare learner id
            issue_year: Defaults to the current year

        Returns:
            Marksheet
        """
        learner = _as_learner(learner)
        issue_year = issue_year or datetime.now().year

        logger.info(f"📄 Generating marksheet for learner {learner.learner_id}")

        inputs = fetch_inputs(self.store, learner.learner_id)
        marksheet = build_marksheet(
            learner,
            inputs,
            issue_year,
            public_base_url=self.public_base_url,
            program_name=self.program_name,
            calculator=self.cgpa_calculator,
        )

        logger.info(
            f"  ✅ {marksheet.marksheet_number}: CGPA {marksheet.summary.cgpa:.2f}, "
            f"{marksheet.summary.classification}, {marksheet.award.reward_coins} coins"
        )
        return marksheet

    def issue_official(
        self,
        marksheet: Marksheet,
        writer: Optional[SnapshotWriter] = None,
        generated_at: Optional[datetime] = None,
    ) -> MarksheetSnapshot:
        """
        Publish the official snapshot of a marksheet

        Args:
            marksheet: Marksheet returned by generate_marksheet
            writer: Snapshot destination (defaults to the store if it can write)
            generated_at: Snapshot timestamp (defaults to now)

        Returns:
            The published snapshot

        Raises:
            CredentialPersistFailed: the write failed; the marksheet stays valid
        """
        if writer is None:
            if not isinstance(self.store, SnapshotWriter):
                raise CredentialPersistFailed(marksheet.marksheet_number, "no snapshot writer configured")
            writer = self.store

        snapshot = marksheet.to_snapshot(generated_at)
        try:
            writer.publish_snapshot(snapshot)
        except CredentialPersistFailed as e:
            logger.warning(f"⚠️ Official marksheet not saved: {e}")
            raise

        return snapshot

    def get_calculation_log(self):
        """Calculation log of the most recent marksheet"""
        return self.cgpa_calculator.get_calculation_log()
