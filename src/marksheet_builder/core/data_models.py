"""
DATA MODELS - Pydantic schemas for marksheet inputs and derived records
Type-safe data structures for courses, achievements, ledger entries and credentials

INPUT RECORDS (fetched from an achievement store):
- CourseRecord: course directory row
- TestAttempt: latest test attempt for a course
- ProjectSubmission: submitted course project
- LearnerIdentity: learner id plus display-only details

DERIVED RECORDS (recomputed on every request, never persisted here):
- CourseAchievementFact -> CourseLedgerEntry (one per course)
- TranscriptSummary (one per learner per request)
- CredentialAward, CredentialIdentity
- Marksheet (complete bundle) and MarksheetSnapshot (flattened write payload)

VALIDATION RULES:
- Credit weights and lesson counts are non-negative
- Derived summaries are frozen after construction
- Scores are NOT range-checked here; the grade calculator rejects them with
  InvalidScoreRange so callers see a domain error instead of a schema error
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from enum import Enum

from .. import config


class LetterGrade(str, Enum):
    """Letter grades on the 10-point scale"""
    O = "O"
    A_PLUS = "A+"
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C = "C"
    F = "F"
    UNGRADED = "-"  # No attempt yet


class Outcome(str, Enum):
    """Course outcome as reported by the test-attempt store"""
    PASS = "Pass"
    FAIL = "Fail"
    PENDING = "Pending"


class ProjectStatus(str, Enum):
    SUBMITTED = "Submitted"
    PENDING = "Pending"
    NOT_APPLICABLE = "NotApplicable"


class LabStatus(str, Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"


class Classification(str, Enum):
    """Coarse performance tier derived from the average raw score"""
    DISTINCTION = "Distinction"
    FIRST_CLASS = "FirstClass"
    SECOND_CLASS = "SecondClass"
    PASS = "Pass"
    BELOW_PASS = "BelowPass"

    @property
    def display_name(self) -> str:
        """Label used on rendered marksheets"""
        return {
            "Distinction": "Distinction",
            "FirstClass": "First Class",
            "SecondClass": "Second Class",
            "Pass": "Pass",
            "BelowPass": "Below Pass",
        }[self.value]


# =============================================================================
# INPUT RECORDS
# =============================================================================


class CourseRecord(BaseModel):
    """Course directory entry"""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Course identifier")
    title: str = Field(..., description="Course title")
    credit_cost: Optional[int] = Field(None, ge=0, alias="creditCost", description="Credit cost, if set")
    is_free: bool = Field(False, alias="isFree", description="Whether the course is free")
    project_required: bool = Field(False, alias="projectRequired", description="Whether a project must be submitted")


class TestAttempt(BaseModel):
    """Latest test attempt for one course"""

    __test__ = False  # not a pytest test class

    model_config = ConfigDict(populate_by_name=True)

    course_id: int = Field(..., alias="courseId", description="Course the test belongs to")
    score_percentage: int = Field(
        ..., strict=True, alias="scorePercentage", description="Score as a whole percentage (no bools or floats)"
    )
    passed: bool = Field(..., description="Pass flag from the course's own pass bar")
    attempted_at: Optional[datetime] = Field(None, alias="attemptedAt", description="When the attempt was made")


class ProjectSubmission(BaseModel):
    """Submitted course project"""

    model_config = ConfigDict(populate_by_name=True)

    course_id: int = Field(..., alias="courseId", description="Course the project belongs to")
    submitted_at: Optional[datetime] = Field(None, alias="submittedAt", description="Submission time")


class LearnerIdentity(BaseModel):
    """Learner identity; only learner_id feeds credential derivation"""

    learner_id: str = Field(..., description="Stable learner identifier")
    email: Optional[str] = Field(None, description="Learner email (display only)")
    display_name: Optional[str] = Field(None, description="Learner name (display only)")

    @property
    def label(self) -> str:
        """Best available display label"""
        return self.display_name or self.email or self.learner_id


# =============================================================================
# DERIVED RECORDS
# =============================================================================


class CourseAchievementFact(BaseModel):
    """Normalized per-course achievement facts"""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    serial_number: int = Field(..., ge=1, description="1-based position in the course list")
    course_id: int = Field(..., description="Course identifier")
    course_code: str = Field(..., description="Printed course code")
    course_title: str = Field(..., description="Course title")
    program_name: str = Field(config.DEFAULT_PROGRAM_NAME, description="Program the course belongs to")

    credit_weight: int = Field(..., ge=0, description="Credits earned on a pass")
    max_score: int = Field(config.MAX_SCORE, description="Maximum marks")
    raw_score: Optional[int] = Field(None, description="Test score, absent if not attempted")
    passed: bool = Field(False, description="Externally supplied pass flag")

    project_required: bool = Field(False, description="Whether a project is required")
    project_submitted: bool = Field(False, description="Whether a project was submitted")

    lessons_completed: int = Field(0, ge=0, description="Completed lesson count")
    lessons_required_for_completion: int = Field(
        config.LESSONS_REQUIRED_FOR_COMPLETION, description="Lessons needed to complete the lab"
    )

    @property
    def is_attempted(self) -> bool:
        return self.raw_score is not None


class CourseLedgerEntry(CourseAchievementFact):
    """One course's fully graded marksheet row"""

    letter_grade: LetterGrade = Field(..., description="Letter grade or '-' if not attempted")
    grade_points: Optional[int] = Field(None, ge=0, le=10, description="Grade points, None if not attempted")
    outcome: Outcome = Field(..., description="Pass, Fail or Pending")
    project_status: ProjectStatus = Field(..., description="Project submission status")
    lab_status: LabStatus = Field(..., description="Lab completion status")

    @property
    def obtained_marks(self) -> int:
        """Marks column value (0 when not attempted)"""
        return self.raw_score or 0


class TranscriptSummary(BaseModel):
    """Transcript-level totals folded from ledger entries"""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    total_credits_earned: int = Field(..., ge=0, description="Credits over passed courses")
    courses_passed: int = Field(..., ge=0, description="Number of passed courses")
    average_score_across_attempted: float = Field(..., ge=0.0, le=100.0, description="Mean raw score over attempted courses")
    cgpa: float = Field(..., ge=0.0, le=10.0, description="Mean grade points over passed courses")
    classification: Classification = Field(..., description="Performance tier from the average raw score")

    @property
    def cgpa_display(self) -> str:
        return f"{self.cgpa:.2f}"


class CredentialAward(BaseModel):
    """Reward coins and scholarship eligibility"""

    model_config = ConfigDict(frozen=True)

    reward_coins: int = Field(..., ge=0, description="One-time reward coin payout")
    scholarship_eligible: bool = Field(..., description="Qualifies for academic scholarships")


class CredentialIdentity(BaseModel):
    """Public identifier and verification link for a marksheet"""

    model_config = ConfigDict(frozen=True)

    credential_id: str = Field(..., description="Marksheet number, e.g. MS-2026-ABCD1234")
    verification_code: str = Field(..., description="Compact code for the verification URL")
    verification_url: str = Field(..., description="Shareable verification link")


class CredentialLookup(BaseModel):
    """Result of parsing a presented marksheet number"""

    model_config = ConfigDict(frozen=True)

    credential_id: str
    is_valid: bool
    issue_year: Optional[int] = None
    holder_fragment: Optional[str] = None

    @property
    def holder_hint(self) -> str:
        """Partial holder label shown on the public verify page"""
        if not self.holder_fragment:
            return "Unknown"
        return f"Student {self.holder_fragment[:4]}"


class MarksheetSnapshot(BaseModel):
    """Flattened payload for persisting an official marksheet"""

    model_config = ConfigDict(frozen=True)

    user_id: str
    marksheet_number: str
    courses_completed: int
    total_credits: int
    cgpa: float
    classification: str
    generated_at: datetime


class Marksheet(BaseModel):
    """Complete marksheet for one learner"""

    model_config = ConfigDict(frozen=True)

    learner: LearnerIdentity
    issue_year: int
    entries: List[CourseLedgerEntry] = Field(default_factory=list)
    summary: TranscriptSummary
    award: CredentialAward
    identity: CredentialIdentity

    @property
    def marksheet_number(self) -> str:
        return self.identity.credential_id

    def to_snapshot(self, generated_at: Optional[datetime] = None) -> MarksheetSnapshot:
        """Shape the official snapshot payload (the write itself is external)"""
        return MarksheetSnapshot(
            user_id=self.learner.learner_id,
            marksheet_number=self.identity.credential_id,
            courses_completed=self.summary.courses_passed,
            total_credits=self.summary.total_credits_earned,
            cgpa=self.summary.cgpa,
            classification=self.summary.classification,
            generated_at=generated_at or datetime.now(),
        )


__all__ = [
    "LetterGrade",
    "Outcome",
    "ProjectStatus",
    "LabStatus",
    "Classification",
    "CourseRecord",
    "TestAttempt",
    "ProjectSubmission",
    "LearnerIdentity",
    "CourseAchievementFact",
    "CourseLedgerEntry",
    "TranscriptSummary",
    "CredentialAward",
    "CredentialIdentity",
    "CredentialLookup",
    "MarksheetSnapshot",
    "Marksheet",
]
