"""
CGPA CALCULATOR - Fold graded ledger entries into a transcript summary
Credits, pass counts, average score, CGPA and classification

CALCULATION TYPES:
- Credits earned: sum of credit weights over Pass entries only
- Courses passed: count of Pass entries
- Average score: mean raw score over attempted entries (Pass and Fail)
- CGPA: mean grade points over Pass entries, 2 decimals, half away from zero
- Classification: from the AVERAGE SCORE, not the CGPA

CLASSIFICATION:
>= 75 = Distinction
>= 60 = First Class
>= 50 = Second Class
>= 40 = Pass
else  = Below Pass

The CGPA and the classification are allowed to disagree. A learner who
passed one course with 92 and failed another with 55 has a perfect CGPA
(only the pass counts) but a First Class average. Both figures are reported.

EDGE CASES HANDLED:
- No attempted entries: average score is 0, never NaN
- No Pass entries: CGPA is 0.00
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Sequence
import logging

from ... import config
from ..data_models import Classification, CourseLedgerEntry, Outcome, TranscriptSummary

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def round_half_away(value: Decimal) -> float:
    """Round to 2 decimals, halves away from zero (8.125 -> 8.13)"""
    return float(value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def classify(average_score: float) -> Classification:
    """Map an average raw score to its performance tier"""
    for lower_bound, label in config.CLASSIFICATION_BANDS:
        if average_score >= lower_bound:
            return Classification(label)
    return Classification(config.BELOW_PASS)


class CGPACalculator:
    """Fold ledger entries into a TranscriptSummary"""

    def __init__(self):
        self.calculation_log: List[str] = []

    def calculate_summary(self, entries: Sequence[CourseLedgerEntry]) -> TranscriptSummary:
        """
        Calculate the transcript summary for one learner

        Args:
            entries: Graded ledger entries, one per course

        Returns:
            TranscriptSummary; the same entries always give the same summary
        """
        self.calculation_log = []
        self.calculation_log.append(f"Summarizing {len(entries)} ledger entries")

        passed = [e for e in entries if e.outcome == Outcome.PASS]
        attempted = [e for e in entries if e.raw_score is not None]

        total_credits = self._calculate_credits_earned(passed)
        average_score = self._calculate_average_score(attempted)
        cgpa = self._calculate_cgpa(passed)
        classification = classify(average_score)

        summary = TranscriptSummary(
            total_credits_earned=total_credits,
            courses_passed=len(passed),
            average_score_across_attempted=average_score,
            cgpa=cgpa,
            classification=classification,
        )

        self.calculation_log.append(f"   Courses passed: {len(passed)} of {len(entries)}")
        self.calculation_log.append(f"   Credits earned: {total_credits}")
        self.calculation_log.append(f"   Average score: {average_score:.2f} over {len(attempted)} attempted")
        self.calculation_log.append(f"   CGPA: {cgpa:.2f}")
        self.calculation_log.append(f"   Classification: {classification.value}")

        return summary

    def _calculate_credits_earned(self, passed: Sequence[CourseLedgerEntry]) -> int:
        return sum(e.credit_weight for e in passed)

    def _calculate_average_score(self, attempted: Sequence[CourseLedgerEntry]) -> float:
        if not attempted:
            return 0.0
        return sum(e.raw_score for e in attempted) / len(attempted)

    def _calculate_cgpa(self, passed: Sequence[CourseLedgerEntry]) -> float:
        if not passed:
            return 0.0

        # A Pass entry always carries grade points; guard against a hand-built one
        points = [e.grade_points for e in passed if e.grade_points is not None]
        if not points:
            return 0.0

        return round_half_away(Decimal(sum(points)) / Decimal(len(points)))

    def get_calculation_log(self) -> List[str]:
        """Get detailed calculation log for debugging"""
        return self.calculation_log


def summarize(entries: Sequence[CourseLedgerEntry]) -> TranscriptSummary:
    """Convenience wrapper for a one-off summary"""
    return CGPACalculator().calculate_summary(entries)
