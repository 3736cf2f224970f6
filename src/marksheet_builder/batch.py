"""
Batch marksheet generation for every learner in a store.

One learner's failure never stops the batch; it is recorded on its
GenerationResult and reported in the summary.
"""

from dataclasses import dataclass, asdict
from typing import Iterable, List, Optional
import logging

import pandas as pd
from tqdm import tqdm

from .core.exceptions import MarksheetError
from .marksheet_generator import MarksheetGenerator

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    learner_id: str
    success: bool
    marksheet_number: Optional[str] = None
    courses_passed: Optional[int] = None
    credits_earned: Optional[int] = None
    cgpa: Optional[float] = None
    classification: Optional[str] = None
    reward_coins: Optional[int] = None
    scholarship_eligible: Optional[bool] = None
    verification_url: Optional[str] = None
    error: Optional[str] = None


def generate_all_marksheets(
    generator: MarksheetGenerator,
    learner_ids: Iterable[str],
    issue_year: Optional[int] = None,
    progress: bool = True,
) -> List[GenerationResult]:
    """Generate marksheets for all learners, collecting per-learner results"""
    learner_ids = list(learner_ids)
    iterator = tqdm(learner_ids, desc="Generating", unit="marksheet") if progress else learner_ids

    results = []
    for learner_id in iterator:
        try:
            marksheet = generator.generate_marksheet(learner_id, issue_year=issue_year)
        except MarksheetError as e:
            results.append(GenerationResult(learner_id=learner_id, success=False, error=str(e)))
            if progress:
                tqdm.write(f"  ❌ Failed {learner_id}: {str(e)[:60]}")
            else:
                logger.warning(f"Failed {learner_id}: {e}")
            continue

        summary = marksheet.summary
        results.append(
            GenerationResult(
                learner_id=learner_id,
                success=True,
                marksheet_number=marksheet.marksheet_number,
                courses_passed=summary.courses_passed,
                credits_earned=summary.total_credits_earned,
                cgpa=summary.cgpa,
                classification=summary.classification,
                reward_coins=marksheet.award.reward_coins,
                scholarship_eligible=marksheet.award.scholarship_eligible,
                verification_url=marksheet.identity.verification_url,
            )
        )

    return results


def results_to_frame(results: List[GenerationResult]) -> pd.DataFrame:
    """Tabulate batch results, one row per learner"""
    columns = list(GenerationResult.__dataclass_fields__)
    return pd.DataFrame([asdict(r) for r in results], columns=columns)
