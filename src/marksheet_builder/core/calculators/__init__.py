from .grade_calculator import grade_course, grade_points_for, score_to_grade, validate_score
from .cgpa_calculator import CGPACalculator, classify, summarize
from .awards_calculator import calculate_award, calculate_reward_coins, is_scholarship_eligible

__all__ = [
    "grade_course",
    "grade_points_for",
    "score_to_grade",
    "validate_score",
    "CGPACalculator",
    "classify",
    "summarize",
    "calculate_award",
    "calculate_reward_coins",
    "is_scholarship_eligible",
]
