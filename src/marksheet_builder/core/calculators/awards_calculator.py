"""
Awards Calculator
Calculates the one-time reward coin payout and scholarship eligibility
"""

import logging
from decimal import Decimal, ROUND_FLOOR
from typing import Union

from ... import config
from ..data_models import Classification, CredentialAward

logger = logging.getLogger(__name__)


def calculate_reward_coins(classification: Union[Classification, str], cgpa: float) -> int:
    """
    Calculate reward coins for a marksheet
    Base coins per classification, scaled by CGPA out of 10 and floored:
    - Distinction: 500
    - First Class: 300
    - Second Class: 150
    - Pass: 50
    - Below Pass: 0
    """
    base = config.BASE_REWARD_COINS[Classification(classification).value]
    if base == 0 or cgpa <= 0:
        return 0

    # Decimal keeps 300 * 0.87 at exactly 261 instead of 260.999...
    scaled = Decimal(base) * Decimal(str(cgpa)) / Decimal(config.CGPA_SCALE)
    return int(scaled.to_integral_value(rounding=ROUND_FLOOR))


def is_scholarship_eligible(classification: Union[Classification, str], cgpa: float) -> bool:
    """
    Scholarship eligibility has two independent paths:
    - Distinction classification, or
    - CGPA of 8.5 or above
    """
    if Classification(classification) == Classification.DISTINCTION:
        return True
    return cgpa >= config.SCHOLARSHIP_CGPA_THRESHOLD


def calculate_award(classification: Union[Classification, str], cgpa: float) -> CredentialAward:
    """Calculate coins and scholarship eligibility together"""
    award = CredentialAward(
        reward_coins=calculate_reward_coins(classification, cgpa),
        scholarship_eligible=is_scholarship_eligible(classification, cgpa),
    )
    logger.debug(
        f"Award for {Classification(classification).value} / CGPA {cgpa:.2f}: "
        f"{award.reward_coins} coins, scholarship={award.scholarship_eligible}"
    )
    return award
