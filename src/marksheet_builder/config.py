"""
Configuration constants for the marksheet builder.

Grading bands, classification bands, reward tables and credential formats
live here so the calculators stay free of magic numbers. Deployment-specific
values (public URL, API URL, data directory) can be overridden through
environment variables.
"""

import os
from pathlib import Path

# =============================================================================
# FILE PATHS
# =============================================================================

BASE_DIR = Path(__file__).parent.parent.parent
DATA_DIR = Path(os.environ.get("MARKSHEET_DATA_DIR", BASE_DIR / "data"))


# =============================================================================
# DEPLOYMENT SETTINGS
# =============================================================================

# Origin used when building shareable verification links
PUBLIC_BASE_URL = os.environ.get("MARKSHEET_PUBLIC_BASE_URL", "http://localhost:5000")

# Server-of-record for achievement data and official snapshots
API_BASE_URL = os.environ.get("MARKSHEET_API_BASE_URL", "http://localhost:5000")

HTTP_TIMEOUT_SECONDS = float(os.environ.get("MARKSHEET_HTTP_TIMEOUT", "10"))


# =============================================================================
# GRADING
# =============================================================================

MAX_SCORE = 100
MIN_SCORE = 0

# (lower bound inclusive, letter, grade points) - evaluated top to bottom
GRADE_BANDS = (
    (90, "O", 10),
    (80, "A+", 9),
    (70, "A", 8),
    (60, "B+", 7),
    (50, "B", 6),
    (40, "C", 5),
    (0, "F", 0),
)

# Shown in place of a letter grade when no test has been attempted
UNGRADED_MARK = "-"


# =============================================================================
# CLASSIFICATION (driven by average raw score, not CGPA)
# =============================================================================

CLASSIFICATION_BANDS = (
    (75, "Distinction"),
    (60, "FirstClass"),
    (50, "SecondClass"),
    (40, "Pass"),
)
BELOW_PASS = "BelowPass"


# =============================================================================
# REWARDS & SCHOLARSHIPS
# =============================================================================

BASE_REWARD_COINS = {
    "Distinction": 500,
    "FirstClass": 300,
    "SecondClass": 150,
    "Pass": 50,
    "BelowPass": 0,
}

SCHOLARSHIP_CGPA_THRESHOLD = 8.5
CGPA_SCALE = 10


# =============================================================================
# COURSE DEFAULTS
# =============================================================================

# A course's lab is complete once this many lessons are done
LESSONS_REQUIRED_FOR_COMPLETION = 10

DEFAULT_PROGRAM_NAME = "Full Stack Development"

# Credit weight used when the course directory has no credit cost
FREE_COURSE_CREDITS = 3
PAID_COURSE_CREDITS = 5

COURSE_CODE_PREFIX = "CS"
COURSE_CODE_OFFSET = 100


# =============================================================================
# CREDENTIALS
# =============================================================================

CREDENTIAL_PREFIX = "MS"
CREDENTIAL_HOLDER_LENGTH = 8
VERIFY_PATH = "/verify/marksheet/code/"
