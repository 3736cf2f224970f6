#!/usr/bin/env python3
"""
Simple wrapper to generate a marksheet for a given learner ID
Usage: python3 generate_marksheet.py <learner_id> [data_dir] [--publish]
"""

import sys
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

logging.basicConfig(level=logging.INFO)

if len(sys.argv) < 2:
    print("ERROR: Missing arguments")
    print("Usage: python3 generate_marksheet.py <learner_id> [data_dir] [--publish]")
    sys.exit(1)

args = [a for a in sys.argv[1:] if not a.startswith("--")]
publish = "--publish" in sys.argv

learner_id = args[0]
data_dir = Path(args[1]).expanduser() if len(args) > 1 else None

# Import after adding to path
from marksheet_builder import (
    Classification,
    LocalAchievementStore,
    MarksheetError,
    MarksheetGenerator,
    ServerAchievementStore,
)

store = LocalAchievementStore(data_dir)
generator = MarksheetGenerator(store)

try:
    marksheet = generator.generate_marksheet(learner_id)
except MarksheetError as e:
    print(f"❌ Could not build marksheet: {e}")
    sys.exit(2)

summary = marksheet.summary
print(f"\n📋 MARKSHEET {marksheet.marksheet_number}")
print("=" * 78)
print(f"{'S.No':<5}{'Code':<8}{'Course':<30}{'Cr':>3}{'Marks':>7}{'Grade':>7}  {'Status':<8}{'Project':<14}{'Lab'}")
for entry in marksheet.entries:
    print(
        f"{entry.serial_number:<5}{entry.course_code:<8}{entry.course_title[:28]:<30}"
        f"{entry.credit_weight:>3}{entry.obtained_marks:>7}{entry.letter_grade:>7}  "
        f"{entry.outcome:<8}{entry.project_status:<14}{entry.lab_status}"
    )

print("-" * 78)
print(f"  Courses Passed:  {summary.courses_passed}")
print(f"  Credits Earned:  {summary.total_credits_earned}")
print(f"  Average Score:   {summary.average_score_across_attempted:.2f}")
print(f"  CGPA:            {summary.cgpa_display}")
print(f"  Classification:  {Classification(summary.classification).display_name}")
print(f"  Reward Coins:    {marksheet.award.reward_coins}")
if marksheet.award.scholarship_eligible:
    print("  🏆 Scholarship eligible")
print(f"\n🔗 Verify at: {marksheet.identity.verification_url}")

if publish:
    from marksheet_builder import CredentialPersistFailed

    with ServerAchievementStore() as writer:
        try:
            generator.issue_official(marksheet, writer=writer)
            print("✅ Official marksheet saved")
        except CredentialPersistFailed as e:
            # The marksheet above is still valid
            print(f"⚠️ Could not save official marksheet: {e.reason}")
