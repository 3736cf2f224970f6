#!/usr/bin/env python3
"""
BATCH MARKSHEET GENERATOR
Builds marksheets for every learner directory in the local data store and
writes a CSV summary.

Usage: python3 scripts/batch_generate.py [data_dir] [output_csv]
"""

import sys
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from marksheet_builder import LocalAchievementStore, MarksheetGenerator
from marksheet_builder.batch import generate_all_marksheets, results_to_frame


def print_summary(results, output_csv: Path):
    """Print generation summary."""
    success = [r for r in results if r.success]
    failed = [r for r in results if not r.success]

    print("\n" + "=" * 70)
    print("BATCH GENERATION SUMMARY")
    print("=" * 70)

    print(f"\n✅ Successful: {len(success)}")
    print(f"❌ Failed: {len(failed)}")

    print("\nBy Classification:")
    for label in ["Distinction", "FirstClass", "SecondClass", "Pass", "BelowPass"]:
        count = len([r for r in success if r.classification == label])
        print(f"  {label}: {count}")

    eligible = len([r for r in success if r.scholarship_eligible])
    print(f"\n🏆 Scholarship eligible: {eligible}")

    if failed:
        print("\n❌ FAILED MARKSHEETS:")
        print("-" * 50)
        for r in failed:
            print(f"  [{r.learner_id}] {r.error}")

    print(f"\n📁 Output: {output_csv}")
    print("=" * 70)


def main():
    data_dir = Path(sys.argv[1]).expanduser() if len(sys.argv) > 1 else None
    output_csv = Path(sys.argv[2]).expanduser() if len(sys.argv) > 2 else Path("marksheet_summary.csv")

    # Per-learner info logs would drown the progress bar
    logging.basicConfig(level=logging.WARNING)

    print("=" * 70)
    print("BATCH MARKSHEET GENERATOR")
    print("=" * 70)

    store = LocalAchievementStore(data_dir)
    learner_ids = store.learner_ids()
    if not learner_ids:
        print(f"❌ No learner directories found in {store.data_dir}")
        return 1

    print(f"\n📊 Processing {len(learner_ids)} learners")
    generator = MarksheetGenerator(store)
    results = generate_all_marksheets(generator, learner_ids, progress=True)

    results_to_frame(results).to_csv(output_csv, index=False)
    print_summary(results, output_csv)

    failed_count = len([r for r in results if not r.success])
    if failed_count > 0:
        print(f"\n⚠️  {failed_count} marksheets failed - review errors above")
        return 1

    print("\n✅ All marksheets generated successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
