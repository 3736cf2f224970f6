"""
End-to-end marksheet scenarios

Runs the full pure pipeline (collect -> grade -> summarize -> award ->
identity) on in-memory inputs, plus batch generation over a local store.
"""

from datetime import datetime

import pytest

from marksheet_builder.batch import generate_all_marksheets, results_to_frame
from marksheet_builder.core.data_models import CourseRecord, LearnerIdentity, TestAttempt
from marksheet_builder.core.exceptions import CredentialPersistFailed, InvalidLearnerIdentity, InvalidScoreRange
from marksheet_builder.data.base import AchievementInputs, AchievementStore
from marksheet_builder.data.local_store import LocalAchievementStore
from marksheet_builder.marksheet_generator import MarksheetGenerator, build_marksheet


class InMemoryStore(AchievementStore):
    """Store holding one fixed set of inputs"""

    def __init__(self, inputs):
        self.inputs = inputs
        self.calls = []

    def list_courses(self, learner_id):
        self.calls.append("courses")
        return list(self.inputs.courses)

    def get_test_attempts(self, learner_id):
        self.calls.append("attempts")
        return dict(self.inputs.test_attempts)

    def get_submissions(self, learner_id):
        self.calls.append("submissions")
        return list(self.inputs.submissions)

    def get_lesson_progress(self, learner_id):
        self.calls.append("progress")
        return dict(self.inputs.lesson_progress)


class TestScenarios:

    def test_no_attempts_yet(self):
        inputs = AchievementInputs(
            courses=[
                CourseRecord(id=1, title="Intro to Python", is_free=True),
                CourseRecord(id=2, title="Web Development"),
            ]
        )
        marksheet = build_marksheet("learner-xyz", inputs, 2026)

        assert marksheet.summary.courses_passed == 0
        assert marksheet.summary.cgpa == 0.0
        assert marksheet.summary.cgpa_display == "0.00"
        assert marksheet.summary.classification == "BelowPass"
        assert marksheet.award.reward_coins == 0
        assert marksheet.award.scholarship_eligible is False
        assert [e.letter_grade for e in marksheet.entries] == ["-", "-"]
        assert [e.outcome for e in marksheet.entries] == ["Pending", "Pending"]

    def test_mixed_outcomes(self, mixed_inputs):
        """CGPA 10.00 from one pass while the 73.5 average makes it First Class"""
        marksheet = build_marksheet("learner-xyz", mixed_inputs, 2026)
        summary = marksheet.summary

        assert summary.courses_passed == 1
        assert summary.cgpa == 10.0
        assert summary.average_score_across_attempted == 73.5
        assert summary.classification == "FirstClass"
        assert summary.classification != "Distinction"

        assert marksheet.award.reward_coins == 300
        assert marksheet.award.scholarship_eligible is True

    def test_distinction_reward_scaling(self):
        """A Distinction learner's coins scale with CGPA: 8.50 earns 425, 8.00 earns 400"""
        courses = [CourseRecord(id=i, title=f"Course {i}") for i in range(1, 5)]
        attempts = {
            1: TestAttempt(course_id=1, score_percentage=75, passed=True),
            2: TestAttempt(course_id=2, score_percentage=78, passed=True),
            3: TestAttempt(course_id=3, score_percentage=85, passed=True),
            4: TestAttempt(course_id=4, score_percentage=82, passed=True),
        }
        marksheet = build_marksheet("learner-xyz", AchievementInputs(courses=courses, test_attempts=attempts), 2026)

        assert marksheet.summary.classification == "Distinction"
        assert marksheet.summary.cgpa == 8.5
        assert marksheet.award.reward_coins == 425

        attempts[3] = TestAttempt(course_id=3, score_percentage=79, passed=True)
        attempts[4] = TestAttempt(course_id=4, score_percentage=78, passed=True)
        marksheet = build_marksheet("learner-xyz", AchievementInputs(courses=courses, test_attempts=attempts), 2026)

        assert marksheet.summary.average_score_across_attempted == 77.5
        assert marksheet.summary.cgpa == 8.0
        assert marksheet.summary.classification == "Distinction"
        assert marksheet.award.reward_coins == 400

    def test_invalid_score_blocks_marksheet(self, sample_courses):
        inputs = AchievementInputs(
            courses=sample_courses,
            test_attempts={1: TestAttempt(course_id=1, score_percentage=104, passed=True)},
        )
        with pytest.raises(InvalidScoreRange):
            build_marksheet("learner-xyz", inputs, 2026)

    def test_empty_learner_blocks_marksheet(self, mixed_inputs):
        with pytest.raises(InvalidLearnerIdentity):
            build_marksheet("", mixed_inputs, 2026)


class TestPipelineProperties:

    def test_idempotent(self, mixed_inputs):
        first = build_marksheet("learner-xyz", mixed_inputs, 2026, public_base_url="https://learn.example.org")
        second = build_marksheet("learner-xyz", mixed_inputs, 2026, public_base_url="https://learn.example.org")

        assert first.summary.model_dump_json() == second.summary.model_dump_json()
        assert first.award.model_dump_json() == second.award.model_dump_json()
        assert first.identity.model_dump_json() == second.identity.model_dump_json()
        assert first == second

    def test_learner_identity_display_only(self, mixed_inputs):
        bare = build_marksheet("learner-xyz", mixed_inputs, 2026)
        named = build_marksheet(
            LearnerIdentity(learner_id="learner-xyz", email="a@example.org", display_name="Asha"),
            mixed_inputs,
            2026,
        )
        assert bare.identity == named.identity
        assert named.learner.label == "Asha"

    def test_snapshot_payload(self, mixed_inputs):
        marksheet = build_marksheet("learner-xyz", mixed_inputs, 2026)
        snapshot = marksheet.to_snapshot(datetime(2026, 3, 1))

        assert snapshot.user_id == "learner-xyz"
        assert snapshot.marksheet_number == "MS-2026-LEARNER-"
        assert snapshot.courses_completed == 1
        assert snapshot.total_credits == 3
        assert snapshot.cgpa == 10.0
        assert snapshot.classification == "FirstClass"


class TestMarksheetGenerator:

    def test_fetches_all_inputs_first(self, mixed_inputs):
        store = InMemoryStore(mixed_inputs)
        MarksheetGenerator(store).generate_marksheet("learner-xyz", issue_year=2026)
        assert store.calls == ["courses", "attempts", "submissions", "progress"]

    def test_default_issue_year(self, mixed_inputs):
        marksheet = MarksheetGenerator(InMemoryStore(mixed_inputs)).generate_marksheet("learner-xyz")
        assert marksheet.issue_year == datetime.now().year

    def test_invalid_learner_checked_before_fetch(self, mixed_inputs):
        store = InMemoryStore(mixed_inputs)
        with pytest.raises(InvalidLearnerIdentity):
            MarksheetGenerator(store).generate_marksheet("  ")
        assert store.calls == []

    def test_issue_without_writer(self, mixed_inputs):
        generator = MarksheetGenerator(InMemoryStore(mixed_inputs))
        marksheet = generator.generate_marksheet("learner-xyz", issue_year=2026)

        with pytest.raises(CredentialPersistFailed):
            generator.issue_official(marksheet)

    def test_calculation_log(self, mixed_inputs):
        generator = MarksheetGenerator(InMemoryStore(mixed_inputs))
        generator.generate_marksheet("learner-xyz", issue_year=2026)
        assert any("Classification: FirstClass" in line for line in generator.get_calculation_log())


class TestBatchGeneration:

    def test_batch_records_failures(self, data_dir):
        broken = data_dir / "learner-002"
        broken.mkdir()
        (broken / "test_attempts.csv").write_text("course_id,score_percentage,passed\n1,130,True\n")
        (data_dir / "learner-003").mkdir()

        store = LocalAchievementStore(data_dir)
        results = generate_all_marksheets(
            MarksheetGenerator(store), store.learner_ids(), issue_year=2026, progress=False
        )

        assert [r.learner_id for r in results] == ["learner-001", "learner-002", "learner-003"]
        assert [r.success for r in results] == [True, False, True]
        assert "130" in results[1].error
        assert results[0].classification == "FirstClass"
        assert results[2].classification == "BelowPass"

        frame = results_to_frame(results)
        assert len(frame) == 3
        assert list(frame["success"]) == [True, False, True]
        assert frame.loc[0, "marksheet_number"] == "MS-2026-LEARNER-"

    def test_malformed_rows_do_not_stop_batch(self, data_dir):
        """Blank, fractional and non-numeric cells fail only their own learner"""
        rows = {
            "learner-002": ("test_attempts.csv", "course_id,score_percentage,passed\n1,,True\n"),
            "learner-003": ("test_attempts.csv", "course_id,score_percentage,passed\n1,89.9,True\n"),
            "learner-004": ("lesson_progress.csv", "course_id,lessons_completed\nabc,3\n"),
        }
        for learner_id, (filename, content) in rows.items():
            (data_dir / learner_id).mkdir()
            (data_dir / learner_id / filename).write_text(content)
        (data_dir / "learner-005").mkdir()

        store = LocalAchievementStore(data_dir)
        results = generate_all_marksheets(
            MarksheetGenerator(store), store.learner_ids(), issue_year=2026, progress=False
        )

        assert [r.success for r in results] == [True, False, False, False, True]
        assert "Malformed row" in results[1].error
        assert "89.9" in results[2].error
        assert "Malformed row" in results[3].error
