"""Pure helpers behind quiz grading and the completion streak."""

from datetime import UTC, date, datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

from academy.progress.service import _utc_date, count_streak
from academy.quizzes.service import grade_answers


def question(correct_answer: str, explanation: str = "") -> SimpleNamespace:
    return SimpleNamespace(id=uuid4(), correct_answer=correct_answer, explanation=explanation)


class TestGradeAnswers:
    def test_trims_answers_before_comparing(self) -> None:
        q1 = question(" <main> ")
        q2 = question("flex", "Flexbox lays out items in one dimension.")

        grade = grade_answers([q1, q2], {str(q1.id): "<main>", str(q2.id): "grid"}, 0.8)

        assert grade.score == 1
        assert grade.max_score == 2
        assert grade.passed is False
        assert [item.correct for item in grade.results] == [True, False]
        assert grade.results[1].explanation == "Flexbox lays out items in one dimension."

    def test_passes_at_exact_threshold(self) -> None:
        questions = [question(str(index)) for index in range(5)]
        answers = {str(q.id): q.correct_answer for q in questions[:4]}

        grade = grade_answers(questions, answers, 0.8)

        assert grade.score == 4
        assert grade.passed is True

    def test_missing_answers_count_as_wrong(self) -> None:
        grade = grade_answers([question("a")], {}, 0.8)

        assert grade.score == 0
        assert grade.results[0].response == ""

    def test_empty_quiz_never_passes(self) -> None:
        grade = grade_answers([], {}, 0.8)

        assert grade.max_score == 0
        assert grade.passed is False


class TestStreak:
    def test_counts_consecutive_days_ending_today(self) -> None:
        today = date(2026, 3, 10)
        days = {today, today - timedelta(days=1), today - timedelta(days=2), today - timedelta(days=4)}

        assert count_streak(days, today) == 3

    def test_zero_without_completion_today(self) -> None:
        today = date(2026, 3, 10)

        assert count_streak({today - timedelta(days=1)}, today) == 0
        assert count_streak(set(), today) == 0

    def test_utc_date_converts_offsets(self) -> None:
        late_evening = datetime(2026, 3, 9, 23, 30, tzinfo=timezone(timedelta(hours=-5)))

        assert _utc_date(late_evening) == date(2026, 3, 10)
        assert _utc_date(datetime(2026, 3, 9, 23, 30)) == date(2026, 3, 9)
        assert _utc_date(datetime(2026, 3, 9, 23, 30, tzinfo=UTC)) == date(2026, 3, 9)
