"""Quiz submission and exercise attempt endpoints."""

import uuid
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.auth.config import DEFAULT_USER_ID
from academy.exercises.models import Exercise, ExerciseAttempt
from academy.exercises.service import RECENT_ATTEMPTS_LIMIT
from academy.quizzes.models import QuizAttempt, QuizQuestion


pytestmark = pytest.mark.integration


async def _seed_quiz(db_session: AsyncSession, lesson_id: uuid.UUID, answers: list[str]) -> list[QuizQuestion]:
    questions = [
        QuizQuestion(
            lesson_id=lesson_id,
            question=f"Question {index}",
            options=[answer, "wrong"],
            correct_answer=answer,
            explanation=f"Because {answer}",
            order_index=index,
        )
        for index, answer in enumerate(answers)
    ]
    db_session.add_all(questions)
    await db_session.commit()
    return questions


async def _seed_exercise(db_session: AsyncSession, lesson_id: uuid.UUID) -> Exercise:
    exercise = Exercise(lesson_id=lesson_id, title="Center a div", prompt="Use flexbox.")
    db_session.add(exercise)
    await db_session.commit()
    return exercise


class TestQuizSubmit:
    @pytest.mark.asyncio
    async def test_grades_and_stores_attempt(self, client_factory, db_session: AsyncSession, add_lesson) -> None:
        client = await client_factory()
        lesson = await add_lesson("css-box-model")
        questions = await _seed_quiz(db_session, lesson.id, ["margin", "padding", "border", "content", "outline"])
        answers = {str(q.id): q.correct_answer for q in questions[:4]}
        answers[str(questions[4].id)] = "shadow"

        resp = await client.post("/api/v1/quizzes/submit", json={"lesson_id": str(lesson.id), "answers": answers})

        assert resp.status_code == 200
        body = resp.json()
        assert body["score"] == 4
        assert body["total"] == 5
        assert body["passed"] is True
        assert body["feedback"][str(questions[4].id)] == {"is_correct": False, "explanation": "Because outline"}
        assert body["feedback"][str(questions[0].id)]["is_correct"] is True

        attempt = (await db_session.execute(select(QuizAttempt))).scalar_one()
        assert attempt.user_id == DEFAULT_USER_ID
        assert (attempt.score, attempt.max_score, attempt.passed) == (4, 5, True)
        assert attempt.answers == answers

    @pytest.mark.asyncio
    async def test_answers_are_trimmed(self, client_factory, db_session: AsyncSession, add_lesson) -> None:
        client = await client_factory()
        lesson = await add_lesson("html-tags")
        (question,) = await _seed_quiz(db_session, lesson.id, ["<p>"])

        resp = await client.post(
            "/api/v1/quizzes/submit", json={"lesson_id": str(lesson.id), "answers": {str(question.id): "  <p> "}}
        )

        assert resp.json()["score"] == 1

    @pytest.mark.asyncio
    async def test_lesson_without_questions_never_passes(self, client_factory, add_lesson) -> None:
        client = await client_factory()
        lesson = await add_lesson("html-tags")

        resp = await client.post("/api/v1/quizzes/submit", json={"lesson_id": str(lesson.id), "answers": {}})

        assert resp.json() == {"score": 0, "total": 0, "passed": False, "feedback": {}}

    @pytest.mark.asyncio
    async def test_unknown_lesson_is_404(self, client_factory) -> None:
        client = await client_factory()

        resp = await client.post("/api/v1/quizzes/submit", json={"lesson_id": str(uuid.uuid4()), "answers": {}})

        assert resp.status_code == 404


class TestExerciseAttempts:
    @pytest.mark.asyncio
    async def test_records_attempt(self, client_factory, db_session: AsyncSession, add_lesson) -> None:
        client = await client_factory()
        lesson = await add_lesson("css-flexbox")
        exercise = await _seed_exercise(db_session, lesson.id)

        resp = await client.post(
            "/api/v1/attempts",
            json={
                "exercise_id": str(exercise.id),
                "html_snapshot": "<div class='box'></div>",
                "css_snapshot": ".box { display: flex; }",
                "result": "FAIL",
                "feedback": "Expected justify-content: center",
            },
        )

        assert resp.status_code == 201
        attempt = resp.json()["attempt"]
        assert attempt["exercise_id"] == str(exercise.id)
        assert attempt["user_id"] == str(client.expected_user_id)
        assert attempt["result"] == "FAIL"
        assert attempt["js_snapshot"] == ""

    @pytest.mark.asyncio
    async def test_unknown_exercise_is_404(self, client_factory) -> None:
        client = await client_factory()

        resp = await client.post("/api/v1/attempts", json={"exercise_id": str(uuid.uuid4()), "result": "PASS"})

        assert resp.status_code == 404
        assert "Exercise" in resp.json()["error"]["detail"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"result": "SKIPPED"},
            {"result": "PASS", "html_snapshot": "x" * 12001},
            {"result": "PASS", "feedback": "x" * 1201},
        ],
    )
    async def test_invalid_attempt_is_422(
        self, client_factory, db_session: AsyncSession, add_lesson, overrides: dict
    ) -> None:
        client = await client_factory()
        lesson = await add_lesson("css-flexbox")
        exercise = await _seed_exercise(db_session, lesson.id)

        resp = await client.post("/api/v1/attempts", json={"exercise_id": str(exercise.id), **overrides})

        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_lists_recent_attempts_for_current_learner(
        self, client_factory, db_session: AsyncSession, add_lesson
    ) -> None:
        client = await client_factory()
        lesson = await add_lesson("css-flexbox")
        exercise = await _seed_exercise(db_session, lesson.id)
        start = datetime(2026, 5, 1, tzinfo=UTC)
        db_session.add_all(
            [
                ExerciseAttempt(
                    user_id=DEFAULT_USER_ID,
                    exercise_id=exercise.id,
                    result="FAIL" if index % 2 else "PASS",
                    created_at=start + timedelta(minutes=index),
                )
                for index in range(RECENT_ATTEMPTS_LIMIT + 2)
            ]
        )
        db_session.add(ExerciseAttempt(user_id=uuid.uuid4(), exercise_id=exercise.id, result="PASS"))
        await db_session.commit()

        resp = await client.get(f"/api/v1/exercises/{exercise.id}/attempts")

        assert resp.status_code == 200
        attempts = resp.json()["attempts"]
        assert len(attempts) == RECENT_ATTEMPTS_LIMIT
        assert all(item["user_id"] == str(DEFAULT_USER_ID) for item in attempts)
        timestamps = [item["created_at"] for item in attempts]
        assert timestamps == sorted(timestamps, reverse=True)
