"""
Student progress over exercise lists.

Everything here is a pure transform over already-loaded rows: callers fetch the
list (with its ordered items) and the student's attempts, this module shapes
them into the response payloads. Nothing here touches the session.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from turmas.models.constants import LIST_STATUS_PUBLISHED
from turmas.schemas.progress import (
    AnsweredQuestionOut,
    AttemptOut,
    ExerciseListSummary,
    ProgressOut,
    QuestionProgressOut,
    SubmittedAttemptOut,
)
from turmas.schemas.student import StudentStatisticsOut


AttemptsByQuestion = Mapping[UUID, Sequence[Any]]


def to_iso(value: datetime | None) -> str | None:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return f"{value.strftime('%Y-%m-%dT%H:%M:%S')}.{value.microsecond // 1000:03d}Z"


def percent_correct(correct: int, answered: int) -> float:
    if answered <= 0:
        return 0.0
    return (correct / answered) * 100


def answered_correctly(attempts: Iterable[Any]) -> bool:
    # Best of all attempts, not the latest one.
    return any(bool(getattr(attempt, 'is_correct', False)) for attempt in attempts)


def attempt_out(attempt: Any) -> AttemptOut:
    return AttemptOut(
        id=attempt.id,
        resposta=getattr(attempt, 'answer', None) or '',
        correta=bool(getattr(attempt, 'is_correct', False)),
        tentativaNumero=getattr(attempt, 'attempt_number', None) or 0,
        tempoResposta=getattr(attempt, 'response_time', None) or 0,
        createdAt=to_iso(getattr(attempt, 'submitted_at', None)),
    )


def submitted_attempt_out(attempt: Any, question: Any) -> SubmittedAttemptOut:
    return SubmittedAttemptOut(
        **attempt_out(attempt).model_dump(),
        questao=AnsweredQuestionOut(
            id=question.id,
            enunciado=question.prompt,
            tipo=question.question_type,
            explicacao=getattr(question, 'explanation', None),
            gabarito=question.answer_key,
            opcoes=getattr(question, 'options', None),
        ),
    )


def _question_progress(question: Any, attempts: Sequence[Any]) -> QuestionProgressOut:
    return QuestionProgressOut(
        id=question.id,
        enunciado=question.prompt,
        tipo=question.question_type,
        opcoes=getattr(question, 'options', None),
        gabarito=question.answer_key,
        explicacao=getattr(question, 'explanation', None),
        dificuldade=question.difficulty,
        tentativas=[attempt_out(attempt) for attempt in attempts],
        acertou=answered_correctly(attempts),
        numeroTentativas=len(attempts),
    )


def summarize_exercise_list(
    exercise_list: Any,
    attempts_by_question: AttemptsByQuestion | None = None,
) -> ExerciseListSummary:
    """
    Build the student-facing summary of one exercise list.

    ``attempts_by_question`` maps question id to that student's attempts, most
    recent first. Questions missing from the mapping (or mapped to ``None``)
    count as not answered.
    """
    attempts_by_question = attempts_by_question or {}
    items = list(getattr(exercise_list, 'items', None) or [])

    answered = 0
    correct = 0
    questions: list[QuestionProgressOut] = []
    for item in items:
        question = getattr(item, 'question', None)
        if question is None:
            continue

        attempts = list(attempts_by_question.get(question.id) or [])
        progress = _question_progress(question, attempts)
        if progress.numeroTentativas > 0:
            answered += 1
            if progress.acertou:
                correct += 1
        questions.append(progress)

    fields: dict[str, Any] = {
        'id': exercise_list.id,
        'titulo': exercise_list.title,
        'descricao': getattr(exercise_list, 'description', None),
        'dataInicio': to_iso(getattr(exercise_list, 'release_at', None))
        or to_iso(getattr(exercise_list, 'created_at', None)),
        'ativa': getattr(exercise_list, 'status', None) == LIST_STATUS_PUBLISHED,
        'questoes': questions,
        'progresso': ProgressOut(
            total=len(items),
            respondidas=answered,
            corretas=correct,
            percentualAcerto=percent_correct(correct, answered),
        ),
    }
    due_at = getattr(exercise_list, 'due_at', None)
    if due_at is not None:
        fields['dataFim'] = to_iso(due_at)

    return ExerciseListSummary(**fields)


def summarize_exercise_lists(
    exercise_lists: Iterable[Any],
    attempts_by_question: AttemptsByQuestion | None = None,
) -> list[ExerciseListSummary]:
    return [summarize_exercise_list(exercise_list, attempts_by_question) for exercise_list in exercise_lists]


def group_attempts_by_question(attempts: Iterable[Any]) -> dict[UUID, list[Any]]:
    grouped: dict[UUID, list[Any]] = {}
    for attempt in attempts:
        grouped.setdefault(attempt.question_id, []).append(attempt)
    return grouped


def student_statistics(attempts: Iterable[Any]) -> StudentStatisticsOut:
    grouped = group_attempts_by_question(attempts)
    total_attempts = sum(len(rows) for rows in grouped.values())
    answered = len(grouped)
    correct = len([rows for rows in grouped.values() if answered_correctly(rows)])
    return StudentStatisticsOut(
        totalTentativas=total_attempts,
        totalAcertos=correct,
        percentualAcerto=percent_correct(correct, answered),
        questoesRespondidas=answered,
    )
