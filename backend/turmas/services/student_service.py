import logging
import re
from collections.abc import Iterable
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from turmas.core.config import settings
from turmas.models.attempt import Attempt
from turmas.models.constants import LIST_STATUS_PUBLISHED
from turmas.models.exercise_list import ExerciseList, ListQuestion
from turmas.models.question import Question
from turmas.models.rbac import StudentProfile, User
from turmas.models.school_class import SchoolClass
from turmas.schemas.progress import ExerciseListSummary
from turmas.schemas.student import (
    ClassCount,
    RankingEntryOut,
    RankingStudentRef,
    StudentAccessOut,
    StudentClassOut,
    StudentStatisticsOut,
    SubmitAnswerRequest,
    TeacherRef,
)
from turmas.services import progress_service


logger = logging.getLogger(__name__)

_NON_ALNUM_RE = re.compile(r'[^A-Za-z0-9]')
_TRUE_VALUES = {'v', 'verdadeiro', 'true', 'sim'}
_FALSE_VALUES = {'f', 'falso', 'false', 'nao', 'não'}
MAX_ATTEMPT_NUMBER_RETRIES = 3


def normalize_access_code(raw_code: str) -> str:
    return _NON_ALNUM_RE.sub('', raw_code or '').upper()


def get_student(db: Session, student_id: UUID) -> User:
    student = db.scalar(
        select(User)
        .where(User.id == student_id)
        .options(
            joinedload(User.student_profile),
            selectinload(User.enrolled_classes),
        )
    )
    if not student or not student.is_student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Aluno não encontrado')
    return student


def get_student_class(student: User) -> SchoolClass:
    if not student.enrolled_classes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Aluno não está matriculado em uma turma',
        )
    return student.enrolled_classes[0]


def load_student_attempts(
    db: Session,
    *,
    student_id: UUID,
    question_ids: Iterable[UUID] | None = None,
) -> dict[UUID, list[Attempt]]:
    query = select(Attempt).where(Attempt.student_id == student_id)
    if question_ids is not None:
        ids = list(question_ids)
        if not ids:
            return {}
        query = query.where(Attempt.question_id.in_(ids))

    rows = db.scalars(
        query.order_by(Attempt.submitted_at.desc(), Attempt.attempt_number.desc())
    ).all()
    return progress_service.group_attempts_by_question(rows)


def _with_items(query):
    return query.options(selectinload(ExerciseList.items).joinedload(ListQuestion.question))


def list_student_activities(db: Session, *, student_id: UUID) -> list[ExerciseListSummary]:
    student = get_student(db, student_id)
    school_class = get_student_class(student)

    exercise_lists = db.scalars(
        _with_items(
            select(ExerciseList)
            .where(
                ExerciseList.class_id == school_class.id,
                ExerciseList.status == LIST_STATUS_PUBLISHED,
            )
            .order_by(ExerciseList.created_at.desc())
        )
    ).all()

    question_ids = {item.question_id for exercise_list in exercise_lists for item in exercise_list.items}
    attempts = load_student_attempts(db, student_id=student.id, question_ids=question_ids)
    return progress_service.summarize_exercise_lists(exercise_lists, attempts)


def get_student_activity(db: Session, *, student_id: UUID, list_id: UUID) -> ExerciseListSummary:
    student = get_student(db, student_id)

    exercise_list = db.scalar(_with_items(select(ExerciseList).where(ExerciseList.id == list_id)))
    if not exercise_list:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Lista de exercícios não encontrada')
    if not exercise_list.is_published:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Esta atividade ainda não está disponível',
        )

    attempts = load_student_attempts(
        db,
        student_id=student.id,
        question_ids=[item.question_id for item in exercise_list.items],
    )
    return progress_service.summarize_exercise_list(exercise_list, attempts)


def compute_statistics(db: Session, *, student_id: UUID) -> StudentStatisticsOut:
    rows = db.scalars(select(Attempt).where(Attempt.student_id == student_id)).all()
    return progress_service.student_statistics(rows)


def get_student_statistics(db: Session, *, student_id: UUID) -> StudentStatisticsOut:
    student = get_student(db, student_id)
    return compute_statistics(db, student_id=student.id)


def access_by_code(db: Session, *, raw_code: str) -> StudentAccessOut:
    code = normalize_access_code(raw_code)
    if len(code) != settings.ACCESS_CODE_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f'O código deve ter {settings.ACCESS_CODE_LENGTH} caracteres',
        )

    profile = db.scalar(
        select(StudentProfile)
        .where(StudentProfile.access_code == code)
        .options(joinedload(StudentProfile.user).selectinload(User.enrolled_classes))
    )
    if not profile or not profile.user.is_active or not profile.user.is_student:
        logger.warning('Rejected student access code attempt')
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Código de acesso inválido')

    student = profile.user
    school_class = get_student_class(student)
    teacher = db.get(User, school_class.teacher_id)
    student_count = int(
        db.scalar(
            select(func.count())
            .select_from(User)
            .join(User.enrolled_classes)
            .where(SchoolClass.id == school_class.id)
        )
        or 0
    )

    logger.info('Student %s accessed class %s', student.id, school_class.id)
    return StudentAccessOut(
        id=student.id,
        nome=student.full_name,
        codigoAcesso=profile.access_code,
        turma=StudentClassOut(
            id=school_class.id,
            nome=school_class.name,
            serie=school_class.serie,
            professor=TeacherRef(id=teacher.id, name=teacher.full_name),
            count=ClassCount(alunos=student_count),
        ),
        estatisticas=compute_statistics(db, student_id=student.id),
    )


def _parse_decimal(value: str) -> Decimal | None:
    try:
        return Decimal(value.strip().replace(',', '.'))
    except InvalidOperation:
        return None


def _parse_boolean(value: str) -> bool | None:
    normalized = value.strip().casefold()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


def is_answer_correct(question: Question, answer: str) -> bool:
    expected = (question.answer_key or '').strip()
    given = (answer or '').strip()

    if question.question_type == 'NUMERO':
        expected_number = _parse_decimal(expected)
        given_number = _parse_decimal(given)
        if expected_number is not None and given_number is not None:
            return expected_number == given_number

    if question.question_type == 'VERDADEIRO_FALSO':
        expected_flag = _parse_boolean(expected)
        given_flag = _parse_boolean(given)
        if expected_flag is not None and given_flag is not None:
            return expected_flag == given_flag

    return expected.casefold() == given.casefold()


def next_attempt_number(db: Session, *, student_id: UUID, question_id: UUID) -> int:
    current = db.scalar(
        select(func.max(Attempt.attempt_number)).where(
            Attempt.question_id == question_id,
            Attempt.student_id == student_id,
        )
    )
    return int(current or 0) + 1


def submit_answer(db: Session, *, student_id: UUID, payload: SubmitAnswerRequest) -> Attempt:
    student = get_student(db, student_id)

    exercise_list = db.scalar(_with_items(select(ExerciseList).where(ExerciseList.id == payload.listaId)))
    if not exercise_list:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Lista de exercícios não encontrada')
    if not exercise_list.is_published:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Esta atividade ainda não está disponível',
        )
    if exercise_list.class_id not in {school_class.id for school_class in student.enrolled_classes}:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail='Esta atividade não pertence à turma do aluno',
        )

    item = next((row for row in exercise_list.items if row.question_id == payload.questaoId), None)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Questão não pertence a esta lista')

    attempt = None
    for _ in range(MAX_ATTEMPT_NUMBER_RETRIES):
        candidate = Attempt(
            question_id=payload.questaoId,
            student_id=student.id,
            exercise_list_id=exercise_list.id,
            answer=payload.resposta,
            is_correct=is_answer_correct(item.question, payload.resposta),
            attempt_number=next_attempt_number(db, student_id=student.id, question_id=payload.questaoId),
            response_time=payload.tempoResposta,
            submitted_at=datetime.now(UTC),
        )
        try:
            with db.begin_nested():
                db.add(candidate)
                db.flush()
        except IntegrityError:
            # A concurrent submission took this attempt number; count again.
            logger.warning(
                'Attempt number %s already taken for student %s question %s',
                candidate.attempt_number,
                student.id,
                payload.questaoId,
            )
            continue
        attempt = candidate
        break

    if attempt is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail='Resposta enviada em duplicidade. Tente novamente.',
        )

    logger.info(
        'Student %s answered question %s (attempt %s, correct=%s)',
        student.id,
        payload.questaoId,
        attempt.attempt_number,
        attempt.is_correct,
    )
    return attempt


def class_ranking(db: Session, *, student_id: UUID) -> list[RankingEntryOut]:
    student = get_student(db, student_id)
    school_class = get_student_class(student)

    classmates = db.scalars(
        select(User)
        .join(User.enrolled_classes)
        .where(SchoolClass.id == school_class.id, User.is_active.is_(True))
    ).all()
    classmate_ids = [classmate.id for classmate in classmates]

    attempts_by_student: dict[UUID, list[Attempt]] = {classmate_id: [] for classmate_id in classmate_ids}
    if classmate_ids:
        for attempt in db.scalars(select(Attempt).where(Attempt.student_id.in_(classmate_ids))).all():
            attempts_by_student[attempt.student_id].append(attempt)

    rows = [
        (classmate, progress_service.student_statistics(attempts_by_student[classmate.id]))
        for classmate in classmates
    ]
    rows.sort(key=lambda row: (-row[1].totalAcertos, -row[1].percentualAcerto, row[0].full_name.casefold()))

    return [
        RankingEntryOut(
            posicao=index,
            aluno=RankingStudentRef(id=classmate.id, nome=classmate.full_name),
            estatisticas=statistics,
        )
        for index, (classmate, statistics) in enumerate(rows, start=1)
    ]
