import logging
from datetime import UTC, datetime
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload, selectinload

from turmas.models.constants import LIST_STATUS_DRAFT, LIST_STATUS_PUBLISHED
from turmas.models.exercise_list import ExerciseList, ListQuestion
from turmas.models.question import Question
from turmas.models.school_class import SchoolClass
from turmas.schemas.exercise_list import ExerciseListCreate, ExerciseListOut, ExerciseListUpdate, ListQuestionOut


logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


def _validate_window(release_at: datetime | None, due_at: datetime | None) -> None:
    if release_at is None or due_at is None:
        return
    if _as_utc(due_at) < _as_utc(release_at):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='A data limite não pode ser anterior à data de liberação',
        )


def _load_questions(db: Session, question_ids: list[UUID]) -> list[Question]:
    if not question_ids:
        return []
    rows = db.scalars(select(Question).where(Question.id.in_(question_ids))).all()
    by_id = {row.id: row for row in rows}
    missing = [str(question_id) for question_id in question_ids if question_id not in by_id]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f'Questões não encontradas: {", ".join(missing)}',
        )
    return [by_id[question_id] for question_id in question_ids]


def _replace_items(db: Session, exercise_list: ExerciseList, questions: list[Question]) -> None:
    if exercise_list.items:
        exercise_list.items.clear()
        # Deletes must reach the database before re-inserting the same (list, question) pairs.
        db.flush()
    for position, question in enumerate(questions):
        exercise_list.items.append(ListQuestion(question=question, question_id=question.id, position=position))


def get_exercise_list(db: Session, list_id: UUID) -> ExerciseList:
    exercise_list = db.scalar(
        select(ExerciseList)
        .where(ExerciseList.id == list_id)
        .options(selectinload(ExerciseList.items).joinedload(ListQuestion.question))
    )
    if not exercise_list:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Lista de exercícios não encontrada')
    return exercise_list


def to_exercise_list_out(exercise_list: ExerciseList) -> ExerciseListOut:
    return ExerciseListOut(
        id=exercise_list.id,
        turmaId=exercise_list.class_id,
        titulo=exercise_list.title,
        descricao=exercise_list.description,
        status=exercise_list.status,
        dataLiberacao=exercise_list.release_at,
        dataLimite=exercise_list.due_at,
        questoes=[
            ListQuestionOut(
                id=item.question.id,
                titulo=item.question.title,
                serie=item.question.serie,
                ordem=item.position,
            )
            for item in sorted(exercise_list.items, key=lambda row: row.position)
        ],
        createdAt=exercise_list.created_at,
    )


def create_exercise_list(db: Session, *, school_class: SchoolClass, payload: ExerciseListCreate) -> ExerciseList:
    _validate_window(payload.dataLiberacao, payload.dataLimite)
    questions = _load_questions(db, payload.questaoIds)

    exercise_list = ExerciseList(
        class_id=school_class.id,
        title=payload.titulo.strip(),
        description=payload.descricao,
        status=LIST_STATUS_DRAFT,
        release_at=payload.dataLiberacao,
        due_at=payload.dataLimite,
    )
    _replace_items(db, exercise_list, questions)
    db.add(exercise_list)
    db.flush()
    logger.info('Exercise list %s created for class %s', exercise_list.id, school_class.id)
    return exercise_list


def update_exercise_list(db: Session, *, exercise_list: ExerciseList, payload: ExerciseListUpdate) -> ExerciseList:
    changes = payload.model_dump(exclude_unset=True)

    release_at = changes.get('dataLiberacao', exercise_list.release_at)
    due_at = changes.get('dataLimite', exercise_list.due_at)
    _validate_window(release_at, due_at)

    if changes.get('titulo'):
        exercise_list.title = changes['titulo'].strip()
    if 'descricao' in changes:
        exercise_list.description = changes['descricao']
    if 'dataLiberacao' in changes:
        exercise_list.release_at = changes['dataLiberacao']
    if 'dataLimite' in changes:
        exercise_list.due_at = changes['dataLimite']
    if changes.get('questaoIds') is not None:
        _replace_items(db, exercise_list, _load_questions(db, payload.questaoIds))

    db.flush()
    return exercise_list


def publish_exercise_list(db: Session, *, exercise_list: ExerciseList) -> ExerciseList:
    if exercise_list.status == LIST_STATUS_PUBLISHED:
        return exercise_list
    if not exercise_list.items:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Não é possível publicar uma lista sem questões',
        )
    exercise_list.status = LIST_STATUS_PUBLISHED
    db.flush()
    logger.info('Exercise list %s published', exercise_list.id)
    return exercise_list


def delete_exercise_list(db: Session, *, exercise_list: ExerciseList) -> None:
    db.delete(exercise_list)
    db.flush()
    logger.info('Exercise list %s deleted', exercise_list.id)


def list_by_class(db: Session, *, class_id: UUID) -> list[ExerciseList]:
    return list(
        db.scalars(
            select(ExerciseList)
            .where(ExerciseList.class_id == class_id)
            .options(selectinload(ExerciseList.items).joinedload(ListQuestion.question))
            .order_by(ExerciseList.created_at.desc())
        ).all()
    )
