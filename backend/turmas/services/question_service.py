import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from turmas.models.exercise_list import ListQuestion
from turmas.models.question import Question
from turmas.models.rbac import User
from turmas.schemas.question import QuestionCreate


logger = logging.getLogger(__name__)


def get_question(db: Session, question_id: UUID) -> Question:
    question = db.get(Question, question_id)
    if not question:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Questão não encontrada')
    return question


def list_questions(
    db: Session,
    *,
    page: int,
    page_size: int,
    serie: str | None = None,
    question_type: str | None = None,
    search: str | None = None,
) -> tuple[list[Question], int]:
    base_query = select(Question)
    if serie:
        base_query = base_query.where(Question.serie == serie)
    if question_type:
        base_query = base_query.where(Question.question_type == question_type)
    if search and search.strip():
        pattern = f'%{search.strip().lower()}%'
        base_query = base_query.where(
            or_(func.lower(Question.title).like(pattern), func.lower(Question.prompt).like(pattern))
        )

    total = db.scalar(select(func.count()).select_from(base_query.subquery()))
    rows = db.scalars(
        base_query.order_by(Question.created_at.desc(), Question.title.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    ).all()
    return list(rows), int(total or 0)


def create_question(db: Session, *, payload: QuestionCreate, author: User) -> Question:
    question = Question(
        title=payload.titulo.strip(),
        prompt=payload.enunciado,
        question_type=payload.tipo,
        options=[option.model_dump() for option in payload.opcoes] if payload.opcoes else None,
        answer_key=payload.gabarito.strip(),
        explanation=payload.explicacao,
        difficulty=payload.dificuldade,
        serie=payload.serie,
        skills=[skill.strip() for skill in payload.habilidades if skill.strip()],
        author_id=author.id,
    )
    db.add(question)
    db.flush()
    logger.info('Question %s created by %s', question.id, author.id)
    return question


def delete_question(db: Session, *, question: Question) -> None:
    in_use = db.scalar(select(func.count()).select_from(ListQuestion).where(ListQuestion.question_id == question.id))
    if in_use:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail='Questão está em uso por uma lista de exercícios',
        )
    db.delete(question)
    db.flush()
    logger.info('Question %s deleted', question.id)
