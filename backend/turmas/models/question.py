import uuid
from typing import Any

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from turmas.db.base_class import Base
from turmas.models.constants import DIFFICULTY_MAX, DIFFICULTY_MIN, QUESTION_TYPE_VALUES, SERIE_VALUES, sql_in
from turmas.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Question(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'questions'
    __table_args__ = (
        CheckConstraint(f'question_type in ({sql_in(QUESTION_TYPE_VALUES)})', name='question_type_values'),
        CheckConstraint(f'serie in ({sql_in(SERIE_VALUES)})', name='question_serie_values'),
        CheckConstraint(
            f'difficulty >= {DIFFICULTY_MIN} and difficulty <= {DIFFICULTY_MAX}',
            name='question_difficulty_range',
        ),
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    question_type: Mapped[str] = mapped_column(String(30), nullable=False)
    # Multiple choice options: [{"id": "a", "texto": "..."}]; answer_key holds the option id.
    options: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)
    answer_key: Mapped[str] = mapped_column(Text, nullable=False)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    difficulty: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    serie: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    skills: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    author_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('users.id', ondelete='SET NULL'), nullable=True
    )


Index('ix_questions_question_type', Question.question_type)
