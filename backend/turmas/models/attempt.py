import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from turmas.db.base_class import Base
from turmas.models.mixins import UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from turmas.models.question import Question


class Attempt(UUIDPrimaryKeyMixin, Base):
    __tablename__ = 'attempts'
    __table_args__ = (
        UniqueConstraint('question_id', 'student_id', 'attempt_number', name='uq_attempts_question_student_number'),
        CheckConstraint('attempt_number >= 1', name='attempt_number_positive'),
        CheckConstraint('response_time >= 0', name='attempt_response_time_non_negative'),
    )

    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('questions.id', ondelete='CASCADE'), nullable=False
    )
    student_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False
    )
    exercise_list_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('exercise_lists.id', ondelete='SET NULL'), nullable=True
    )
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    attempt_number: Mapped[int] = mapped_column(Integer, nullable=False)
    response_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    question: Mapped['Question'] = relationship()


Index('ix_attempts_student_id', Attempt.student_id)
Index('ix_attempts_question_student', Attempt.question_id, Attempt.student_id)
