import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from turmas.db.base_class import Base
from turmas.models.constants import LIST_STATUS_DRAFT, LIST_STATUS_PUBLISHED, LIST_STATUS_VALUES, sql_in
from turmas.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from turmas.models.question import Question
    from turmas.models.school_class import SchoolClass


class ExerciseList(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'exercise_lists'
    __table_args__ = (
        CheckConstraint(f'status in ({sql_in(LIST_STATUS_VALUES)})', name='exercise_list_status_values'),
    )

    class_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('school_classes.id', ondelete='CASCADE'), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=LIST_STATUS_DRAFT, index=True)
    release_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    due_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    school_class: Mapped['SchoolClass'] = relationship(back_populates='exercise_lists')
    items: Mapped[list['ListQuestion']] = relationship(
        back_populates='exercise_list', cascade='all, delete-orphan', order_by='ListQuestion.position'
    )

    @property
    def is_published(self) -> bool:
        return self.status == LIST_STATUS_PUBLISHED


class ListQuestion(UUIDPrimaryKeyMixin, Base):
    __tablename__ = 'list_questions'
    __table_args__ = (
        UniqueConstraint('exercise_list_id', 'question_id', name='uq_list_questions_list_question'),
    )

    exercise_list_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('exercise_lists.id', ondelete='CASCADE'), nullable=False
    )
    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('questions.id', ondelete='RESTRICT'), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    exercise_list: Mapped['ExerciseList'] = relationship(back_populates='items')
    question: Mapped['Question'] = relationship()


Index('ix_exercise_lists_class_id', ExerciseList.class_id)
Index('ix_list_questions_exercise_list_id', ListQuestion.exercise_list_id)
Index('ix_list_questions_question_id', ListQuestion.question_id)
