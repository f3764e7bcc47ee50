import uuid
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from turmas.db.base_class import Base
from turmas.models.constants import SERIE_VALUES, sql_in
from turmas.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from turmas.models.exercise_list import ExerciseList
    from turmas.models.rbac import User


class_students = Table(
    'class_students',
    Base.metadata,
    Column('class_id', Uuid(as_uuid=True), ForeignKey('school_classes.id', ondelete='CASCADE'), primary_key=True),
    Column('student_id', Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
)


class SchoolClass(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'school_classes'
    __table_args__ = (
        CheckConstraint(f'serie in ({sql_in(SERIE_VALUES)})', name='school_class_serie_values'),
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    serie: Mapped[str] = mapped_column(String(30), nullable=False)
    teacher_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('users.id', ondelete='RESTRICT'), nullable=False
    )

    teacher: Mapped['User'] = relationship(back_populates='taught_classes')
    students: Mapped[list['User']] = relationship(
        secondary=class_students, back_populates='enrolled_classes', order_by='User.full_name'
    )
    exercise_lists: Mapped[list['ExerciseList']] = relationship(
        back_populates='school_class', cascade='all, delete-orphan', order_by='ExerciseList.created_at.desc()'
    )


Index('ix_school_classes_teacher_id', SchoolClass.teacher_id)
Index('ix_class_students_student_id', class_students.c.student_id)
