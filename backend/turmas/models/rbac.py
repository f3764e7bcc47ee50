import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from turmas.db.base_class import Base
from turmas.models.constants import ROLE_VALUES, STUDENT_ROLE, sql_in
from turmas.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from turmas.models.school_class import SchoolClass


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'users'
    __table_args__ = (
        CheckConstraint(f'role in ({sql_in(ROLE_VALUES)})', name='user_role_values'),
    )

    # Students sign in with an access code and usually have no email.
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, unique=True, index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default='member', index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    student_profile: Mapped['StudentProfile | None'] = relationship(
        back_populates='user', cascade='all, delete-orphan', uselist=False
    )
    taught_classes: Mapped[list['SchoolClass']] = relationship(back_populates='teacher')
    enrolled_classes: Mapped[list['SchoolClass']] = relationship(
        secondary='class_students', back_populates='students', order_by='SchoolClass.created_at'
    )

    @property
    def is_student(self) -> bool:
        return self.role == STUDENT_ROLE


class StudentProfile(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'student_profiles'

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True
    )
    access_code: Mapped[str] = mapped_column(String(16), nullable=False, unique=True, index=True)
    guardian_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    user: Mapped['User'] = relationship(back_populates='student_profile')
