import logging
import secrets
import string
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload, selectinload

from turmas.core.config import settings
from turmas.models.constants import STUDENT_ROLE
from turmas.models.exercise_list import ExerciseList
from turmas.models.rbac import StudentProfile, User
from turmas.models.school_class import SchoolClass, class_students
from turmas.schemas.school_class import (
    ClassCreate,
    ClassDetailOut,
    ClassOut,
    ClassStudentOut,
    StudentEnroll,
    StudentUpdate,
)


logger = logging.getLogger(__name__)

ACCESS_CODE_ALPHABET = string.ascii_uppercase + string.digits
MAX_CODE_GENERATION_TRIES = 20


def generate_access_code(db: Session) -> str:
    for _ in range(MAX_CODE_GENERATION_TRIES):
        code = ''.join(secrets.choice(ACCESS_CODE_ALPHABET) for _ in range(settings.ACCESS_CODE_LENGTH))
        taken = db.scalar(select(StudentProfile.id).where(StudentProfile.access_code == code))
        if not taken:
            return code
    raise RuntimeError('Could not generate a unique student access code')


def ensure_class_access(school_class: SchoolClass, user: User) -> None:
    if user.role == 'admin':
        return
    if school_class.teacher_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Apenas o professor da turma pode gerenciá-la')


def get_class(db: Session, class_id: UUID) -> SchoolClass:
    school_class = db.scalar(
        select(SchoolClass)
        .where(SchoolClass.id == class_id)
        .options(selectinload(SchoolClass.students).joinedload(User.student_profile))
    )
    if not school_class:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Turma não encontrada')
    return school_class


def get_class_for_user(db: Session, *, class_id: UUID, user: User) -> SchoolClass:
    school_class = get_class(db, class_id)
    ensure_class_access(school_class, user)
    return school_class


def _counts(db: Session, class_ids: list[UUID]) -> tuple[dict[UUID, int], dict[UUID, int]]:
    if not class_ids:
        return {}, {}

    student_rows = db.execute(
        select(class_students.c.class_id, func.count())
        .where(class_students.c.class_id.in_(class_ids))
        .group_by(class_students.c.class_id)
    ).all()
    list_rows = db.execute(
        select(ExerciseList.class_id, func.count())
        .where(ExerciseList.class_id.in_(class_ids))
        .group_by(ExerciseList.class_id)
    ).all()
    return {row[0]: int(row[1]) for row in student_rows}, {row[0]: int(row[1]) for row in list_rows}


def to_class_out(school_class: SchoolClass, *, total_students: int, total_lists: int) -> ClassOut:
    return ClassOut(
        id=school_class.id,
        nome=school_class.name,
        serie=school_class.serie,
        professorId=school_class.teacher_id,
        totalAlunos=total_students,
        totalListas=total_lists,
        createdAt=school_class.created_at,
    )


def to_student_out(student: User) -> ClassStudentOut:
    profile = student.student_profile
    return ClassStudentOut(
        id=student.id,
        nome=student.full_name,
        responsavel=profile.guardian_name if profile else None,
        dataNascimento=profile.birth_date if profile else None,
        codigoAcesso=profile.access_code if profile else None,
    )


def to_class_detail(db: Session, school_class: SchoolClass) -> ClassDetailOut:
    student_counts, list_counts = _counts(db, [school_class.id])
    summary = to_class_out(
        school_class,
        total_students=student_counts.get(school_class.id, 0),
        total_lists=list_counts.get(school_class.id, 0),
    )
    return ClassDetailOut(
        **summary.model_dump(),
        alunos=[to_student_out(student) for student in school_class.students],
    )


def create_class(db: Session, *, payload: ClassCreate, teacher: User) -> SchoolClass:
    school_class = SchoolClass(name=payload.nome.strip(), serie=payload.serie, teacher_id=teacher.id)
    db.add(school_class)
    db.flush()
    logger.info('Class %s created by %s', school_class.id, teacher.id)
    return school_class


def list_classes(db: Session, *, user: User) -> list[ClassOut]:
    query = select(SchoolClass).order_by(SchoolClass.created_at.desc())
    if user.role != 'admin':
        query = query.where(SchoolClass.teacher_id == user.id)

    rows = db.scalars(query).all()
    student_counts, list_counts = _counts(db, [row.id for row in rows])
    return [
        to_class_out(
            row,
            total_students=student_counts.get(row.id, 0),
            total_lists=list_counts.get(row.id, 0),
        )
        for row in rows
    ]


def enroll_student(db: Session, *, school_class: SchoolClass, payload: StudentEnroll) -> User:
    student = User(full_name=payload.nome.strip(), role=STUDENT_ROLE, is_active=True)
    student.student_profile = StudentProfile(
        access_code=generate_access_code(db),
        guardian_name=payload.responsavel.strip(),
        birth_date=payload.dataNascimento,
    )
    db.add(student)
    school_class.students.append(student)
    db.flush()
    logger.info('Student %s enrolled in class %s', student.id, school_class.id)
    return student


def _get_class_student(school_class: SchoolClass, student_id: UUID) -> User:
    student = next((row for row in school_class.students if row.id == student_id), None)
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Aluno não encontrado nesta turma')
    return student


def update_student(db: Session, *, school_class: SchoolClass, student_id: UUID, payload: StudentUpdate) -> User:
    student = _get_class_student(school_class, student_id)
    changes = payload.model_dump(exclude_unset=True)

    if changes.get('nome'):
        student.full_name = changes['nome'].strip()

    profile = student.student_profile
    if profile is None:
        profile = StudentProfile(access_code=generate_access_code(db))
        student.student_profile = profile
    if changes.get('responsavel'):
        profile.guardian_name = changes['responsavel'].strip()
    if 'dataNascimento' in changes:
        profile.birth_date = changes['dataNascimento']

    db.flush()
    return student


def remove_student(db: Session, *, school_class: SchoolClass, student_id: UUID) -> User:
    student = _get_class_student(school_class, student_id)
    school_class.students.remove(student)
    db.flush()
    logger.info('Student %s removed from class %s', student.id, school_class.id)
    return student
