import os
from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

TEST_DATABASE_URL = os.getenv('TEST_DATABASE_URL', 'sqlite://')

os.environ.setdefault('DATABASE_URL', TEST_DATABASE_URL)
os.environ.setdefault('JWT_SECRET_KEY', 'test-access-secret-32-chars-min-0001')
os.environ.setdefault('APP_ENV', 'test')
os.environ.setdefault('CORS_ORIGINS', 'http://localhost:3001')

from turmas.api.v1.endpoints.students import access_rate_limiter
from turmas.core.security import create_access_token
from turmas.db.base import Base
from turmas.db.session import enable_sqlite_savepoints, get_db
from turmas.main import app
from turmas.models.constants import LIST_STATUS_DRAFT, LIST_STATUS_PUBLISHED
from turmas.models.exercise_list import ExerciseList, ListQuestion
from turmas.models.question import Question
from turmas.models.rbac import StudentProfile, User
from turmas.models.school_class import SchoolClass


if TEST_DATABASE_URL.startswith('sqlite'):
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
else:
    engine = create_engine(TEST_DATABASE_URL, pool_pre_ping=True)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture(autouse=True)
def seed() -> Generator[SimpleNamespace, None, None]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        data = _seed(db)
        db.commit()
    finally:
        db.close()

    yield data

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def reset_rate_limiter() -> Generator[None, None, None]:
    access_rate_limiter.reset()
    yield
    access_rate_limiter.reset()


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def _override_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_db

    with TestClient(app) as api_client:
        yield api_client

    app.dependency_overrides.clear()


def _user(db: Session, full_name: str, role: str, email: str | None = None) -> User:
    user = User(email=email, full_name=full_name, role=role, is_active=True)
    db.add(user)
    db.flush()
    return user


def _student(db: Session, school_class: SchoolClass, full_name: str, access_code: str) -> User:
    student = User(full_name=full_name, role='aluno', is_active=True)
    student.student_profile = StudentProfile(access_code=access_code, guardian_name=f'Responsável de {full_name}')
    db.add(student)
    school_class.students.append(student)
    db.flush()
    return student


def _question(db: Session, author: User, **fields) -> Question:
    values = {
        'difficulty': 1,
        'serie': 'TERCEIRO_ANO',
        'skills': [],
        'author_id': author.id,
    }
    values.update(fields)
    question = Question(**values)
    db.add(question)
    db.flush()
    return question


def _exercise_list(db: Session, school_class: SchoolClass, title: str, status: str, questions: list[Question], **fields) -> ExerciseList:
    exercise_list = ExerciseList(class_id=school_class.id, title=title, status=status, **fields)
    for position, question in enumerate(questions):
        exercise_list.items.append(ListQuestion(question_id=question.id, position=position))
    db.add(exercise_list)
    db.flush()
    return exercise_list


def _seed(db: Session) -> SimpleNamespace:
    admin = _user(db, 'Admin User', 'admin', 'seed-admin@example.com')
    teacher = _user(db, 'Professora Ana', 'professor', 'ana@example.com')
    other_teacher = _user(db, 'Professor Bruno', 'professor', 'bruno@example.com')
    member = _user(db, 'Member User', 'member', 'member@example.com')
    manager = _user(db, 'Manager User', 'manager', 'manager@example.com')

    school_class = SchoolClass(name='3º Ano A', serie='TERCEIRO_ANO', teacher_id=teacher.id)
    other_class = SchoolClass(name='4º Ano B', serie='QUARTO_ANO', teacher_id=other_teacher.id)
    db.add_all([school_class, other_class])
    db.flush()

    student = _student(db, school_class, 'Carla Souza', 'ABC123')
    classmate = _student(db, school_class, 'Bruno Lima', 'XYZ789')
    other_student = _student(db, other_class, 'Diego Alves', 'QWE456')
    unenrolled = User(full_name='Eva Sem Turma', role='aluno', is_active=True)
    unenrolled.student_profile = StudentProfile(access_code='NOC001')
    db.add(unenrolled)
    db.flush()

    multiple_choice = _question(
        db,
        teacher,
        title='Soma simples',
        prompt='Quanto é 2 + 2?',
        question_type='MULTIPLA_ESCOLHA',
        options=[{'id': 'a', 'texto': '3'}, {'id': 'b', 'texto': '4'}],
        answer_key='b',
        explanation='Dois mais dois são quatro.',
    )
    numeric = _question(
        db,
        teacher,
        title='Multiplicação',
        prompt='Quanto é 3 x 4?',
        question_type='NUMERO',
        answer_key='12',
        difficulty=2,
    )
    true_false = _question(
        db,
        teacher,
        title='Verdadeiro ou falso',
        prompt='O número 7 é par.',
        question_type='VERDADEIRO_FALSO',
        answer_key='F',
        serie='QUARTO_ANO',
    )

    published_list = _exercise_list(
        db,
        school_class,
        'Lista 1',
        LIST_STATUS_PUBLISHED,
        [multiple_choice, numeric],
        description='Operações básicas',
        release_at=datetime(2026, 3, 1, 12, 0, tzinfo=UTC),
        due_at=datetime(2026, 3, 1, 12, 0, tzinfo=UTC) + timedelta(days=7),
    )
    draft_list = _exercise_list(db, school_class, 'Lista rascunho', LIST_STATUS_DRAFT, [true_false])
    other_list = _exercise_list(db, other_class, 'Lista da outra turma', LIST_STATUS_PUBLISHED, [true_false])

    return SimpleNamespace(
        admin=admin.id,
        teacher=teacher.id,
        other_teacher=other_teacher.id,
        member=member.id,
        manager=manager.id,
        school_class=school_class.id,
        other_class=other_class.id,
        student=student.id,
        classmate=classmate.id,
        other_student=other_student.id,
        unenrolled=unenrolled.id,
        multiple_choice=multiple_choice.id,
        numeric=numeric.id,
        true_false=true_false.id,
        published_list=published_list.id,
        draft_list=draft_list.id,
        other_list=other_list.id,
    )


def auth_header(user_id) -> dict[str, str]:
    return {'Authorization': f'Bearer {create_access_token(str(user_id))}'}
