"""initial schema: users, classes, question bank, exercise lists, attempts

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa


revision: str = '0001_initial'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='member'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint(
            "role in ('admin', 'manager', 'member', 'professor', 'aluno')",
            name='user_role_values',
        ),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'student_profiles',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('user_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('access_code', sa.String(length=16), nullable=False),
        sa.Column('guardian_name', sa.String(length=255), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index('ix_student_profiles_access_code', 'student_profiles', ['access_code'], unique=True)

    op.create_table(
        'school_classes',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('serie', sa.String(length=30), nullable=False),
        sa.Column('teacher_id', sa.Uuid(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['teacher_id'], ['users.id'], ondelete='RESTRICT'),
        sa.CheckConstraint(
            "serie in ('PRIMEIRO_ANO', 'SEGUNDO_ANO', 'TERCEIRO_ANO', 'QUARTO_ANO', 'QUINTO_ANO')",
            name='school_class_serie_values',
        ),
    )
    op.create_index('ix_school_classes_teacher_id', 'school_classes', ['teacher_id'])

    op.create_table(
        'class_students',
        sa.Column('class_id', sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('student_id', sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.ForeignKeyConstraint(['class_id'], ['school_classes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['student_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_class_students_student_id', 'class_students', ['student_id'])

    op.create_table(
        'questions',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('prompt', sa.Text(), nullable=False),
        sa.Column('question_type', sa.String(length=30), nullable=False),
        sa.Column('options', sa.JSON(), nullable=True),
        sa.Column('answer_key', sa.Text(), nullable=False),
        sa.Column('explanation', sa.Text(), nullable=True),
        sa.Column('difficulty', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('serie', sa.String(length=30), nullable=False),
        sa.Column('skills', sa.JSON(), nullable=False),
        sa.Column('author_id', sa.Uuid(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], ondelete='SET NULL'),
        sa.CheckConstraint(
            "question_type in ('MULTIPLA_ESCOLHA', 'NUMERO', 'VERDADEIRO_FALSO', 'TEXTO_CURTO')",
            name='question_type_values',
        ),
        sa.CheckConstraint(
            "serie in ('PRIMEIRO_ANO', 'SEGUNDO_ANO', 'TERCEIRO_ANO', 'QUARTO_ANO', 'QUINTO_ANO')",
            name='question_serie_values',
        ),
        sa.CheckConstraint('difficulty >= 1 and difficulty <= 5', name='question_difficulty_range'),
    )
    op.create_index('ix_questions_serie', 'questions', ['serie'])
    op.create_index('ix_questions_question_type', 'questions', ['question_type'])

    op.create_table(
        'exercise_lists',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('class_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='RASCUNHO'),
        sa.Column('release_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('due_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['class_id'], ['school_classes.id'], ondelete='CASCADE'),
        sa.CheckConstraint("status in ('RASCUNHO', 'PUBLICADO')", name='exercise_list_status_values'),
    )
    op.create_index('ix_exercise_lists_class_id', 'exercise_lists', ['class_id'])
    op.create_index('ix_exercise_lists_status', 'exercise_lists', ['status'])

    op.create_table(
        'list_questions',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('exercise_list_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('question_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['exercise_list_id'], ['exercise_lists.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='RESTRICT'),
        sa.UniqueConstraint('exercise_list_id', 'question_id', name='uq_list_questions_list_question'),
    )
    op.create_index('ix_list_questions_exercise_list_id', 'list_questions', ['exercise_list_id'])
    op.create_index('ix_list_questions_question_id', 'list_questions', ['question_id'])

    op.create_table(
        'attempts',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('question_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('student_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('exercise_list_id', sa.Uuid(as_uuid=True), nullable=True),
        sa.Column('answer', sa.Text(), nullable=False),
        sa.Column('is_correct', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('attempt_number', sa.Integer(), nullable=False),
        sa.Column('response_time', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('submitted_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['student_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['exercise_list_id'], ['exercise_lists.id'], ondelete='SET NULL'),
        sa.UniqueConstraint('question_id', 'student_id', 'attempt_number', name='uq_attempts_question_student_number'),
        sa.CheckConstraint('attempt_number >= 1', name='attempt_number_positive'),
        sa.CheckConstraint('response_time >= 0', name='attempt_response_time_non_negative'),
    )
    op.create_index('ix_attempts_student_id', 'attempts', ['student_id'])
    op.create_index('ix_attempts_question_student', 'attempts', ['question_id', 'student_id'])

    op.create_table(
        'audit_log',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column('actor_user_id', sa.Uuid(as_uuid=True), nullable=True),
        sa.Column('action', sa.String(length=150), nullable=False),
        sa.Column('entity_type', sa.String(length=120), nullable=False),
        sa.Column('entity_id', sa.Uuid(as_uuid=True), nullable=True),
        sa.Column('status', sa.String(length=30), nullable=False, server_default='success'),
        sa.Column('details', sa.JSON(), nullable=False),
        sa.Column('ip_address', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['actor_user_id'], ['users.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_audit_log_action', 'audit_log', ['action'])
    op.create_index('ix_audit_log_actor_user_id', 'audit_log', ['actor_user_id'])
    op.create_index('ix_audit_log_entity_type', 'audit_log', ['entity_type'])


def downgrade() -> None:
    op.drop_table('audit_log')
    op.drop_table('attempts')
    op.drop_table('list_questions')
    op.drop_table('exercise_lists')
    op.drop_table('questions')
    op.drop_table('class_students')
    op.drop_table('school_classes')
    op.drop_table('student_profiles')
    op.drop_table('users')
