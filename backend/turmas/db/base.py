from turmas.db.base_class import Base
from turmas.models.attempt import Attempt
from turmas.models.audit import AuditLog
from turmas.models.exercise_list import ExerciseList, ListQuestion
from turmas.models.question import Question
from turmas.models.rbac import StudentProfile, User
from turmas.models.school_class import SchoolClass


__all__ = [
    'Attempt',
    'AuditLog',
    'Base',
    'ExerciseList',
    'ListQuestion',
    'Question',
    'SchoolClass',
    'StudentProfile',
    'User',
]
