from turmas.services import (
    audit_service,
    class_service,
    exercise_list_service,
    progress_service,
    question_service,
    student_service,
)

__all__ = [
    'audit_service',
    'class_service',
    'exercise_list_service',
    'progress_service',
    'question_service',
    'student_service',
]
