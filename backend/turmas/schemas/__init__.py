from turmas.schemas.auth import RoutePermissionOut, UserSummary
from turmas.schemas.exercise_list import ExerciseListCreate, ExerciseListOut, ExerciseListUpdate
from turmas.schemas.progress import AttemptOut, ExerciseListSummary, ProgressOut, QuestionProgressOut, SubmittedAttemptOut
from turmas.schemas.question import QuestionCreate, QuestionListResponse, QuestionOut
from turmas.schemas.school_class import ClassCreate, ClassDetailOut, ClassOut, StudentEnroll, StudentUpdate
from turmas.schemas.student import (
    AccessCodeRequest,
    RankingEntryOut,
    StudentAccessOut,
    StudentStatisticsOut,
    SubmitAnswerRequest,
)

__all__ = [
    'AccessCodeRequest',
    'AttemptOut',
    'ClassCreate',
    'ClassDetailOut',
    'ClassOut',
    'ExerciseListCreate',
    'ExerciseListOut',
    'ExerciseListSummary',
    'ExerciseListUpdate',
    'ProgressOut',
    'QuestionCreate',
    'QuestionListResponse',
    'QuestionOut',
    'QuestionProgressOut',
    'RankingEntryOut',
    'RoutePermissionOut',
    'StudentAccessOut',
    'StudentEnroll',
    'StudentStatisticsOut',
    'StudentUpdate',
    'SubmitAnswerRequest',
    'SubmittedAttemptOut',
    'UserSummary',
]
