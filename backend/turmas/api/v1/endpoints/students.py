from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from turmas.core.config import settings
from turmas.db.session import get_db
from turmas.schemas.progress import ExerciseListSummary, SubmittedAttemptOut
from turmas.schemas.student import (
    AccessCodeRequest,
    RankingEntryOut,
    StudentAccessOut,
    StudentStatisticsOut,
    SubmitAnswerRequest,
)
from turmas.services import audit_service, progress_service, student_service
from turmas.utils.rate_limit import SimpleRateLimiter


router = APIRouter(prefix='/aluno', tags=['aluno'])
access_rate_limiter = SimpleRateLimiter(
    max_requests=settings.ACCESS_CODE_MAX_ATTEMPTS,
    window_seconds=settings.ACCESS_CODE_WINDOW_SECONDS,
)


@router.post('/acesso', response_model=StudentAccessOut)
def access_with_code(payload: AccessCodeRequest, request: Request, db: Session = Depends(get_db)) -> StudentAccessOut:
    client_ip = request.client.host if request.client else 'unknown'
    if not access_rate_limiter.hit(client_ip):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail='Muitas tentativas de acesso. Tente novamente mais tarde.',
        )

    try:
        access = student_service.access_by_code(db, raw_code=payload.codigoAcesso)
    except HTTPException as exc:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            audit_service.log_student_access(db, student_id=None, ip_address=client_ip, success=False)
            db.commit()
        raise

    access_rate_limiter.reset(client_ip)
    audit_service.log_student_access(db, student_id=access.id, ip_address=client_ip, success=True)
    db.commit()
    return access


@router.get(
    '/{aluno_id}/atividades',
    response_model=list[ExerciseListSummary],
    response_model_exclude_unset=True,
)
def list_activities(aluno_id: UUID, db: Session = Depends(get_db)) -> list[ExerciseListSummary]:
    return student_service.list_student_activities(db, student_id=aluno_id)


@router.get(
    '/{aluno_id}/atividades/{lista_id}',
    response_model=ExerciseListSummary,
    response_model_exclude_unset=True,
)
def get_activity(aluno_id: UUID, lista_id: UUID, db: Session = Depends(get_db)) -> ExerciseListSummary:
    return student_service.get_student_activity(db, student_id=aluno_id, list_id=lista_id)


@router.post('/{aluno_id}/resposta', response_model=SubmittedAttemptOut, status_code=status.HTTP_201_CREATED)
def submit_answer(aluno_id: UUID, payload: SubmitAnswerRequest, db: Session = Depends(get_db)) -> SubmittedAttemptOut:
    attempt = student_service.submit_answer(db, student_id=aluno_id, payload=payload)
    db.commit()
    return progress_service.submitted_attempt_out(attempt, attempt.question)


@router.get('/{aluno_id}/estatisticas', response_model=StudentStatisticsOut)
def statistics(aluno_id: UUID, db: Session = Depends(get_db)) -> StudentStatisticsOut:
    return student_service.get_student_statistics(db, student_id=aluno_id)


@router.get('/{aluno_id}/ranking', response_model=list[RankingEntryOut])
def ranking(aluno_id: UUID, db: Session = Depends(get_db)) -> list[RankingEntryOut]:
    return student_service.class_ranking(db, student_id=aluno_id)
