from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from turmas.api.deps import get_current_active_user, require_permission
from turmas.core.permissions import Permissions
from turmas.db.session import get_db
from turmas.models.rbac import User
from turmas.schemas.common import PaginationMeta
from turmas.schemas.question import QuestionCreate, QuestionListResponse, QuestionOut
from turmas.services import audit_service, question_service


router = APIRouter(prefix='/questoes', tags=['questoes'])


@router.get('', response_model=QuestionListResponse)
def list_questions(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
    serie: str | None = Query(default=None),
    tipo: str | None = Query(default=None),
    busca: str | None = Query(default=None, max_length=200),
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Permissions.READ)),
) -> QuestionListResponse:
    rows, total = question_service.list_questions(
        db,
        page=page,
        page_size=page_size,
        serie=serie,
        question_type=tipo,
        search=busca,
    )
    return QuestionListResponse(
        items=[QuestionOut.model_validate(row) for row in rows],
        meta=PaginationMeta(page=page, page_size=page_size, total=total),
    )


@router.get('/{questao_id}', response_model=QuestionOut)
def get_question(
    questao_id: UUID,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Permissions.READ)),
) -> QuestionOut:
    return QuestionOut.model_validate(question_service.get_question(db, questao_id))


@router.post('', response_model=QuestionOut, status_code=status.HTTP_201_CREATED)
def create_question(
    payload: QuestionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.CREATE)),
) -> QuestionOut:
    question = question_service.create_question(db, payload=payload, author=current_user)
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='question_create',
        entity_type='question',
        entity_id=question.id,
        details={'type': question.question_type, 'serie': question.serie},
    )
    db.commit()
    return QuestionOut.model_validate(question)


@router.delete('/{questao_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_question(
    questao_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.HARD_DELETE)),
) -> None:
    question = question_service.get_question(db, questao_id)
    question_service.delete_question(db, question=question)
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='question_delete',
        entity_type='question',
        entity_id=questao_id,
    )
    db.commit()
