from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from turmas.api.deps import get_current_active_user, require_permission
from turmas.core.permissions import Permissions
from turmas.db.session import get_db
from turmas.models.rbac import User
from turmas.schemas.exercise_list import ExerciseListCreate, ExerciseListOut, ExerciseListUpdate
from turmas.services import audit_service, class_service, exercise_list_service


router = APIRouter(prefix='/listas-exercicios', tags=['listas-exercicios'])


def _get_owned_list(db: Session, list_id: UUID, user: User):
    exercise_list = exercise_list_service.get_exercise_list(db, list_id)
    class_service.ensure_class_access(exercise_list.school_class, user)
    return exercise_list


@router.post('', response_model=ExerciseListOut, status_code=status.HTTP_201_CREATED)
def create_exercise_list(
    payload: ExerciseListCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.CREATE)),
) -> ExerciseListOut:
    school_class = class_service.get_class_for_user(db, class_id=payload.turmaId, user=current_user)
    exercise_list = exercise_list_service.create_exercise_list(db, school_class=school_class, payload=payload)
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='exercise_list_create',
        entity_type='exercise_list',
        entity_id=exercise_list.id,
        details={'class_id': school_class.id, 'questions': len(payload.questaoIds)},
    )
    db.commit()
    return exercise_list_service.to_exercise_list_out(exercise_list)


@router.get('/{lista_id}', response_model=ExerciseListOut)
def get_exercise_list(
    lista_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.READ)),
) -> ExerciseListOut:
    return exercise_list_service.to_exercise_list_out(_get_owned_list(db, lista_id, current_user))


@router.patch('/{lista_id}', response_model=ExerciseListOut)
def update_exercise_list(
    lista_id: UUID,
    payload: ExerciseListUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.UPDATE)),
) -> ExerciseListOut:
    exercise_list = _get_owned_list(db, lista_id, current_user)
    exercise_list = exercise_list_service.update_exercise_list(db, exercise_list=exercise_list, payload=payload)
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='exercise_list_update',
        entity_type='exercise_list',
        entity_id=exercise_list.id,
        details={'fields': sorted(payload.model_dump(exclude_unset=True))},
    )
    db.commit()
    return exercise_list_service.to_exercise_list_out(exercise_list)


@router.post('/{lista_id}/publicar', response_model=ExerciseListOut)
def publish_exercise_list(
    lista_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.UPDATE)),
) -> ExerciseListOut:
    exercise_list = _get_owned_list(db, lista_id, current_user)
    exercise_list = exercise_list_service.publish_exercise_list(db, exercise_list=exercise_list)
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='exercise_list_publish',
        entity_type='exercise_list',
        entity_id=exercise_list.id,
    )
    db.commit()
    return exercise_list_service.to_exercise_list_out(exercise_list)


@router.delete('/{lista_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise_list(
    lista_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.HARD_DELETE)),
) -> None:
    exercise_list = _get_owned_list(db, lista_id, current_user)
    list_id = exercise_list.id
    exercise_list_service.delete_exercise_list(db, exercise_list=exercise_list)
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='exercise_list_delete',
        entity_type='exercise_list',
        entity_id=list_id,
    )
    db.commit()
