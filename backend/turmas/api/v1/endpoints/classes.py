from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from turmas.api.deps import get_current_active_user, require_permission
from turmas.core.permissions import Permissions
from turmas.db.session import get_db
from turmas.models.rbac import User
from turmas.schemas.exercise_list import ExerciseListOut
from turmas.schemas.school_class import ClassCreate, ClassDetailOut, ClassOut, ClassStudentOut, StudentEnroll, StudentUpdate
from turmas.services import audit_service, class_service, exercise_list_service


router = APIRouter(prefix='/turmas', tags=['turmas'])


@router.get('', response_model=list[ClassOut])
def list_classes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.READ)),
) -> list[ClassOut]:
    return class_service.list_classes(db, user=current_user)


@router.post('', response_model=ClassDetailOut, status_code=status.HTTP_201_CREATED)
def create_class(
    payload: ClassCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.CREATE)),
) -> ClassDetailOut:
    school_class = class_service.create_class(db, payload=payload, teacher=current_user)
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='class_create',
        entity_type='school_class',
        entity_id=school_class.id,
        details={'name': school_class.name, 'serie': school_class.serie},
    )
    db.commit()
    return class_service.to_class_detail(db, school_class)


@router.get('/{turma_id}', response_model=ClassDetailOut)
def get_class(
    turma_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.READ)),
) -> ClassDetailOut:
    school_class = class_service.get_class_for_user(db, class_id=turma_id, user=current_user)
    return class_service.to_class_detail(db, school_class)


@router.get('/{turma_id}/listas', response_model=list[ExerciseListOut])
def list_class_exercise_lists(
    turma_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.READ)),
) -> list[ExerciseListOut]:
    school_class = class_service.get_class_for_user(db, class_id=turma_id, user=current_user)
    rows = exercise_list_service.list_by_class(db, class_id=school_class.id)
    return [exercise_list_service.to_exercise_list_out(row) for row in rows]


@router.post('/{turma_id}/alunos', response_model=ClassStudentOut, status_code=status.HTTP_201_CREATED)
def enroll_student(
    turma_id: UUID,
    payload: StudentEnroll,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.CREATE)),
) -> ClassStudentOut:
    school_class = class_service.get_class_for_user(db, class_id=turma_id, user=current_user)
    student = class_service.enroll_student(db, school_class=school_class, payload=payload)
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='class_student_enroll',
        entity_type='user',
        entity_id=student.id,
        details={'class_id': school_class.id},
    )
    db.commit()
    return class_service.to_student_out(student)


@router.patch('/{turma_id}/alunos/{aluno_id}', response_model=ClassStudentOut)
def update_student(
    turma_id: UUID,
    aluno_id: UUID,
    payload: StudentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.UPDATE)),
) -> ClassStudentOut:
    school_class = class_service.get_class_for_user(db, class_id=turma_id, user=current_user)
    student = class_service.update_student(db, school_class=school_class, student_id=aluno_id, payload=payload)
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='class_student_update',
        entity_type='user',
        entity_id=student.id,
        details={'class_id': school_class.id, 'fields': sorted(payload.model_dump(exclude_unset=True))},
    )
    db.commit()
    return class_service.to_student_out(student)


@router.delete('/{turma_id}/alunos/{aluno_id}', status_code=status.HTTP_204_NO_CONTENT)
def remove_student(
    turma_id: UUID,
    aluno_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    _: User = Depends(require_permission(Permissions.SOFT_DELETE, Permissions.HARD_DELETE)),
) -> None:
    school_class = class_service.get_class_for_user(db, class_id=turma_id, user=current_user)
    student = class_service.remove_student(db, school_class=school_class, student_id=aluno_id)
    audit_service.log_action(
        db,
        actor_user_id=current_user.id,
        action='class_student_remove',
        entity_type='user',
        entity_id=student.id,
        details={'class_id': school_class.id},
    )
    db.commit()
