from fastapi import APIRouter, Depends

from turmas.api.deps import require_roles
from turmas.api.v1.endpoints import auth, classes, exercise_lists, health, questions, students
from turmas.core.route_control import STAFF_ROLES


api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(students.router)
api_router.include_router(classes.router, dependencies=[Depends(require_roles(*STAFF_ROLES))])
api_router.include_router(exercise_lists.router, dependencies=[Depends(require_roles(*STAFF_ROLES))])
api_router.include_router(questions.router, dependencies=[Depends(require_roles(*STAFF_ROLES))])
