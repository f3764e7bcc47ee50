from fastapi import APIRouter, Depends, Query

from turmas.api.deps import get_current_active_user
from turmas.core.permissions import permissions_for_role
from turmas.core.route_control import check_route_permission, is_public_route
from turmas.models.rbac import User
from turmas.schemas.auth import RoutePermissionOut, UserSummary


router = APIRouter(prefix='/auth', tags=['auth'])


def _to_user_summary(user: User) -> UserSummary:
    return UserSummary(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        role=user.role,
        is_active=user.is_active,
        permissions=sorted(permissions_for_role(user.role)),
    )


@router.get('/me', response_model=UserSummary)
def me(current_user: User = Depends(get_current_active_user)) -> UserSummary:
    return _to_user_summary(current_user)


@router.get('/route-permission', response_model=RoutePermissionOut)
def route_permission(
    path: str = Query(min_length=1, max_length=500),
    current_user: User = Depends(get_current_active_user),
) -> RoutePermissionOut:
    public = is_public_route(path)
    allowed = public or check_route_permission(path, current_user.role)
    return RoutePermissionOut(path=path, allowed=allowed, public=public)
