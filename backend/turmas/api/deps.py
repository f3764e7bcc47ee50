from collections.abc import Callable
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from turmas.core.permissions import check_permission
from turmas.core.security import TokenDecodeError, decode_access_token
from turmas.db.session import get_db
from turmas.models.rbac import User


# Access tokens are issued by the external identity provider; this API only verifies them.
bearer_scheme = HTTPBearer(auto_error=False, description='Access token issued by the identity provider')


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Not authenticated',
            headers={'WWW-Authenticate': 'Bearer'},
        )

    try:
        payload = decode_access_token(credentials.credentials)
        subject = payload.get('sub')
        if not subject:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid access token subject')
        user_id = UUID(subject)
    except (TokenDecodeError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid access token') from exc

    user = db.scalar(select(User).where(User.id == user_id))
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='User not found')

    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Inactive user')
    return current_user


def require_roles(*required_roles: str) -> Callable:
    required_set = set(required_roles)

    def role_checker(current_user: User = Depends(get_current_active_user)) -> User:
        if current_user.role == 'admin':
            return current_user

        if current_user.role not in required_set:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail='Insufficient role permissions',
            )
        return current_user

    return role_checker


def require_permission(*permissions: str) -> Callable:
    def permission_checker(current_user: User = Depends(get_current_active_user)) -> User:
        if not check_permission(current_user.role, permissions):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Insufficient permissions')
        return current_user

    return permission_checker
