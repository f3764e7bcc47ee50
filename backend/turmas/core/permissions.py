from collections.abc import Iterable


class Permissions:
    CREATE = 'CREATE'
    READ = 'READ'
    UPDATE = 'UPDATE'
    SOFT_DELETE = 'SOFT_DELETE'
    HARD_DELETE = 'HARD_DELETE'
    SOFT_DELETE_ALL = 'SOFT_DELETE_ALL'


ALL_PERMISSIONS: frozenset[str] = frozenset(
    {
        Permissions.CREATE,
        Permissions.READ,
        Permissions.UPDATE,
        Permissions.SOFT_DELETE,
        Permissions.HARD_DELETE,
        Permissions.SOFT_DELETE_ALL,
    }
)

ROLE_PERMISSIONS: dict[str, frozenset[str]] = {
    'member': frozenset({Permissions.READ, Permissions.CREATE}),
    'manager': frozenset(
        {
            Permissions.READ,
            Permissions.CREATE,
            Permissions.UPDATE,
            Permissions.SOFT_DELETE,
        }
    ),
    'professor': frozenset(
        {
            Permissions.READ,
            Permissions.CREATE,
            Permissions.UPDATE,
            Permissions.SOFT_DELETE,
            Permissions.HARD_DELETE,
        }
    ),
    'admin': ALL_PERMISSIONS,
    'aluno': frozenset({Permissions.READ}),
}


def permissions_for_role(role: str | None) -> frozenset[str]:
    if not role:
        return frozenset()
    return ROLE_PERMISSIONS.get(role, frozenset())


def check_permission(role: str | None, permissions: Iterable[str]) -> bool:
    """True when the role holds at least one of ``permissions``."""
    granted = permissions_for_role(role)
    return any(permission in granted for permission in permissions)
