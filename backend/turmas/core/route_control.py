"""
Page access table consumed by the frontend route guard.

Paths may contain bracketed dynamic segments (``/professor/turmas/[turmaId]``);
each bracketed segment matches exactly one non-empty path segment. Entries are
checked in order and the first match decides.
"""

import re
from functools import lru_cache


STAFF_ROLES = ('member', 'manager', 'admin', 'professor')

PUBLIC_ROUTES: tuple[str, ...] = (
    '/login',
    '/auth/verify-token',
    '/unauthorized',
    '/aluno',
    '/aluno/[alunoId]/dashboard',
    '/aluno/[alunoId]/atividades/[listaId]',
)

ROUTE_PERMISSIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ('/', STAFF_ROLES),
    ('/admin-page', ('admin',)),
    ('/member-page', ('member',)),
    ('/professor', ('professor', 'admin')),
    ('/professor/turmas/[turmaId]', ('professor', 'admin')),
    ('/professor/questoes', ('professor', 'admin')),
    ('/professor/questoes/[questaoId]', ('professor', 'admin')),
)

_DYNAMIC_SEGMENT_RE = re.compile(r'\[([^\]]+)\]')


@lru_cache(maxsize=128)
def _compile(pattern: str) -> re.Pattern[str]:
    parts = _DYNAMIC_SEGMENT_RE.split(pattern)
    # split() alternates literal text and captured segment names.
    regex = ''.join(re.escape(part) if index % 2 == 0 else '[^/]+' for index, part in enumerate(parts))
    return re.compile(f'^{regex}$')


def path_matches(pattern: str, path: str) -> bool:
    if path == pattern:
        return True
    return _compile(pattern).match(path) is not None


def is_public_route(path: str) -> bool:
    return any(path_matches(pattern, path) for pattern in PUBLIC_ROUTES)


def check_route_permission(path: str, role: str | None) -> bool:
    for pattern, roles_allowed in ROUTE_PERMISSIONS:
        if path_matches(pattern, path):
            return role in roles_allowed
    return False
