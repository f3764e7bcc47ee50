import pytest

from turmas.core.permissions import Permissions, check_permission, permissions_for_role
from turmas.core.route_control import check_route_permission, is_public_route, path_matches


@pytest.mark.parametrize(
    ('path', 'role', 'expected'),
    [
        ('/', 'member', True),
        ('/', 'aluno', False),
        ('/admin-page', 'admin', True),
        ('/admin-page', 'member', False),
        ('/professor', 'professor', True),
        ('/professor/turmas/3f1c', 'professor', True),
        ('/professor/turmas/3f1c', 'member', False),
        ('/professor/questoes/abc', 'admin', True),
        ('/professor/turmas', 'professor', False),
        ('/unknown', 'admin', False),
    ],
)
def test_check_route_permission(path: str, role: str, expected: bool) -> None:
    assert check_route_permission(path, role) is expected


def test_dynamic_segment_matches_exactly_one_segment() -> None:
    assert path_matches('/professor/turmas/[turmaId]', '/professor/turmas/42')
    assert not path_matches('/professor/turmas/[turmaId]', '/professor/turmas/')
    assert not path_matches('/professor/turmas/[turmaId]', '/professor/turmas/42/alunos')


def test_public_routes() -> None:
    assert is_public_route('/login')
    assert is_public_route('/aluno/123/dashboard')
    assert is_public_route('/aluno/123/atividades/456')
    assert not is_public_route('/professor')
    assert check_route_permission('/login', None) is False


def test_role_permissions() -> None:
    assert check_permission('member', [Permissions.CREATE])
    assert not check_permission('member', [Permissions.UPDATE])
    assert check_permission('manager', [Permissions.SOFT_DELETE])
    assert not check_permission('manager', [Permissions.HARD_DELETE])
    assert check_permission('professor', [Permissions.HARD_DELETE])
    assert not check_permission('professor', [Permissions.SOFT_DELETE_ALL])
    assert check_permission('admin', [Permissions.SOFT_DELETE_ALL])
    assert check_permission('aluno', [Permissions.READ])
    assert not check_permission('aluno', [Permissions.CREATE])


def test_check_permission_accepts_any_of_the_requested() -> None:
    assert check_permission('manager', [Permissions.HARD_DELETE, Permissions.SOFT_DELETE])
    assert not check_permission('unknown', [Permissions.READ])
    assert not check_permission('admin', [])
    assert permissions_for_role('nobody') == frozenset()
