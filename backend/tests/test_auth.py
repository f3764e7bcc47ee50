from datetime import timedelta
from types import SimpleNamespace

from fastapi.testclient import TestClient

from tests.conftest import auth_header
from turmas.core.security import create_access_token


def test_me_returns_role_and_permissions(client: TestClient, seed: SimpleNamespace) -> None:
    response = client.get('/api/v1/auth/me', headers=auth_header(seed.manager))
    assert response.status_code == 200
    payload = response.json()
    assert payload['role'] == 'manager'
    assert payload['permissions'] == ['CREATE', 'READ', 'SOFT_DELETE', 'UPDATE']


def test_expired_token_is_rejected(client: TestClient, seed: SimpleNamespace) -> None:
    token = create_access_token(str(seed.teacher), expires_delta=timedelta(minutes=-1))
    response = client.get('/api/v1/auth/me', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 401


def test_route_permission(client: TestClient, seed: SimpleNamespace) -> None:
    teacher = auth_header(seed.teacher)

    allowed = client.get('/api/v1/auth/route-permission', headers=teacher, params={'path': '/professor/turmas/42'})
    assert allowed.json() == {'path': '/professor/turmas/42', 'allowed': True, 'public': False}

    denied = client.get('/api/v1/auth/route-permission', headers=teacher, params={'path': '/admin-page'})
    assert denied.json()['allowed'] is False

    public = client.get('/api/v1/auth/route-permission', headers=teacher, params={'path': '/aluno/1/dashboard'})
    assert public.json() == {'path': '/aluno/1/dashboard', 'allowed': True, 'public': True}


def test_health(client: TestClient) -> None:
    response = client.get('/api/v1/health')
    assert response.status_code == 200
    assert response.json() == {'status': 'ok', 'environment': 'test', 'database': 'ok'}


def test_missing_or_malformed_bearer_is_rejected(client: TestClient) -> None:
    missing = client.get('/api/v1/auth/me')
    assert missing.status_code == 401
    assert missing.headers['www-authenticate'] == 'Bearer'

    basic = client.get('/api/v1/auth/me', headers={'Authorization': 'Basic dXNlcjpwYXNz'})
    assert basic.status_code == 401


def test_openapi_declares_bearer_scheme_without_token_url(client: TestClient) -> None:
    schemes = client.get('/api/v1/openapi.json').json()['components']['securitySchemes']
    assert schemes['HTTPBearer']['type'] == 'http'
    assert schemes['HTTPBearer']['scheme'] == 'bearer'
    assert 'flows' not in schemes['HTTPBearer']
