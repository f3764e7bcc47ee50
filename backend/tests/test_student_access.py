from types import SimpleNamespace

from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from turmas.api.v1.endpoints.students import access_rate_limiter
from turmas.models.audit import AuditLog


def test_access_with_valid_code(client: TestClient, seed: SimpleNamespace) -> None:
    response = client.post('/api/v1/aluno/acesso', json={'codigoAcesso': ' abc-123 '})
    assert response.status_code == 200, response.text

    payload = response.json()
    assert payload['id'] == str(seed.student)
    assert payload['nome'] == 'Carla Souza'
    assert payload['codigoAcesso'] == 'ABC123'
    assert payload['turma']['id'] == str(seed.school_class)
    assert payload['turma']['serie'] == 'TERCEIRO_ANO'
    assert payload['turma']['professor'] == {'id': str(seed.teacher), 'name': 'Professora Ana'}
    assert payload['turma']['_count'] == {'alunos': 2}
    assert payload['estatisticas']['totalTentativas'] == 0


def test_access_code_errors(client: TestClient) -> None:
    wrong_length = client.post('/api/v1/aluno/acesso', json={'codigoAcesso': 'AB1'})
    assert wrong_length.status_code == 400

    unknown = client.post('/api/v1/aluno/acesso', json={'codigoAcesso': 'ZZZ999'})
    assert unknown.status_code == 404
    assert unknown.json()['detail'] == 'Código de acesso inválido'

    no_class = client.post('/api/v1/aluno/acesso', json={'codigoAcesso': 'NOC001'})
    assert no_class.status_code == 400


def test_access_is_rate_limited(client: TestClient) -> None:
    for _ in range(access_rate_limiter.max_requests):
        assert client.post('/api/v1/aluno/acesso', json={'codigoAcesso': 'ZZZ999'}).status_code == 404

    blocked = client.post('/api/v1/aluno/acesso', json={'codigoAcesso': 'ABC123'})
    assert blocked.status_code == 429


def test_access_attempts_are_audited(client: TestClient, db_session: Session, seed: SimpleNamespace) -> None:
    client.post('/api/v1/aluno/acesso', json={'codigoAcesso': 'ZZZ999'})
    client.post('/api/v1/aluno/acesso', json={'codigoAcesso': 'ABC123'})

    rows = db_session.scalars(select(AuditLog).where(AuditLog.action == 'student_access')).all()
    assert sorted(row.status for row in rows) == ['failure', 'success']
    success = next(row for row in rows if row.status == 'success')
    assert success.actor_user_id == seed.student
    assert success.ip_address
