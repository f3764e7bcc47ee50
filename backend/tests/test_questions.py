from types import SimpleNamespace

from fastapi.testclient import TestClient

from tests.conftest import auth_header


def _payload(**overrides) -> dict:
    payload = {
        'titulo': 'Capital do Brasil',
        'enunciado': 'Qual é a capital do Brasil?',
        'tipo': 'MULTIPLA_ESCOLHA',
        'opcoes': [{'id': 'a', 'texto': 'Rio de Janeiro'}, {'id': 'b', 'texto': 'Brasília'}],
        'gabarito': 'b',
        'dificuldade': 2,
        'serie': 'QUINTO_ANO',
        'habilidades': ['EF05GE01'],
    }
    payload.update(overrides)
    return payload


def test_create_and_get_question(client: TestClient, seed: SimpleNamespace) -> None:
    created = client.post('/api/v1/questoes', headers=auth_header(seed.teacher), json=_payload())
    assert created.status_code == 201, created.text
    question = created.json()
    assert question['titulo'] == 'Capital do Brasil'
    assert question['tipo'] == 'MULTIPLA_ESCOLHA'
    assert question['habilidades'] == ['EF05GE01']

    fetched = client.get(f"/api/v1/questoes/{question['id']}", headers=auth_header(seed.teacher))
    assert fetched.status_code == 200
    assert fetched.json()['gabarito'] == 'b'


def test_multiple_choice_answer_must_be_an_option(client: TestClient, seed: SimpleNamespace) -> None:
    response = client.post('/api/v1/questoes', headers=auth_header(seed.teacher), json=_payload(gabarito='c'))
    assert response.status_code == 422


def test_list_questions_with_filters(client: TestClient, seed: SimpleNamespace) -> None:
    headers = auth_header(seed.teacher)

    everything = client.get('/api/v1/questoes', headers=headers)
    assert everything.status_code == 200
    assert everything.json()['meta']['total'] == 3

    by_serie = client.get('/api/v1/questoes', headers=headers, params={'serie': 'QUARTO_ANO'})
    assert [row['id'] for row in by_serie.json()['items']] == [str(seed.true_false)]

    by_type = client.get('/api/v1/questoes', headers=headers, params={'tipo': 'NUMERO'})
    assert [row['id'] for row in by_type.json()['items']] == [str(seed.numeric)]

    by_text = client.get('/api/v1/questoes', headers=headers, params={'busca': 'SOMA'})
    assert [row['id'] for row in by_text.json()['items']] == [str(seed.multiple_choice)]

    paged = client.get('/api/v1/questoes', headers=headers, params={'page': 2, 'page_size': 2})
    assert len(paged.json()['items']) == 1


def test_question_in_use_cannot_be_deleted(client: TestClient, seed: SimpleNamespace) -> None:
    response = client.delete(f'/api/v1/questoes/{seed.numeric}', headers=auth_header(seed.teacher))
    assert response.status_code == 409


def test_unused_question_is_deleted(client: TestClient, seed: SimpleNamespace) -> None:
    question = client.post(
        '/api/v1/questoes',
        headers=auth_header(seed.teacher),
        json=_payload(tipo='TEXTO_CURTO', opcoes=None, gabarito='Brasília'),
    ).json()

    deleted = client.delete(f"/api/v1/questoes/{question['id']}", headers=auth_header(seed.teacher))
    assert deleted.status_code == 204
    assert client.get(f"/api/v1/questoes/{question['id']}", headers=auth_header(seed.teacher)).status_code == 404


def test_member_cannot_delete_questions(client: TestClient, seed: SimpleNamespace) -> None:
    response = client.delete(f'/api/v1/questoes/{seed.true_false}', headers=auth_header(seed.member))
    assert response.status_code == 403
