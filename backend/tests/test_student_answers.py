from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from turmas.services import student_service


def _answer(client: TestClient, student_id, question_id, list_id, answer: str):
    return client.post(
        f'/api/v1/aluno/{student_id}/resposta',
        json={'questaoId': str(question_id), 'listaId': str(list_id), 'resposta': answer, 'tempoResposta': 30},
    )


def test_submit_answer_numbers_attempts(client: TestClient, seed: SimpleNamespace) -> None:
    first = _answer(client, seed.student, seed.numeric, seed.published_list, '11')
    assert first.status_code == 201, first.text
    assert first.json()['correta'] is False
    assert first.json()['tentativaNumero'] == 1

    second = _answer(client, seed.student, seed.numeric, seed.published_list, ' 12,0 ')
    assert second.status_code == 201, second.text
    payload = second.json()
    assert payload['correta'] is True
    assert payload['tentativaNumero'] == 2
    assert payload['resposta'] == ' 12,0 '
    assert payload['tempoResposta'] == 30
    assert payload['createdAt'].endswith('Z')


def test_multiple_choice_is_case_insensitive(client: TestClient, seed: SimpleNamespace) -> None:
    response = _answer(client, seed.student, seed.multiple_choice, seed.published_list, 'B')
    assert response.status_code == 201
    assert response.json()['correta'] is True


def test_answer_rules(client: TestClient, seed: SimpleNamespace) -> None:
    draft = _answer(client, seed.student, seed.true_false, seed.draft_list, 'F')
    assert draft.status_code == 400

    foreign = _answer(client, seed.student, seed.true_false, seed.other_list, 'F')
    assert foreign.status_code == 403

    outside = _answer(client, seed.student, seed.true_false, seed.published_list, 'F')
    assert outside.status_code == 404
    assert outside.json()['detail'] == 'Questão não pertence a esta lista'

    missing = _answer(client, seed.student, seed.numeric, uuid4(), '12')
    assert missing.status_code == 404

    empty = _answer(client, seed.student, seed.numeric, seed.published_list, '')
    assert empty.status_code == 422


def test_true_false_synonyms(client: TestClient, seed: SimpleNamespace) -> None:
    response = _answer(client, seed.other_student, seed.true_false, seed.other_list, 'falso')
    assert response.status_code == 201
    assert response.json()['correta'] is True


def test_statistics_and_ranking(client: TestClient, seed: SimpleNamespace) -> None:
    _answer(client, seed.student, seed.multiple_choice, seed.published_list, 'a')
    _answer(client, seed.student, seed.multiple_choice, seed.published_list, 'b')
    _answer(client, seed.student, seed.numeric, seed.published_list, '12')
    _answer(client, seed.classmate, seed.multiple_choice, seed.published_list, 'b')
    _answer(client, seed.classmate, seed.numeric, seed.published_list, '10')

    statistics = client.get(f'/api/v1/aluno/{seed.student}/estatisticas')
    assert statistics.status_code == 200
    assert statistics.json() == {
        'totalTentativas': 3,
        'totalAcertos': 2,
        'percentualAcerto': 100.0,
        'questoesRespondidas': 2,
    }

    ranking = client.get(f'/api/v1/aluno/{seed.classmate}/ranking')
    assert ranking.status_code == 200
    entries = ranking.json()
    assert [entry['posicao'] for entry in entries] == [1, 2]
    assert [entry['aluno']['id'] for entry in entries] == [str(seed.student), str(seed.classmate)]
    assert entries[1]['estatisticas']['percentualAcerto'] == 50.0


def test_ranking_ties_are_ordered_by_name(client: TestClient, seed: SimpleNamespace) -> None:
    response = client.get(f'/api/v1/aluno/{seed.student}/ranking')
    assert response.status_code == 200
    assert [entry['aluno']['nome'] for entry in response.json()] == ['Bruno Lima', 'Carla Souza']


def test_statistics_for_student_without_attempts(client: TestClient, seed: SimpleNamespace) -> None:
    response = client.get(f'/api/v1/aluno/{seed.classmate}/estatisticas')
    assert response.status_code == 200
    assert response.json()['percentualAcerto'] == 0.0


def test_submission_echoes_question_for_feedback(client: TestClient, seed: SimpleNamespace) -> None:
    response = _answer(client, seed.student, seed.multiple_choice, seed.published_list, 'a')
    assert response.status_code == 201, response.text
    question = response.json()['questao']
    assert question == {
        'id': str(seed.multiple_choice),
        'enunciado': 'Quanto é 2 + 2?',
        'tipo': 'MULTIPLA_ESCOLHA',
        'explicacao': 'Dois mais dois são quatro.',
        'gabarito': 'b',
        'opcoes': [{'id': 'a', 'texto': '3'}, {'id': 'b', 'texto': '4'}],
    }


def test_taken_attempt_number_is_recounted(
    client: TestClient, seed: SimpleNamespace, monkeypatch: pytest.MonkeyPatch
) -> None:
    assert _answer(client, seed.student, seed.numeric, seed.published_list, '11').status_code == 201

    original = student_service.next_attempt_number
    calls = []

    def stale_then_fresh(db, *, student_id, question_id):
        calls.append(question_id)
        # first count misses the attempt another request just stored
        if len(calls) == 1:
            return 1
        return original(db, student_id=student_id, question_id=question_id)

    monkeypatch.setattr(student_service, 'next_attempt_number', stale_then_fresh)

    response = _answer(client, seed.student, seed.numeric, seed.published_list, '12')
    assert response.status_code == 201, response.text
    assert response.json()['tentativaNumero'] == 2
    assert len(calls) == 2

    statistics = client.get(f'/api/v1/aluno/{seed.student}/estatisticas').json()
    assert statistics['totalTentativas'] == 2


def test_attempt_number_conflict_gives_up_with_409(
    client: TestClient, seed: SimpleNamespace, monkeypatch: pytest.MonkeyPatch
) -> None:
    assert _answer(client, seed.student, seed.numeric, seed.published_list, '11').status_code == 201
    monkeypatch.setattr(student_service, 'next_attempt_number', lambda db, *, student_id, question_id: 1)

    response = _answer(client, seed.student, seed.numeric, seed.published_list, '12')
    assert response.status_code == 409
    assert response.json()['detail'] == 'Resposta enviada em duplicidade. Tente novamente.'

    monkeypatch.undo()
    retry = _answer(client, seed.student, seed.numeric, seed.published_list, '12')
    assert retry.status_code == 201
    assert retry.json()['tentativaNumero'] == 2
