from typing import Any
from uuid import UUID

from pydantic import BaseModel


class AttemptOut(BaseModel):
    id: UUID
    resposta: str
    correta: bool
    tentativaNumero: int
    tempoResposta: int
    createdAt: str | None = None


class QuestionProgressOut(BaseModel):
    id: UUID
    enunciado: str
    tipo: str
    opcoes: Any = None
    gabarito: str
    explicacao: str | None = None
    dificuldade: int
    tentativas: list[AttemptOut]
    acertou: bool
    numeroTentativas: int


class ProgressOut(BaseModel):
    total: int
    respondidas: int
    corretas: int
    percentualAcerto: float


class ExerciseListSummary(BaseModel):
    """
    Student view of an exercise list. ``dataFim`` is only set when the list has
    a due date; responses are serialized with ``exclude_unset`` so it is left
    out of the JSON otherwise.
    """

    id: UUID
    titulo: str
    descricao: str | None = None
    dataInicio: str | None = None
    dataFim: str | None = None
    ativa: bool
    questoes: list[QuestionProgressOut]
    progresso: ProgressOut


class AnsweredQuestionOut(BaseModel):
    id: UUID
    enunciado: str
    tipo: str
    explicacao: str | None = None
    gabarito: str
    opcoes: Any = None


class SubmittedAttemptOut(AttemptOut):
    """Attempt echoed back after submission, with the question so the client can show feedback."""

    questao: AnsweredQuestionOut
