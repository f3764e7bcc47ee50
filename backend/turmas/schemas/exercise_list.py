from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from turmas.schemas.common import BaseSchema


def _unique_ids(value: list[UUID] | None) -> list[UUID] | None:
    if value is not None and len(set(value)) != len(value):
        raise ValueError('questaoIds must not contain duplicates')
    return value


class ExerciseListCreate(BaseModel):
    turmaId: UUID
    titulo: str = Field(min_length=2, max_length=200)
    descricao: str | None = None
    dataLiberacao: datetime | None = None
    dataLimite: datetime | None = None
    questaoIds: list[UUID] = Field(default_factory=list)

    @field_validator('questaoIds')
    @classmethod
    def validate_question_ids(cls, value: list[UUID] | None) -> list[UUID] | None:
        return _unique_ids(value)


class ExerciseListUpdate(BaseModel):
    titulo: str | None = Field(default=None, min_length=2, max_length=200)
    descricao: str | None = None
    dataLiberacao: datetime | None = None
    dataLimite: datetime | None = None
    questaoIds: list[UUID] | None = None

    @field_validator('questaoIds')
    @classmethod
    def validate_question_ids(cls, value: list[UUID] | None) -> list[UUID] | None:
        return _unique_ids(value)


class ListQuestionOut(BaseSchema):
    id: UUID
    titulo: str
    serie: str
    ordem: int


class ExerciseListOut(BaseSchema):
    id: UUID
    turmaId: UUID
    titulo: str
    descricao: str | None
    status: str
    dataLiberacao: datetime | None
    dataLimite: datetime | None
    questoes: list[ListQuestionOut]
    createdAt: datetime
