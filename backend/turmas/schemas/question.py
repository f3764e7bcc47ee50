from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from turmas.schemas.common import BaseSchema, PaginatedResponse
from turmas.schemas.school_class import Serie


QuestionType = Literal['MULTIPLA_ESCOLHA', 'NUMERO', 'VERDADEIRO_FALSO', 'TEXTO_CURTO']


class QuestionOption(BaseModel):
    id: str = Field(min_length=1, max_length=20)
    texto: str = Field(min_length=1, max_length=1000)


class QuestionCreate(BaseModel):
    titulo: str = Field(min_length=2, max_length=200)
    enunciado: str = Field(min_length=1)
    tipo: QuestionType
    opcoes: list[QuestionOption] | None = None
    gabarito: str = Field(min_length=1, max_length=1000)
    explicacao: str | None = None
    dificuldade: int = Field(default=1, ge=1, le=5)
    serie: Serie
    habilidades: list[str] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_options(self) -> 'QuestionCreate':
        if self.tipo != 'MULTIPLA_ESCOLHA':
            return self
        if not self.opcoes or len(self.opcoes) < 2:
            raise ValueError('Multiple choice questions need at least two options')
        option_ids = [option.id for option in self.opcoes]
        if len(set(option_ids)) != len(option_ids):
            raise ValueError('Option ids must be unique')
        if self.gabarito not in option_ids:
            raise ValueError('gabarito must be the id of one of the options')
        return self


class QuestionOut(BaseSchema):
    id: UUID
    titulo: str = Field(validation_alias='title')
    enunciado: str = Field(validation_alias='prompt')
    tipo: str = Field(validation_alias='question_type')
    opcoes: list[dict] | None = Field(validation_alias='options')
    gabarito: str = Field(validation_alias='answer_key')
    explicacao: str | None = Field(validation_alias='explanation')
    dificuldade: int = Field(validation_alias='difficulty')
    serie: str
    habilidades: list[str] = Field(validation_alias='skills')
    createdAt: datetime = Field(validation_alias='created_at')


QuestionListResponse = PaginatedResponse[QuestionOut]
