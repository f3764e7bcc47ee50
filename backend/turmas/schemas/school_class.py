from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from turmas.schemas.common import BaseSchema


Serie = Literal['PRIMEIRO_ANO', 'SEGUNDO_ANO', 'TERCEIRO_ANO', 'QUARTO_ANO', 'QUINTO_ANO']


class ClassCreate(BaseModel):
    nome: str = Field(min_length=2, max_length=200)
    serie: Serie


class ClassOut(BaseSchema):
    id: UUID
    nome: str
    serie: str
    professorId: UUID
    totalAlunos: int
    totalListas: int
    createdAt: datetime


class ClassStudentOut(BaseSchema):
    id: UUID
    nome: str
    responsavel: str | None
    dataNascimento: date | None
    codigoAcesso: str | None


class ClassDetailOut(ClassOut):
    alunos: list[ClassStudentOut]


class StudentEnroll(BaseModel):
    nome: str = Field(min_length=2, max_length=255)
    responsavel: str = Field(min_length=2, max_length=255)
    dataNascimento: date | None = None


class StudentUpdate(BaseModel):
    nome: str | None = Field(default=None, min_length=2, max_length=255)
    responsavel: str | None = Field(default=None, min_length=2, max_length=255)
    dataNascimento: date | None = None
