from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AccessCodeRequest(BaseModel):
    codigoAcesso: str = Field(min_length=1, max_length=32)


class StudentStatisticsOut(BaseModel):
    totalTentativas: int
    totalAcertos: int
    percentualAcerto: float
    questoesRespondidas: int


class TeacherRef(BaseModel):
    id: UUID
    name: str


class ClassCount(BaseModel):
    alunos: int


class StudentClassOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    nome: str
    serie: str
    professor: TeacherRef
    count: ClassCount = Field(alias='_count')


class StudentAccessOut(BaseModel):
    id: UUID
    nome: str
    codigoAcesso: str
    turma: StudentClassOut
    estatisticas: StudentStatisticsOut


class SubmitAnswerRequest(BaseModel):
    questaoId: UUID
    listaId: UUID
    resposta: str = Field(min_length=1, max_length=5000)
    tempoResposta: int = Field(default=0, ge=0)


class RankingStudentRef(BaseModel):
    id: UUID
    nome: str


class RankingEntryOut(BaseModel):
    posicao: int
    aluno: RankingStudentRef
    estatisticas: StudentStatisticsOut
