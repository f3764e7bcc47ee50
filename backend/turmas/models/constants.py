ROLE_VALUES = [
    'admin',
    'manager',
    'member',
    'professor',
    'aluno',
]

STUDENT_ROLE = 'aluno'
TEACHER_ROLE = 'professor'

SERIE_VALUES = [
    'PRIMEIRO_ANO',
    'SEGUNDO_ANO',
    'TERCEIRO_ANO',
    'QUARTO_ANO',
    'QUINTO_ANO',
]

QUESTION_TYPE_VALUES = [
    'MULTIPLA_ESCOLHA',
    'NUMERO',
    'VERDADEIRO_FALSO',
    'TEXTO_CURTO',
]

LIST_STATUS_DRAFT = 'RASCUNHO'
LIST_STATUS_PUBLISHED = 'PUBLICADO'
LIST_STATUS_VALUES = [LIST_STATUS_DRAFT, LIST_STATUS_PUBLISHED]

DIFFICULTY_MIN = 1
DIFFICULTY_MAX = 5


def sql_in(values: list[str]) -> str:
    return ', '.join(f"'{value}'" for value in values)
