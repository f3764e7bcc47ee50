import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from turmas.core.config import settings
from turmas.db.session import get_db


logger = logging.getLogger(__name__)

router = APIRouter(tags=['health'])


@router.get('/health')
def health(db: Session = Depends(get_db)) -> dict[str, str]:
    try:
        db.execute(text('select 1'))
        database = 'ok'
    except SQLAlchemyError:
        logger.exception('Database health check failed')
        database = 'unavailable'
    return {'status': 'ok', 'environment': settings.APP_ENV, 'database': database}
